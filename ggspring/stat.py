import inspect

import pandas as pd
from pandas.api.types import is_numeric_dtype

from ggspring.spring import DEFAULT_DIAMETER, DEFAULT_N, DEFAULT_TENSION, check_spring_params, create_spring
from ggspring.utils import concat_frames, remove_missing


_STATS: dict[str, type] = {}


def register_stat(name, cls=None):
    def register(cls):
        cls.name = name
        _STATS[name] = cls
        return cls
    return register(cls) if cls is not None else register


def get_stat(stat):
    if isinstance(stat, Stat):
        return stat
    if isinstance(stat, type) and issubclass(stat, Stat):
        return stat()
    if isinstance(stat, str):
        if stat not in _STATS:
            raise ValueError(f"Unknown stat '{stat}', expected one of {', '.join(sorted(_STATS))}")
        return _STATS[stat]()
    raise TypeError(f"Expected a stat name, Stat class or Stat instance, got {type(stat).__name__}")


class Stat:
    name = None
    required_aes = ()
    optional_aes = ()
    dropped_aes = ()
    # Aesthetics the stat computes.
    default_aes = {}
    extra_params = ("na_rm",)

    @property
    def label(self):
        return f"stat_{self.name}"

    def aesthetics(self):
        return ("group", *self.required_aes, *self.optional_aes, *self.default_aes)

    def _compute_params(self):
        names = []
        for method in (self.compute_panel, self.compute_group):
            for param in inspect.signature(method).parameters.values():
                if param.name not in ("data", "scales") and param.kind is not inspect.Parameter.VAR_KEYWORD and param.name not in names:
                    names.append(param.name)
        return names

    def parameters(self):
        return (*self._compute_params(), *self.extra_params)

    def check_required_aesthetics(self, data):
        missing = [aes_name for aes_name in self.required_aes if aes_name not in data.columns]
        if missing:
            raise ValueError(f"{self.label} requires the following missing aesthetics: {', '.join(missing)}")

    def setup_params(self, data, params):
        return params

    def setup_data(self, data, params):
        return data

    def compute_layer(self, data, params, scales):
        data = remove_missing(data, self.required_aes, params.get("na_rm", False), self.label)
        compute_params = {k: v for k, v in params.items() if k in self._compute_params()}
        return concat_frames(
            [self.compute_panel(panel_data.reset_index(drop=True), scales, **compute_params) for _, panel_data in data.groupby("PANEL", sort=True)],
            columns=[c for c in data.columns if c not in self.dropped_aes],
        )

    def compute_panel(self, data, scales, **params):
        results = []
        for _, group_data in data.groupby("group", sort=False):
            result = self.compute_group(group_data.reset_index(drop=True), scales, **params)
            # Carry over columns that are constant within the group.
            constant = {col: group_data[col].iloc[0] for col in group_data.columns if col not in result.columns and group_data[col].nunique(dropna=False) <= 1}
            results.append(result.assign(**constant))
        return concat_frames(results)

    def compute_group(self, data, scales, **params):
        raise NotImplementedError(f"{self.__class__.__name__} does not implement compute_group")


@register_stat("identity")
class StatIdentity(Stat):
    def compute_layer(self, data, params, scales):
        return data


@register_stat("spring")
class StatSpring(Stat):
    """Replace every x/y -> xend/yend row with the points of a coil spring."""

    required_aes = ("x", "y", "xend", "yend")
    optional_aes = ("diameter", "tension")
    dropped_aes = ("xend", "yend")
    extra_params = ("na_rm", "diameter", "tension")

    def setup_params(self, data, params):
        params = {"diameter": DEFAULT_DIAMETER, "tension": DEFAULT_TENSION, "n": DEFAULT_N, **params}
        check_spring_params(params["diameter"], params["tension"], params["n"])
        for aes_name in self.required_aes:
            if data[aes_name].notna().any() and not is_numeric_dtype(data[aes_name]):
                raise ValueError(f"{self.label} requires continuous values for '{aes_name}', got {data[aes_name].dtype}")
        return params

    def setup_data(self, data, params):
        data = data.assign(**{aes_name: params[aes_name] for aes_name in self.optional_aes if aes_name not in data.columns})
        # Every row is its own spring, so groups must not be shared between rows.
        if data["group"].duplicated().any():
            data = data.assign(group=[f"{group}-{i}" for i, group in enumerate(data["group"], start=1)])
        return data

    def compute_panel(self, data, scales, n=DEFAULT_N):
        cols_to_keep = [col for col in data.columns if col not in ("x", "y", "xend", "yend")]
        springs = []
        for i in range(len(data)):
            row = data.iloc[i]
            spring_path = create_spring(row["x"], row["y"], row["xend"], row["yend"], row["diameter"], row["tension"], n)
            springs.append(spring_path.assign(**{col: row[col] for col in cols_to_keep}))
        return concat_frames(springs, columns=["x", "y", *cols_to_keep])
