import inspect

import pandas as pd

from ggspring.spring import DEFAULT_DIAMETER, DEFAULT_N, DEFAULT_TENSION, create_spring
from ggspring.utils import remove_missing


_GEOMS: dict[str, type] = {}


def register_geom(name, cls=None):
    def register(cls):
        cls.name = name
        _GEOMS[name] = cls
        return cls
    return register(cls) if cls is not None else register


def get_geom(geom):
    if isinstance(geom, Geom):
        return geom
    if isinstance(geom, type) and issubclass(geom, Geom):
        return geom()
    if isinstance(geom, str):
        if geom not in _GEOMS:
            raise ValueError(f"Unknown geom '{geom}', expected one of {', '.join(sorted(_GEOMS))}")
        return _GEOMS[geom]()
    raise TypeError(f"Expected a geom name, Geom class or Geom instance, got {type(geom).__name__}")


def linetype_gg_to_plotly(gg_linetype):
    linetype_dict = {
        "solid": "solid",
        "dashed": "dash",
        "dotted": "dot",
        "longdash": "longdash",
        "dotdash": "dashdot"
    }
    if gg_linetype not in linetype_dict:
        raise ValueError(f"Unrecognized linetype {gg_linetype}, expected one of {', '.join(linetype_dict)}")
    return linetype_dict[gg_linetype]


def is_missing(value):
    return value is None or (not isinstance(value, (list, tuple)) and pd.isna(value))


class Geom:
    name = None
    required_aes = ()
    optional_aes = ()
    non_missing_aes = ()
    default_aes = {}
    extra_params = ("na_rm",)
    # aesthetic -> (plotly trace argument, default)
    aes_to_arg = {}
    # Trace arguments that may hold one value per row.
    vectorized_args = ()

    @property
    def label(self):
        return f"geom_{self.name}"

    def aesthetics(self):
        return ("group", *self.required_aes, *self.optional_aes, *self.default_aes)

    def parameters(self):
        draw_params = [
            param.name for param in inspect.signature(self.draw_panel).parameters.values()
            if param.name not in ("data", "fig", "row", "col", "legend_cache") and param.kind is not inspect.Parameter.VAR_KEYWORD
        ]
        return (*draw_params, *self.extra_params)

    def check_required_aesthetics(self, data):
        missing = [aes_name for aes_name in self.required_aes if aes_name not in data.columns]
        if missing:
            raise ValueError(f"{self.label} requires the following missing aesthetics: {', '.join(missing)}")

    def setup_data(self, data, params):
        return data

    def handle_na(self, data, params):
        return remove_missing(data, (*self.required_aes, *self.non_missing_aes), params.get("na_rm", False), self.label)

    def use_defaults(self, data, aes_params):
        missing = {aes_name: default for aes_name, default in self.default_aes.items() if aes_name not in data.columns}
        return data.assign(**{**missing, **aes_params})

    def draw_panel(self, data, fig, row, col, legend_cache, **params):
        raise NotImplementedError(f"{self.__class__.__name__} does not implement draw_panel")

    def _add_aesthetics_to_trace_args(self, trace_args, df):
        for aes_name, (plotly_name, default) in self.aes_to_arg.items():
            value = None
            if aes_name in df.columns and len(df) > 0:
                column = df[aes_name]
                if plotly_name in self.vectorized_args and column.nunique(dropna=False) > 1:
                    value = column.tolist()
                elif not is_missing(column.iloc[0]):
                    value = column.iloc[0]
            if value is None:
                value = default
            if value is None:
                continue
            if aes_name == "linetype":
                value = linetype_gg_to_plotly(value)
            elif plotly_name == "name":
                value = str(value)
            trace_args[plotly_name] = value

    def _update_legend_trace_args(self, trace_args, legend_cache):
        if "name" in trace_args and legend_cache is not None:
            trace_args["legendgroup"] = trace_args["name"]
            if trace_args["name"] in legend_cache:
                trace_args["showlegend"] = False
            else:
                trace_args["showlegend"] = True
                legend_cache.add(trace_args["name"])
        else:
            trace_args["showlegend"] = False


@register_geom("point")
class GeomPoint(Geom):
    required_aes = ("x", "y")
    optional_aes = ("tooltip",)
    non_missing_aes = ("size", "color")
    default_aes = {"color": "black", "size": None, "alpha": None}
    aes_to_arg = {
        "color": ("marker_color", "black"),
        "size": ("marker_size", None),
        "tooltip": ("hovertext", None),
        "color_legend": ("name", None),
        "alpha": ("marker_opacity", None)
    }
    vectorized_args = ("marker_color", "marker_size", "marker_opacity", "hovertext")

    def draw_panel(self, data, fig, row, col, legend_cache):
        def plot_group(df):
            trace_args = {
                "x": df.x,
                "y": df.y,
                "mode": "markers",
                "row": row,
                "col": col
            }

            self._add_aesthetics_to_trace_args(trace_args, df)
            self._update_legend_trace_args(trace_args, legend_cache)

            fig.add_scatter(**trace_args)

        for _, group_df in data.groupby("group", sort=False):
            plot_group(group_df)


class GeomLineBasic(Geom):
    optional_aes = ("tooltip",)
    non_missing_aes = ("size", "color", "linetype")
    default_aes = {"color": "black", "size": None, "alpha": None, "linetype": "solid"}
    aes_to_arg = {
        "color": ("line_color", "black"),
        "size": ("line_width", None),
        "alpha": ("opacity", None),
        "linetype": ("line_dash", "solid"),
        "tooltip": ("hovertext", None),
        "color_legend": ("name", None)
    }

    def _add_line(self, fig, x, y, df, row, col, legend_cache):
        trace_args = {
            "x": x,
            "y": y,
            "mode": "lines",
            "row": row,
            "col": col
        }

        self._add_aesthetics_to_trace_args(trace_args, df)
        self._update_legend_trace_args(trace_args, legend_cache)

        fig.add_scatter(**trace_args)


@register_geom("path")
class GeomPath(GeomLineBasic):
    """Connect observations in the order they appear in the data, one line per group."""

    required_aes = ("x", "y")

    def draw_panel(self, data, fig, row, col, legend_cache):
        for _, group_df in data.groupby("group", sort=False):
            # A path needs at least two points.
            if len(group_df) < 2:
                continue
            self._add_line(fig, group_df.x, group_df.y, group_df, row, col, legend_cache)


@register_geom("segment")
class GeomSegment(GeomLineBasic):
    required_aes = ("x", "y", "xend", "yend")

    def draw_panel(self, data, fig, row, col, legend_cache):
        for i in range(len(data)):
            row_df = data.iloc[[i]]
            self._add_line(fig, [row_df.x.iloc[0], row_df.xend.iloc[0]], [row_df.y.iloc[0], row_df.yend.iloc[0]], row_df, row, col, legend_cache)


@register_geom("spring")
class GeomSpring(GeomLineBasic):
    """Draw a coil spring from x/y to xend/yend for every row.

    The coil is computed here rather than in a stat, so it is built from the
    scaled ``diameter`` and ``tension`` aesthetics.
    """

    required_aes = ("x", "y", "xend", "yend")
    optional_aes = ("diameter", "tension", "tooltip")
    non_missing_aes = ("size", "color", "linetype", "diameter", "tension")
    default_aes = {**GeomLineBasic.default_aes, "diameter": DEFAULT_DIAMETER, "tension": DEFAULT_TENSION}

    def draw_panel(self, data, fig, row, col, legend_cache, n=DEFAULT_N):
        for i in range(len(data)):
            row_df = data.iloc[[i]]
            spring = row_df.iloc[0]
            spring_path = create_spring(spring["x"], spring["y"], spring["xend"], spring["yend"], spring["diameter"], spring["tension"], n)
            if len(spring_path) < 2:
                continue
            self._add_line(fig, spring_path.x, spring_path.y, row_df, row, col, legend_cache)
