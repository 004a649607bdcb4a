import abc
from typing import Optional, Sequence

import numpy as np
import pandas as pd
import plotly.express as px
from pandas.api.types import is_numeric_dtype

from ggspring.utils import warning


X_AESTHETICS = ("x", "xend")
Y_AESTHETICS = ("y", "yend")
UNSCALED_AESTHETICS = ("group", "PANEL", "label", "tooltip")

TRANSFORMATIONS = ("identity", "log10", "reverse")


def scale_family(aesthetic_name: str) -> str:
    if aesthetic_name in X_AESTHETICS:
        return "x"
    if aesthetic_name in Y_AESTHETICS:
        return "y"
    return aesthetic_name


def is_discrete_values(values: pd.Series) -> bool:
    return not is_numeric_dtype(values) or pd.api.types.is_bool_dtype(values)


def categories_of(values: pd.Series) -> list:
    return list(pd.Categorical(values.dropna()).categories)


class Scale:
    # Discrete scales keep the unmapped values in an `<aes>_legend` column.
    legend = True

    def __init__(self, aesthetic_name):
        self.aesthetic_name = aesthetic_name

    @property
    def aesthetics(self) -> Sequence[str]:
        return (self.aesthetic_name,)

    def transform_data(self, values: pd.Series) -> pd.Series:
        return values

    def reset(self):
        pass

    def train(self, values: pd.Series):
        pass

    def map(self, values: pd.Series) -> pd.Series:
        return values

    @abc.abstractmethod
    def is_discrete(self):
        pass

    @abc.abstractmethod
    def is_continuous(self):
        pass

    def is_position(self):
        return False

    def valid_dtype(self, values: pd.Series):
        return True

    def apply_to_fig(self, parent, fig_so_far):
        pass

    def __repr__(self):
        return f"{self.__class__.__name__}({self.aesthetic_name!r})"


class PositionScale(Scale):
    def __init__(self, aesthetic_name, name, breaks, labels):
        super().__init__(aesthetic_name)
        self.name = name
        self.breaks = breaks
        self.labels = labels

    @property
    def aesthetics(self):
        return X_AESTHETICS if self.aesthetic_name == "x" else Y_AESTHETICS

    def is_position(self):
        return True

    def update_axis(self, fig):
        if self.aesthetic_name == "x":
            return fig.update_xaxes
        elif self.aesthetic_name == "y":
            return fig.update_yaxes

    # What else do discrete and continuous scales have in common?
    def apply_to_fig(self, parent, fig_so_far):
        if self.name is not None:
            self.update_axis(fig_so_far)(title=self.name)
        if self.breaks is not None:
            self.update_axis(fig_so_far)(tickvals=list(self.breaks))
        if self.labels is not None:
            self.update_axis(fig_so_far)(ticktext=list(self.labels))


class PositionScaleContinuous(PositionScale):

    def __init__(self, axis=None, name=None, breaks=None, labels=None, transformation="identity"):
        super().__init__(axis, name, breaks, labels)
        if transformation not in TRANSFORMATIONS:
            raise ValueError(f"Unrecognized transformation {transformation}, expected one of {', '.join(TRANSFORMATIONS)}")
        self.transformation = transformation

    def apply_to_fig(self, parent, fig_so_far):
        super().apply_to_fig(parent, fig_so_far)
        if self.transformation == "identity":
            pass
        elif self.transformation == "log10":
            self.update_axis(fig_so_far)(type="log")
        elif self.transformation == "reverse":
            self.update_axis(fig_so_far)(autorange="reversed")

    def is_discrete(self):
        return False

    def is_continuous(self):
        return True

    def valid_dtype(self, values):
        return is_numeric_dtype(values)


class PositionScaleDiscrete(PositionScale):
    def __init__(self, axis=None, name=None, breaks=None, labels=None):
        super().__init__(axis, name, breaks, labels)

    def is_discrete(self):
        return True

    def is_continuous(self):
        return False


class ScaleContinuous(Scale):
    def __init__(self, aesthetic_name):
        super().__init__(aesthetic_name)
        self.limits = None

    def reset(self):
        self.limits = None

    def train(self, values):
        values = values.dropna()
        if len(values) == 0:
            return
        low, high = values.min(), values.max()
        if self.limits is not None:
            low, high = min(low, self.limits[0]), max(high, self.limits[1])
        self.limits = (low, high)

    def rescale(self, values, to=(0, 1)):
        low, high = self.limits if self.limits is not None else (0, 1)
        if high == low:
            return pd.Series(np.full(len(values), (to[0] + to[1]) / 2), index=values.index)
        return to[0] + (values - low) / (high - low) * (to[1] - to[0])

    def is_discrete(self):
        return False

    def is_continuous(self):
        return True

    def valid_dtype(self, values):
        return is_numeric_dtype(values)


class ScaleDiscrete(Scale):
    def __init__(self, aesthetic_name):
        super().__init__(aesthetic_name)
        self.categories = []

    def reset(self):
        self.categories = []

    def train(self, values):
        self.categories = categories_of(pd.concat([pd.Series(self.categories, dtype=object), values.astype(object)]))

    def is_discrete(self):
        return True

    def is_continuous(self):
        return False


class ScaleColorManual(ScaleDiscrete):

    def __init__(self, aesthetic_name, values):
        super().__init__(aesthetic_name)
        self.values = values

    def color_mapping(self):
        if isinstance(self.values, dict):
            return self.values
        if len(self.categories) > len(self.values):
            warning(f"Not enough colors specified. Found {len(self.categories)} distinct values of {self.aesthetic_name} aesthetic and only {len(self.values)} colors were provided.")
        return dict(zip(self.categories, self.values))

    def map(self, values):
        return values.map(self.color_mapping())


def viridis_colorscale():
    # The sequential palettes are hex, sample_colorscale wants rgb.
    colors, _ = px.colors.convert_colors_to_same_type(px.colors.sequential.Viridis, colortype="rgb")
    return px.colors.make_colorscale(colors)


class ScaleColorContinuous(ScaleContinuous):

    def map(self, values):
        fractions = self.rescale(values.astype(float))
        colorscale = viridis_colorscale()
        return fractions.map(lambda fraction: px.colors.sample_colorscale(colorscale, [fraction])[0] if pd.notna(fraction) else None)


class ScaleColorHue(ScaleDiscrete):
    def map(self, values):
        num_categories = max(len(self.categories), 1)
        step = 1.0 / num_categories
        interpolation_values = [step * i for i in range(num_categories)]
        hsv_scale = px.colors.get_colorscale("HSV")
        colors = px.colors.sample_colorscale(hsv_scale, interpolation_values)
        return values.map(dict(zip(self.categories, colors)))


class ScaleColorIdentity(ScaleDiscrete):
    legend = False

    def valid_dtype(self, values):
        return not is_numeric_dtype(values)


class ScaleRangeContinuous(ScaleContinuous):
    """Linearly rescale the trained limits into `range`."""

    DEFAULT_RANGE = (0.1, 1)
    MAX_VALUE = None

    def __init__(self, aesthetic_name, range=None):
        super().__init__(aesthetic_name)
        range = self.DEFAULT_RANGE if range is None else range
        if len(range) != 2 or not 0 < range[0] <= range[1] or (self.MAX_VALUE is not None and range[1] > self.MAX_VALUE):
            raise ValueError(f"{aesthetic_name.capitalize()} range must be two positive, increasing values, got {range}")
        self.range = tuple(range)

    def map(self, values):
        return self.rescale(values.astype(float), to=self.range)


class ScaleTensionContinuous(ScaleRangeContinuous):
    def __init__(self, aesthetic_name="tension", range=None):
        super().__init__(aesthetic_name, range)


class ScaleAlphaContinuous(ScaleRangeContinuous):
    MAX_VALUE = 1

    def __init__(self, aesthetic_name="alpha", range=None):
        super().__init__(aesthetic_name, range)


LINETYPES = ("solid", "dashed", "dotted", "dotdash", "longdash")


class ScaleLinetypeDiscrete(ScaleDiscrete):
    def valid_dtype(self, values):
        return is_discrete_values(values)

    def map(self, values):
        if len(self.categories) > len(LINETYPES):
            warning(f"The linetype palette can deal with a maximum of {len(LINETYPES)} values, found {len(self.categories)}. Extra values are drawn solid.")
        return values.map(dict(zip(self.categories, LINETYPES)))


def should_use_scale_for_grouping(scale):
    return (scale.aesthetic_name not in {"x", "y", "tooltip", "label"}) and scale.is_discrete()


def default_scale(aesthetic_name: str, values: pd.Series) -> Optional[Scale]:
    family = scale_family(aesthetic_name)
    is_continuous = not is_discrete_values(values)
    # We only know how to come up with a few default scales.
    if family in UNSCALED_AESTHETICS:
        return None
    elif family == "x":
        return scale_x_continuous() if is_continuous else scale_x_discrete()
    elif family == "y":
        return scale_y_continuous() if is_continuous else scale_y_discrete()
    elif family == "color":
        return scale_color_continuous() if is_continuous else scale_color_discrete()
    elif family == "linetype":
        return scale_linetype_discrete()
    elif family == "alpha":
        return scale_alpha_continuous()
    elif family == "tension":
        return scale_tension_continuous()
    elif is_continuous:
        return ScaleContinuous(family)
    else:
        return ScaleDiscrete(family)


# api ---------------------------------------------------------------------------------------------
def scale_color_continuous():
    return ScaleColorContinuous("color")


def scale_color_discrete():
    return scale_color_hue()


def scale_color_hue():
    return ScaleColorHue("color")


def scale_color_identity():
    return ScaleColorIdentity("color")


def scale_color_manual(*, values):
    return ScaleColorManual("color", values=values)


def scale_tension_continuous(range=ScaleTensionContinuous.DEFAULT_RANGE):
    return ScaleTensionContinuous("tension", range=range)


scale_tension = scale_tension_continuous


def scale_alpha_continuous(range=ScaleAlphaContinuous.DEFAULT_RANGE):
    return ScaleAlphaContinuous("alpha", range=range)


scale_alpha = scale_alpha_continuous


def scale_linetype_discrete():
    return ScaleLinetypeDiscrete("linetype")


scale_linetype = scale_linetype_discrete


def scale_x_continuous(name=None, breaks=None, labels=None, trans="identity"):
    return PositionScaleContinuous("x", name=name, breaks=breaks, labels=labels, transformation=trans)


def scale_x_discrete(name=None, breaks=None, labels=None):
    return PositionScaleDiscrete("x", name=name, breaks=breaks, labels=labels)


def scale_x_log10(name=None):
    return PositionScaleContinuous("x", name=name, transformation="log10")


def scale_x_reverse(name=None):
    return PositionScaleContinuous("x", name=name, transformation="reverse")


def scale_y_continuous(name=None, breaks=None, labels=None, trans="identity"):
    return PositionScaleContinuous("y", name=name, breaks=breaks, labels=labels, transformation=trans)


def scale_y_discrete(name=None, breaks=None, labels=None):
    return PositionScaleDiscrete("y", name=name, breaks=breaks, labels=labels)


def scale_y_log10(name=None):
    return PositionScaleContinuous("y", name=name, transformation="log10")


def scale_y_reverse(name=None):
    return PositionScaleContinuous("y", name=name, transformation="reverse")
