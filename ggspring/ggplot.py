from copy import copy
from dataclasses import field
from functools import reduce
from typing import Any, Optional, Tuple

import pandas as pd
from plotly.subplots import make_subplots

from ggspring.aes import Mapping, aes
from ggspring.facet import FacetNull, FacetWrap
from ggspring.layer import Layer
from ggspring.scale import Scale, default_scale, scale_family
from ggspring.utils import add_fields, as_nonempty_dict, frozen_dataclass, merge


# dataclasses -------------------------------------------------------------------------------------
@frozen_dataclass
class Labels:
    title: Optional[str] = None
    xlabel: Optional[str] = None
    ylabel: Optional[str] = None


@frozen_dataclass
class CoordCartesian:
    xlim: Optional[Tuple[float, float]] = None
    ylim: Optional[Tuple[float, float]] = None


@frozen_dataclass
class Theme:
    plot_bgcolor: Optional[str] = None
    axis_linecolor: Optional[str] = None
    font_family: Optional[str] = None
    title_font_size: Optional[int] = None
    axis_title_font_size: Optional[int] = None
    ticks: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None


DEFAULT_THEME = Theme(
    plot_bgcolor="white",
    axis_linecolor="black",
    font_family='Arial, "Open Sans", verdana, sans-serif',
    title_font_size=26,
    axis_title_font_size=18,
    ticks="outside",
)


def add_to_plot(plot, other):
    if isinstance(other, (list, tuple)):
        return reduce(add_to_plot, other, plot)
    fields = None
    for typ, get_kwargs in [
        (dict, lambda plot, other: {"aes": aes(**{**plot.aes, **other})}),
        (CoordCartesian, lambda plot, other: {"coord_cartesian": other}),
        (FacetWrap, lambda plot, other: {"facet": other}),
        (Layer, lambda plot, other: {"layers": [*plot.layers, other]}),
        (Labels, lambda plot, other: {"labels": merge(plot.labels, other)}),
        (Scale, lambda plot, other: {"scales": {**plot.scales, other.aesthetic_name: other}}),
        (Theme, lambda plot, other: {"theme": merge(plot.theme, other)}),
    ]:
        if isinstance(other, typ):
            fields = get_kwargs(plot, other)
            break
    if fields is None:
        raise TypeError(f"Cannot add an object of type '{type(other).__name__}' to a plot")
    else:
        return add_fields(plot, fields)


@frozen_dataclass
class Plot:
    data: Optional[pd.DataFrame] = None
    aes: Mapping = field(default_factory=dict)
    layers: list[Layer] = field(default_factory=list)
    labels: Labels = Labels()
    coord_cartesian: Optional[CoordCartesian] = None
    scales: dict[str, Scale] = field(default_factory=dict)
    facet: Optional[FacetWrap] = None
    theme: Theme = Theme()

    __add__ = add_to_plot

    def to_plotly(self):
        return to_plotly(self)

    def show(self):
        show(self)

    def write_image(self, path):
        write_image(self, path)

    def _repr_html_(self):
        return to_plotly(self)._repr_html_()


# api ---------------------------------------------------------------------------------------------
def ggplot(data=None, mapping: Optional[dict[str, Any]] = None):
    return Plot(data, aes(**(mapping or {})))


def coord_cartesian(xlim=None, ylim=None):
    return CoordCartesian(xlim, ylim)


def ggtitle(label):
    return Labels(title=label)


def xlab(label):
    return Labels(xlabel=label)


def ylab(label):
    return Labels(ylabel=label)


def labs(title=None, x=None, y=None):
    return Labels(title=title, xlabel=x, ylabel=y)


def theme(**kwargs):
    return Theme(**kwargs)


# rendering ---------------------------------------------------------------------------------------
def add_default_scales(scales, data):
    for aes_name in data.columns:
        family = scale_family(aes_name)
        if family not in scales:
            scale = default_scale(aes_name, data[aes_name])
            if scale is not None:
                scales[family] = scale


def check_scales(scales, data):
    for aes_name in data.columns:
        scale = scales.get(scale_family(aes_name))
        # All-missing columns have no meaningful dtype; their rows are removed later.
        if data[aes_name].isna().all():
            continue
        if scale is not None and not scale.valid_dtype(data[aes_name]):
            raise ValueError(f"Invalid scale for aesthetic {aes_name} of type {data[aes_name].dtype}")


def transform_position_data(scales, data):
    return data.assign(**{
        aes_name: scales[scale_family(aes_name)].transform_data(data[aes_name])
        for aes_name in data.columns if scale_family(aes_name) in scales and scales[scale_family(aes_name)].is_position()
    })


def map_non_position_data(scales, data):
    mapped = {}
    for aes_name in data.columns:
        scale = scales.get(scale_family(aes_name))
        if scale is None or scale.is_position():
            continue
        if scale.is_discrete() and scale.legend:
            mapped[f"{aes_name}_legend"] = data[aes_name]
        mapped[aes_name] = scale.map(data[aes_name])
    return data.assign(**mapped)


def default_labels(plot):
    labels = {}
    mappings = [plot.aes, *[layer.combined_mapping(plot.aes) for layer in plot.layers]]
    for aes_name, label_field in [("x", "xlabel"), ("y", "ylabel")]:
        for mapping in mappings:
            if isinstance(mapping.get(aes_name), str):
                labels[label_field] = mapping[aes_name]
                break
    return Labels(**labels)


def to_plotly(plot):
    facet = plot.facet if plot.facet is not None else FacetNull()
    layout = facet.train([layer.layer_data(plot.data) for layer in plot.layers])
    # Scales are trained per render, so work on copies.
    scales = {}
    for scale in plot.scales.values():
        scale = copy(scale)
        scale.reset()
        scales[scale_family(scale.aesthetic_name)] = scale

    layer_data = []
    for layer in plot.layers:
        data = layer.compute_aesthetics(plot.data, plot.aes, facet, layout)
        add_default_scales(scales, data)
        check_scales(scales, data)
        data = transform_position_data(scales, data)
        layer_data.append(layer.add_group(data, scales))

    layer_data = [layer.compute_statistic(data, scales) for layer, data in zip(plot.layers, layer_data)]
    layer_data = [layer.compute_geom_1(data) for layer, data in zip(plot.layers, layer_data)]
    layer_data = [layer.compute_position(data) for layer, data in zip(plot.layers, layer_data)]

    # Create scaling functions based on all the data:
    for scale in scales.values():
        if not scale.is_position():
            for data in layer_data:
                for aes_name in data.columns:
                    if scale_family(aes_name) == scale.aesthetic_name:
                        scale.train(data[aes_name])
    layer_data = [map_non_position_data(scales, data) for data in layer_data]
    layer_data = [layer.compute_geom_2(data) for layer, data in zip(plot.layers, layer_data)]

    n_rows, n_cols = facet.grid(layout)
    fig = make_subplots(rows=n_rows, cols=n_cols, shared_yaxes=plot.facet is not None, subplot_titles=facet.subplot_titles(layout))
    panel_positions = {panel: (idx // n_cols + 1, idx % n_cols + 1) for idx, panel in enumerate(layout["PANEL"])}
    # Need to know what I've added to legend already so we don't do it more than once.
    legend_cache = set()
    for layer, data in zip(plot.layers, layer_data):
        layer.draw(data, fig, panel_positions, legend_cache)

    labels = merge(default_labels(plot), plot.labels)
    if labels.title is not None:
        fig.update_layout(title=labels.title)
    if labels.xlabel is not None:
        fig.update_xaxes(title=labels.xlabel, row=n_rows)
    if labels.ylabel is not None:
        fig.update_yaxes(title=labels.ylabel, col=1)
    # Important to update axes after labels, axes names take precedence.
    for family in ("x", "y"):
        if scales.get(family) is not None:
            scales[family].apply_to_fig(plot, fig)
    if plot.coord_cartesian is not None:
        if plot.coord_cartesian.xlim is not None:
            fig.update_xaxes(range=list(plot.coord_cartesian.xlim))
        if plot.coord_cartesian.ylim is not None:
            fig.update_yaxes(range=list(plot.coord_cartesian.ylim))

    style = merge(DEFAULT_THEME, plot.theme)
    fig.update_xaxes(title_font_size=style.axis_title_font_size, ticks=style.ticks, linecolor=style.axis_linecolor)
    fig.update_yaxes(title_font_size=style.axis_title_font_size, ticks=style.ticks, linecolor=style.axis_linecolor)
    fig.update_layout(
        plot_bgcolor=style.plot_bgcolor,
        font_family=style.font_family,
        title_font_size=style.title_font_size,
        **{k: v for k, v in as_nonempty_dict(style).items() if k in ("width", "height")}
    )
    return fig


def show(plot):
    to_plotly(plot).show()


def write_image(plot, path):
    # Static export needs the kaleido package.
    to_plotly(plot).write_image(path)
