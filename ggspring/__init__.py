from .aes import aes
from .facet import facet_wrap, vars
from .geom import Geom, GeomPath, GeomPoint, GeomSegment, GeomSpring, register_geom
from .ggplot import (
    Plot,
    coord_cartesian,
    ggplot,
    ggtitle,
    labs,
    show,
    theme,
    to_plotly,
    write_image,
    xlab,
    ylab,
)
from .layer import Layer, layer
from .layers import geom_path, geom_point, geom_segment, geom_spring, stat_spring
from .position import Position, PositionIdentity, PositionNudge, position_identity, position_nudge, register_position
from .scale import (
    scale_alpha,
    scale_alpha_continuous,
    scale_color_continuous,
    scale_color_discrete,
    scale_color_hue,
    scale_color_identity,
    scale_color_manual,
    scale_linetype,
    scale_linetype_discrete,
    scale_tension,
    scale_tension_continuous,
    scale_x_continuous,
    scale_x_discrete,
    scale_x_log10,
    scale_x_reverse,
    scale_y_continuous,
    scale_y_discrete,
    scale_y_log10,
    scale_y_reverse,
)
from .spring import create_spring
from .stat import Stat, StatIdentity, StatSpring, register_stat

__all__ = [
    "Geom",
    "GeomPath",
    "GeomPoint",
    "GeomSegment",
    "GeomSpring",
    "Layer",
    "Plot",
    "Position",
    "PositionIdentity",
    "PositionNudge",
    "Stat",
    "StatIdentity",
    "StatSpring",
    "aes",
    "coord_cartesian",
    "create_spring",
    "facet_wrap",
    "geom_path",
    "geom_point",
    "geom_segment",
    "geom_spring",
    "ggplot",
    "ggtitle",
    "labs",
    "layer",
    "position_identity",
    "position_nudge",
    "register_geom",
    "register_position",
    "register_stat",
    "scale_alpha",
    "scale_alpha_continuous",
    "scale_color_continuous",
    "scale_color_discrete",
    "scale_color_hue",
    "scale_color_identity",
    "scale_color_manual",
    "scale_linetype",
    "scale_linetype_discrete",
    "scale_tension",
    "scale_tension_continuous",
    "scale_x_continuous",
    "scale_x_discrete",
    "scale_x_log10",
    "scale_x_reverse",
    "scale_y_continuous",
    "scale_y_discrete",
    "scale_y_log10",
    "scale_y_reverse",
    "show",
    "stat_spring",
    "theme",
    "to_plotly",
    "vars",
    "write_image",
    "xlab",
    "ylab",
]
