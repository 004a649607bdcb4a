from ggspring.layer import layer
from ggspring.spring import DEFAULT_DIAMETER, DEFAULT_N, DEFAULT_TENSION


def geom_point(mapping=None, data=None, *, stat="identity", position="identity", na_rm=False, show_legend=None, inherit_aes=True, **kwargs):
    return layer(
        geom="point", stat=stat, position=position, mapping=mapping, data=data,
        params={"na_rm": na_rm, **kwargs}, inherit_aes=inherit_aes, show_legend=show_legend,
    )


def geom_path(mapping=None, data=None, *, stat="identity", position="identity", na_rm=False, show_legend=None, inherit_aes=True, **kwargs):
    return layer(
        geom="path", stat=stat, position=position, mapping=mapping, data=data,
        params={"na_rm": na_rm, **kwargs}, inherit_aes=inherit_aes, show_legend=show_legend,
    )


def geom_segment(mapping=None, data=None, *, stat="identity", position="identity", na_rm=False, show_legend=None, inherit_aes=True, **kwargs):
    return layer(
        geom="segment", stat=stat, position=position, mapping=mapping, data=data,
        params={"na_rm": na_rm, **kwargs}, inherit_aes=inherit_aes, show_legend=show_legend,
    )


def geom_spring(mapping=None, data=None, *, stat="identity", position="identity", n=DEFAULT_N, na_rm=False, show_legend=None, inherit_aes=True, **kwargs):
    """Draw a spring from (x, y) to (xend, yend).

    ``diameter`` and ``tension`` are aesthetics here: map them with ``aes`` or
    pass a constant. Mapped tension goes through ``scale_tension_continuous``
    before the coil is drawn. ``n`` is the number of points per revolution.
    """
    return layer(
        geom="spring", stat=stat, position=position, mapping=mapping, data=data,
        params={"n": n, "na_rm": na_rm, **kwargs}, inherit_aes=inherit_aes, show_legend=show_legend,
    )


def stat_spring(mapping=None, data=None, *, geom="path", position="identity", diameter=DEFAULT_DIAMETER, tension=DEFAULT_TENSION, n=DEFAULT_N, na_rm=False, show_legend=None, inherit_aes=True, **kwargs):
    """Turn every (x, y) -> (xend, yend) row into the points of a spring, drawn as a path by default.

    ``diameter`` and ``tension`` fill in for rows without mapped values. The
    coil is computed from unscaled data, so tension scales do not change it.
    """
    return layer(
        geom=geom, stat="spring", position=position, mapping=mapping, data=data,
        params={"diameter": diameter, "tension": tension, "n": n, "na_rm": na_rm, **kwargs},
        inherit_aes=inherit_aes, show_legend=show_legend,
    )
