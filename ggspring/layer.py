from dataclasses import field
from typing import Optional

import pandas as pd

from ggspring.aes import Mapping, evaluate_mapping, standardise_aes_name
from ggspring.geom import Geom, get_geom
from ggspring.position import Position, get_position
from ggspring.scale import UNSCALED_AESTHETICS, X_AESTHETICS, Y_AESTHETICS, scale_family, should_use_scale_for_grouping
from ggspring.stat import Stat, get_stat
from ggspring.utils import frozen_dataclass, warning


POSITION_AESTHETICS = (*X_AESTHETICS, *Y_AESTHETICS)


@frozen_dataclass
class Layer:
    geom: Geom
    stat: Stat
    position: Position
    mapping: Mapping = field(default_factory=dict)
    data: Optional[pd.DataFrame] = None
    aes_params: dict = field(default_factory=dict)
    geom_params: dict = field(default_factory=dict)
    stat_params: dict = field(default_factory=dict)
    inherit_aes: bool = True
    show_legend: Optional[bool] = None

    def layer_data(self, plot_data):
        return self.data if self.data is not None else plot_data

    def combined_mapping(self, plot_mapping):
        mapping = {**plot_mapping, **self.mapping} if self.inherit_aes else dict(self.mapping)
        # Aesthetics set as constants win over mapped ones.
        return {aes_name: value for aes_name, value in mapping.items() if aes_name not in self.aes_params}

    def compute_aesthetics(self, plot_data, plot_mapping, facet, layout):
        data = self.layer_data(plot_data)
        evaluated = evaluate_mapping(self.combined_mapping(plot_mapping), data)
        return facet.map_data(data, evaluated, layout)

    def add_group(self, data, scales):
        if "group" in data.columns:
            grouping = ["group"]
        else:
            grouping = [
                col for col in data.columns
                if col not in UNSCALED_AESTHETICS and scale_family(col) in scales and should_use_scale_for_grouping(scales[scale_family(col)])
            ]
        if len(grouping) == 0 or len(data) == 0:
            return data.assign(group=1)
        return data.assign(group=data.groupby(grouping, sort=True, dropna=False).ngroup().to_numpy() + 1)

    def compute_statistic(self, data, scales):
        self.stat.check_required_aesthetics(data)
        params = self.stat.setup_params(data, dict(self.stat_params))
        data = self.stat.setup_data(data, params)
        return self.stat.compute_layer(data, params, scales)

    def compute_geom_1(self, data):
        data = data.assign(**{aes_name: value for aes_name, value in self.aes_params.items() if aes_name in POSITION_AESTHETICS})
        self.geom.check_required_aesthetics(data)
        data = self.geom.setup_data(data, self.geom_params)
        return self.geom.handle_na(data, self.geom_params)

    def compute_position(self, data):
        return self.position.compute_layer(data, self.geom_params)

    def compute_geom_2(self, data):
        aes_params = {aes_name: value for aes_name, value in self.aes_params.items() if aes_name not in POSITION_AESTHETICS}
        return self.geom.use_defaults(data, aes_params)

    def draw(self, data, fig, panel_positions, legend_cache):
        draw_params = {k: v for k, v in self.geom_params.items() if k in self.geom.parameters() and k not in self.geom.extra_params}
        if self.show_legend is False:
            legend_cache = None
        for panel, (row, col) in panel_positions.items():
            panel_data = data[data["PANEL"] == panel].reset_index(drop=True)
            if len(panel_data) == 0:
                continue
            self.geom.draw_panel(panel_data, fig, row, col, legend_cache, **draw_params)


def layer(geom, stat, position="identity", mapping=None, data=None, params=None, inherit_aes=True, show_legend=None):
    """Build a layer, routing each parameter to the geom, the stat, or the constant aesthetics."""
    geom = get_geom(geom)
    stat = get_stat(stat)
    position = get_position(position)
    params = {standardise_aes_name(k): v for k, v in (params or {}).items() if v is not None}

    mapping = {standardise_aes_name(k): v for k, v in (mapping or {}).items()}
    unknown_aes = [k for k in mapping if k not in geom.aesthetics() and k not in stat.aesthetics()]
    if unknown_aes:
        warning(f"Ignoring unknown aesthetics: {', '.join(unknown_aes)}")
        mapping = {k: v for k, v in mapping.items() if k not in unknown_aes}

    aes_params = {k: v for k, v in params.items() if k in geom.aesthetics() and k != "group"}
    geom_params = {k: v for k, v in params.items() if k in geom.parameters()}
    stat_params = {k: v for k, v in params.items() if k in stat.parameters()}

    unknown = [k for k in params if k not in aes_params and k not in geom_params and k not in stat_params]
    if unknown:
        warning(f"Ignoring unknown parameters: {', '.join(unknown)}")

    return Layer(
        geom=geom,
        stat=stat,
        position=position,
        mapping=mapping,
        data=data,
        aes_params=aes_params,
        geom_params=geom_params,
        stat_params=stat_params,
        inherit_aes=inherit_aes,
        show_legend=show_legend,
    )
