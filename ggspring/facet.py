import math
from typing import Optional

import pandas as pd

from ggspring.utils import frozen_dataclass


def vars(*args):
    return tuple(args)


@frozen_dataclass
class FacetNull:
    def train(self, datas):
        return pd.DataFrame({"PANEL": [1]})

    def map_data(self, data, mapped, layout):
        return mapped.assign(PANEL=1)

    def grid(self, layout):
        return 1, 1

    def subplot_titles(self, layout):
        return None


@frozen_dataclass
class FacetWrap:
    facets: tuple
    ncol: Optional[int] = None

    def train(self, datas):
        """Return one row per panel: the facet values plus a 1-based PANEL id."""
        keyed = [data[list(self.facets)] for data in datas if data is not None and all(facet in data.columns for facet in self.facets)]
        if len(keyed) == 0:
            raise ValueError(f"At least one layer must contain all faceting variables: {', '.join(self.facets)}")
        keys = pd.concat(keyed, ignore_index=True).drop_duplicates().sort_values(list(self.facets)).reset_index(drop=True)
        return keys.assign(PANEL=range(1, len(keys) + 1))

    def map_data(self, data, mapped, layout):
        if data is not None and all(facet in data.columns for facet in self.facets):
            panels = data[list(self.facets)].reset_index(drop=True).merge(layout, how="left", on=list(self.facets))
            return mapped.assign(PANEL=panels["PANEL"].to_numpy())
        # Layers without the faceting variables are repeated in every panel.
        return pd.concat([mapped.assign(PANEL=panel) for panel in layout["PANEL"]], ignore_index=True)

    def grid(self, layout):
        n_panels = len(layout)
        n_cols = self.ncol if self.ncol is not None else int(math.ceil(math.sqrt(n_panels)))
        n_rows = int(math.ceil(n_panels / n_cols))
        return n_rows, n_cols

    def subplot_titles(self, layout):
        return [", ".join(str(row[facet]) for facet in self.facets) for _, row in layout.iterrows()]


def facet_wrap(facets, ncol=None):
    if isinstance(facets, str):
        facets = (facets,)
    return FacetWrap(tuple(facets), ncol=ncol)
