import logging
from dataclasses import asdict, dataclass, replace
from typing import Any

import pandas as pd


logger = logging.getLogger("ggspring")

frozen_dataclass = dataclass(frozen=True)


def warning(msg: str) -> None:
    logger.warning(msg)


def as_nonempty_dict(data: Any) -> dict:
    return asdict(data, dict_factory=lambda x: {k: v for (k, v) in x if v is not None})


def add_fields(base, fields):
    return replace(base, **(fields if isinstance(fields, dict) else as_nonempty_dict(fields)))


def merge(data1, data2):
    return data1.__class__(**{**as_nonempty_dict(data1), **as_nonempty_dict(data2)})


def remove_missing(data: pd.DataFrame, vars, na_rm: bool = False, name: str = "") -> pd.DataFrame:
    vars = [var for var in vars if var in data.columns]
    if len(vars) == 0:
        return data
    missing = data[vars].isna().any(axis=1)
    if missing.any():
        if not na_rm:
            warning(f"Removed {int(missing.sum())} rows containing missing values ({name}).")
        data = data[~missing].reset_index(drop=True)
    return data


def concat_frames(frames, columns=None) -> pd.DataFrame:
    frames = [frame for frame in frames if len(frame) > 0]
    if len(frames) == 0:
        return pd.DataFrame(columns=columns if columns is not None else [])
    return pd.concat(frames, ignore_index=True)
