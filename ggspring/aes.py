from typing import Any, Optional

import numpy as np
import pandas as pd
from pandas.api.types import is_list_like


Mapping = dict[str, Any]

AES_ALIASES = {"colour": "color", "col": "color"}


def standardise_aes_name(name: str) -> str:
    return AES_ALIASES.get(name, name)


def aes(x: Optional[Any] = None, y: Optional[Any] = None, **kwargs: Any) -> Mapping:
    """Map data columns to aesthetics.

    Values are column names, array-likes of the same length as the data, or
    scalars that are repeated for every row.
    """
    return {
        **({"x": x} if x is not None else {}),
        **({"y": y} if y is not None else {}),
        **{standardise_aes_name(k): v for k, v in kwargs.items() if v is not None},
    }


def evaluate_mapping(mapping: Mapping, data: Optional[pd.DataFrame]) -> pd.DataFrame:
    list_lengths = [len(v) for v in mapping.values() if not isinstance(v, str) and is_list_like(v)]
    n_rows = len(data) if data is not None else (list_lengths[0] if list_lengths else 1)

    columns = {}
    for aes_name, value in mapping.items():
        if isinstance(value, str):
            if data is None or value not in data.columns:
                raise ValueError(f"Aesthetic '{aes_name}' refers to column '{value}', which is not in the data.")
            columns[aes_name] = data[value].reset_index(drop=True)
        elif isinstance(value, pd.Series) or is_list_like(value):
            if len(value) != n_rows:
                raise ValueError(f"Aesthetic '{aes_name}' has {len(value)} values, but the data has {n_rows} rows.")
            columns[aes_name] = pd.Series(np.asarray(value))
        else:
            columns[aes_name] = pd.Series([value] * n_rows)
    return pd.DataFrame(columns, index=pd.RangeIndex(n_rows))
