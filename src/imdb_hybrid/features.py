from __future__ import annotations

from collections.abc import Iterable

import pandas as pd
from sklearn.preprocessing import LabelEncoder


def genre_encoding(genres: Iterable[str]) -> dict[str, int]:
    """Map each distinct genre string to its position in sorted order.

    The comma-joined genre label is treated as one categorical value, so
    ``"Crime, Drama"`` and ``"Drama"`` get distinct codes. The same catalog
    always yields the same codes.
    """
    values = [str(g) for g in genres]
    if not values:
        return {}
    enc = LabelEncoder().fit(values)
    return {str(g): i for i, g in enumerate(enc.classes_)}


def derive_features(
    catalog: pd.DataFrame, encoding: dict[str, int] | None = None
) -> pd.DataFrame:
    out = catalog.copy()
    genres = out["genre"].fillna("").astype(str)
    if encoding is None:
        encoding = genre_encoding(genres)
    unknown = sorted(set(genres) - set(encoding))
    if unknown:
        raise ValueError(f"Genres missing from encoding: {unknown}")
    out["genre_code"] = genres.map(encoding).astype("int64")
    return out
