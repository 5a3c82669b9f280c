"""Overlap metrics between a recommendation list and a top-rated baseline.

``accuracy`` is computed exactly like ``precision``: the design has no
negative class, so there is nothing independent to measure. Both are kept so
the presentation layer can show the usual two numbers.
"""

from __future__ import annotations

from collections.abc import Iterable

import pandas as pd

from .schemas import ALL, ALL_GENRES, EvaluationResult


def relevance_set(
    catalog: pd.DataFrame, genre: str | None = None, top_m: int = 50
) -> list[str]:
    """Titles of the ``top_m`` highest rated rows, optionally for one genre."""
    df = catalog
    if genre not in (None, "", ALL_GENRES, ALL):
        df = df[df["genre"].eq(genre).fillna(False).astype(bool)]
    best = df.sort_values("imdb_rating", ascending=False, kind="mergesort").head(top_m)
    return best["title"].astype(str).tolist()


def _overlap(recommended: Iterable[str], relevant: Iterable[str]) -> tuple[int, int]:
    rec = set(recommended)
    return len(rec & set(relevant)), len(rec)


def precision(recommended: Iterable[str], relevant: Iterable[str]) -> float:
    hits, n = _overlap(recommended, relevant)
    return hits / n if n else 0.0


def accuracy(recommended: Iterable[str], relevant: Iterable[str]) -> float:
    return precision(recommended, relevant)


def evaluate(recommended: Iterable[str], relevant: Iterable[str]) -> EvaluationResult:
    recommended = list(recommended)
    relevant = list(relevant)
    hits, n = _overlap(recommended, relevant)
    return EvaluationResult(
        precision=precision(recommended, relevant),
        accuracy=accuracy(recommended, relevant),
        n_recommended=n,
        n_relevant=len(set(relevant)),
        n_hits=hits,
    )
