from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
import pandas as pd

from .data_io import CAST_COLUMNS
from .schemas import RecommendationRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoreWeights:
    """Fixed blend weights; they are expected to sum to 1.0."""

    rating: float = 0.5
    votes: float = 0.3
    sentiment: float = 0.2


def zscore(values: pd.Series) -> pd.Series:
    """Standardize with the sample standard deviation.

    A constant (or single-valued) column maps to all zeros instead of
    dividing by zero.
    """
    x = values.astype(float)
    std = x.std(ddof=1)
    constant = len(x) < 2 or x.nunique(dropna=False) <= 1
    if constant or not np.isfinite(std) or np.isclose(std, 0.0):
        logger.debug("Zero variance in %r; normalized values set to 0", values.name)
        return pd.Series(0.0, index=values.index)
    return (x - x.mean()) / std


class Ranker:
    def __init__(self, weights: ScoreWeights | None = None, case_sensitive_actor: bool = True):
        self.weights = weights or ScoreWeights()
        self.case_sensitive_actor = case_sensitive_actor

    def score(self, frame: pd.DataFrame) -> pd.DataFrame:
        """Compute ``final_score`` relative to the rows of ``frame``."""
        out = frame.copy()
        out["norm_votes"] = zscore(out["votes"])
        out["norm_sentiment"] = zscore(out["sentiment"])
        w = self.weights
        out["final_score"] = (
            w.rating * out["imdb_rating"].astype(float)
            + w.votes * out["norm_votes"]
            + w.sentiment * out["norm_sentiment"]
        )
        return out

    def apply_filters(self, frame: pd.DataFrame, request: RecommendationRequest) -> pd.DataFrame:
        out = frame
        if request.min_rating is not None:
            out = out[out["imdb_rating"] >= request.min_rating]
        if request.year_range is not None:
            lo, hi = request.year_range
            years = out["release_year"]
            out = out[(years >= lo).fillna(False) & (years <= hi).fillna(False)]
        if request.genre_filter is not None:
            out = out[out["genre"].eq(request.genre_filter).fillna(False).astype(bool)]
        if request.actor_filter is not None:
            hit = pd.Series(False, index=out.index)
            for col in CAST_COLUMNS:
                hit |= (
                    out[col]
                    .astype("string")
                    .str.contains(
                        request.actor_filter,
                        case=self.case_sensitive_actor,
                        regex=False,
                        na=False,
                    )
                    .astype(bool)
                )
            out = out[hit]
        if request.director_filter is not None:
            out = out[out["director"].eq(request.director_filter).fillna(False).astype(bool)]
        return out.copy()

    def sort(self, frame: pd.DataFrame) -> pd.DataFrame:
        # mergesort is stable: equal scores keep catalog order
        return frame.sort_values("final_score", ascending=False, kind="mergesort")

    def rank(
        self,
        frame: pd.DataFrame,
        request: RecommendationRequest | None = None,
        top_n: int | None = None,
    ) -> pd.DataFrame:
        request = request or RecommendationRequest()
        scored = self.score(frame)
        filtered = self.apply_filters(scored, request)
        ranked = self.sort(filtered)
        logger.info("Ranked %d of %d rows after filtering", len(ranked), len(frame))
        if top_n is not None:
            ranked = ranked.head(top_n)
        return ranked
