"""High level pipeline helpers.

Each recommendation request re-runs the full derive -> sentiment -> cluster
-> rank -> evaluate flow over the loaded catalog. The catalog itself is never
modified; every stage works on its own copy, so results are local to one
call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import pandas as pd

from .clustering import cluster_catalog
from .config import AppConfig
from .data_io import cast_members
from .evaluation import evaluate, relevance_set
from .features import derive_features
from .ranker import Ranker, ScoreWeights
from .schemas import EvaluationResult, RankedMovie, RecommendationRequest
from .sentiment import SentimentScorer, add_sentiment
from .utils.repro import resolve_seed

logger = logging.getLogger(__name__)

NO_RESULTS_MESSAGE = "No recommendations match the selected filters."


@dataclass
class PipelineResult:
    recommendations: pd.DataFrame
    clustered: pd.DataFrame
    evaluation: EvaluationResult
    message: str | None = None

    @property
    def evaluation_text(self) -> str:
        return self.evaluation.format()

    def as_recommendations(self) -> list[RankedMovie]:
        out = []
        for rank, (_, row) in enumerate(self.recommendations.iterrows(), start=1):
            year = row.get("release_year")
            out.append(
                RankedMovie(
                    rank=rank,
                    title=str(row["title"]),
                    release_year=int(year) if pd.notna(year) else None,
                    genre=str(row["genre"]) if pd.notna(row.get("genre")) else None,
                    director=str(row["director"]) if pd.notna(row.get("director")) else None,
                    cast=cast_members(row),
                    imdb_rating=float(row["imdb_rating"]),
                    votes=int(row["votes"]),
                    sentiment=float(row["sentiment"]),
                    cluster=int(row["cluster"]),
                    final_score=float(row["final_score"]),
                )
            )
        return out


def prepare_catalog(
    catalog: pd.DataFrame,
    config: AppConfig | None = None,
    scorer: SentimentScorer | None = None,
) -> pd.DataFrame:
    """Derive genre codes, score sentiment and cluster a copy of ``catalog``."""
    config = config or AppConfig()
    seed = resolve_seed(config.random_seed)
    derived = derive_features(catalog)
    scored = add_sentiment(derived, scorer)
    return cluster_catalog(
        scored, n_clusters=config.n_clusters, random_state=seed, n_init=config.n_init
    )


def run_pipeline(
    catalog: pd.DataFrame,
    request: RecommendationRequest | None = None,
    config: AppConfig | None = None,
    scorer: SentimentScorer | None = None,
) -> PipelineResult:
    """Execute one recommendation request end to end.

    Parameters
    ----------
    catalog:
        Canonical catalog frame as returned by :func:`data_io.load_catalog`.
    request:
        Filter parameters from the presentation layer. Defaults to no filters.
    config:
        Cluster count, seed, blend weights and list sizes.
    scorer:
        Optional sentiment scorer; defaults to the TextBlob lexicon.

    Returns
    -------
    PipelineResult
        Top-N ranked rows, the full clustered catalog and the evaluation
        against the top-rated baseline.

    Raises
    ------
    ClusterConfigError
        If the catalog has fewer distinct feature points than clusters. No
        partial result is returned in that case.
    """
    config = config or AppConfig()
    request = request or RecommendationRequest()

    clustered = prepare_catalog(catalog, config, scorer)

    ranker = Ranker(
        weights=ScoreWeights(
            rating=config.rating_weight,
            votes=config.votes_weight,
            sentiment=config.sentiment_weight,
        ),
        case_sensitive_actor=config.case_sensitive_actor,
    )
    top = ranker.rank(clustered, request, top_n=config.top_n)

    relevant = relevance_set(catalog, genre=request.genre_filter, top_m=config.relevant_top_m)
    evaluation = evaluate(top["title"].astype(str).tolist(), relevant)

    message = None
    if top.empty:
        message = NO_RESULTS_MESSAGE
        logger.info(NO_RESULTS_MESSAGE)

    return PipelineResult(
        recommendations=top.reset_index(drop=True),
        clustered=clustered,
        evaluation=evaluation,
        message=message,
    )


__all__ = ["NO_RESULTS_MESSAGE", "PipelineResult", "prepare_catalog", "run_pipeline"]
