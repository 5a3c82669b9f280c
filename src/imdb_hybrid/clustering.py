from __future__ import annotations

import logging

import numpy as np
import pandas as pd
from sklearn.cluster import KMeans

from .errors import ClusterConfigError

logger = logging.getLogger(__name__)

FEATURE_COLUMNS = ["genre_code", "sentiment"]


def cluster_catalog(
    frame: pd.DataFrame,
    n_clusters: int = 5,
    random_state: int = 42,
    n_init: int = 25,
) -> pd.DataFrame:
    """Assign a k-means cluster id to every row.

    Features are the raw ``genre_code`` and ``sentiment`` values with no
    scaling, so the genre code range dominates the distance. The best of
    ``n_init`` restarts (lowest inertia) is kept.
    """
    if n_clusters < 1:
        raise ClusterConfigError(f"Cluster count must be at least 1, got {n_clusters}")
    X = frame[FEATURE_COLUMNS].to_numpy(dtype=float)
    n_points = len(np.unique(X, axis=0)) if len(X) else 0
    if n_points < n_clusters:
        raise ClusterConfigError(
            f"Cannot form {n_clusters} clusters from {n_points} distinct "
            "(genre, sentiment) points; lower the cluster count"
        )

    km = KMeans(n_clusters=n_clusters, n_init=n_init, random_state=random_state)
    labels = km.fit_predict(X)
    logger.info(
        "Clustered %d rows into %d clusters (inertia %.3f)", len(X), n_clusters, km.inertia_
    )
    out = frame.copy()
    out["cluster"] = labels.astype("int64")
    return out


def cluster_summary(frame: pd.DataFrame) -> pd.DataFrame:
    """Per-cluster size, centroid and dominant genre."""
    grouped = frame.groupby("cluster", sort=True)
    summary = grouped.agg(
        size=("title", "size"),
        mean_genre_code=("genre_code", "mean"),
        mean_sentiment=("sentiment", "mean"),
        mean_rating=("imdb_rating", "mean"),
    )
    summary["top_genre"] = grouped["genre"].agg(
        lambda s: s.value_counts().sort_index().idxmax() if len(s) else ""
    )
    return summary.reset_index()
