import random

import numpy as np
import pandas as pd
import pytest

from imdb_hybrid.clustering import cluster_catalog
from imdb_hybrid.errors import ClusterConfigError
from imdb_hybrid.utils.repro import resolve_seed


def _points() -> pd.DataFrame:
    n = 30
    return pd.DataFrame(
        {
            "title": [f"M{i}" for i in range(n)],
            "genre": [f"G{i % 6}" for i in range(n)],
            "genre_code": [i % 6 for i in range(n)],
            "sentiment": [((i * 13) % 7) / 2 - 1.5 for i in range(n)],
            "imdb_rating": [7.0] * n,
        }
    )


def test_argument_and_default(monkeypatch):
    monkeypatch.delenv("IMDBHYBRID_SEED", raising=False)
    assert resolve_seed(1234) == 1234
    assert resolve_seed() == 42


def test_env_override(monkeypatch):
    monkeypatch.setenv("IMDBHYBRID_SEED", "4321")
    assert resolve_seed(1234) == 4321


def test_malformed_env_seed_is_a_config_error(monkeypatch):
    monkeypatch.setenv("IMDBHYBRID_SEED", "abc")
    with pytest.raises(ClusterConfigError):
        resolve_seed(1)


def test_resolved_seed_makes_clustering_reproducible(monkeypatch):
    monkeypatch.setenv("IMDBHYBRID_SEED", "7")
    frame = _points()
    a = cluster_catalog(frame, n_clusters=4, random_state=resolve_seed(99))
    b = cluster_catalog(frame, n_clusters=4, random_state=resolve_seed(123))
    assert a["cluster"].tolist() == b["cluster"].tolist()


def test_resolving_leaves_global_generators_alone(monkeypatch):
    monkeypatch.delenv("IMDBHYBRID_SEED", raising=False)
    py_state = random.getstate()
    np_state = np.random.get_state()[1].copy()
    resolve_seed(5)
    assert random.getstate() == py_state
    assert (np.random.get_state()[1] == np_state).all()
