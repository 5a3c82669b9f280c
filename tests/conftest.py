from pathlib import Path

import numpy as np
import pandas as pd
import pytest

from imdb_hybrid.sentiment import SentimentScorer

LEXICON = {
    "good": 2.0,
    "great": 3.0,
    "love": 3.0,
    "hope": 1.0,
    "bad": -2.0,
    "death": -2.0,
    "war": -1.0,
    "terrible": -3.0,
}


@pytest.fixture(scope="session")
def fixtures_dir() -> Path:
    return Path(__file__).parent / "fixtures" / "data"


@pytest.fixture
def sample_catalog_path(fixtures_dir) -> Path:
    return fixtures_dir / "catalog_sample.csv"


@pytest.fixture
def lexicon_scorer() -> SentimentScorer:
    return SentimentScorer(lexicon=LEXICON)


def make_catalog(rows: list[dict]) -> pd.DataFrame:
    """Canonical catalog frame from partial row dicts."""
    defaults = {
        "title": "",
        "release_year": pd.NA,
        "genre": "Drama",
        "director": "Someone",
        "star1": pd.NA,
        "star2": pd.NA,
        "star3": pd.NA,
        "star4": pd.NA,
        "imdb_rating": 7.0,
        "votes": 1000,
        "overview": "",
    }
    df = pd.DataFrame([{**defaults, **r} for r in rows])
    df["release_year"] = df["release_year"].astype("Int64")
    for col in ("star1", "star2", "star3", "star4", "director"):
        df[col] = df[col].astype("string")
    return df


@pytest.fixture
def synthetic_catalog() -> pd.DataFrame:
    """100 records: ratings uniform in [6, 9], years 1990-2020."""
    rng = np.random.default_rng(7)
    genres = ["Drama", "Comedy", "Action, Crime", "Horror", "Animation, Family", "Sci-Fi"]
    phrases = ["a good story", "a terrible war", "love and hope", "death and bad luck", ""]
    directors = ["Ann Lee", "Bo Kim", "Cy Park"]
    actors = ["Tom Hanks", "Meryl Streep", "Denzel Washington", "Cate Blanchett", "Ian Holm"]
    rows = []
    for i in range(100):
        rows.append(
            {
                "title": f"Movie {i:03d}",
                "release_year": int(rng.integers(1990, 2021)),
                "genre": genres[i % len(genres)],
                "director": directors[i % len(directors)],
                "star1": actors[i % len(actors)],
                "star2": actors[(i + 2) % len(actors)],
                "imdb_rating": round(float(rng.uniform(6.0, 9.0)), 1),
                "votes": int(rng.integers(1_000, 2_000_000)),
                "overview": phrases[i % len(phrases)],
            }
        )
    return make_catalog(rows)


@pytest.fixture(autouse=True)
def _force_seed(monkeypatch):
    monkeypatch.delenv("IMDBHYBRID_SEED", raising=False)
    yield


@pytest.fixture
def catalog_factory():
    return make_catalog
