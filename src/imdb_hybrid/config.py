from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

try:
    import tomllib
except ModuleNotFoundError:
    import tomli as tomllib


@dataclass
class AppConfig:
    catalog_csv_path: str = "data/raw/imdb_top_1000.csv"
    data_dir: str = "data"
    n_clusters: int = 5
    n_init: int = 25
    random_seed: int = 42
    rating_weight: float = 0.5
    votes_weight: float = 0.3
    sentiment_weight: float = 0.2
    top_n: int = 10
    relevant_top_m: int = 50
    case_sensitive_actor: bool = True

    @classmethod
    def from_file(cls, path: str) -> AppConfig:
        p = Path(path)
        with p.open("rb") as f:
            cfg = tomllib.load(f)

        data_section = cfg.get("data", {}) or cfg.get("paths", {})
        clustering = cfg.get("clustering", {})
        ranking = cfg.get("ranking", {})
        evaluation = cfg.get("evaluation", {})

        # Environment variables win over the file; no implicit .env loading
        catalog = os.getenv("CATALOG_CSV_PATH") or data_section.get(
            "catalog_csv_path", cls.catalog_csv_path
        )
        data_dir = os.getenv("DATA_DIR") or data_section.get("data_dir", cls.data_dir)
        k = int(os.getenv("N_CLUSTERS") or clustering.get("n_clusters", cls.n_clusters))
        seed = int(os.getenv("RANDOM_SEED") or clustering.get("random_seed", cls.random_seed))

        return cls(
            catalog_csv_path=catalog,
            data_dir=data_dir,
            n_clusters=k,
            n_init=int(clustering.get("n_init", cls.n_init)),
            random_seed=seed,
            rating_weight=float(ranking.get("rating_weight", cls.rating_weight)),
            votes_weight=float(ranking.get("votes_weight", cls.votes_weight)),
            sentiment_weight=float(ranking.get("sentiment_weight", cls.sentiment_weight)),
            top_n=int(ranking.get("top_n", cls.top_n)),
            relevant_top_m=int(evaluation.get("relevant_top_m", cls.relevant_top_m)),
            case_sensitive_actor=bool(
                ranking.get("case_sensitive_actor", cls.case_sensitive_actor)
            ),
        )
