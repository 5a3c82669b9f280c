from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import numpy as np
import pandas as pd

from .errors import CatalogSchemaError
from .schemas import ALL, ALL_GENRES

logger = logging.getLogger(__name__)

CAST_COLUMNS = ["star1", "star2", "star3", "star4"]
CATALOG_COLUMNS = [
    "title",
    "release_year",
    "genre",
    "director",
    *CAST_COLUMNS,
    "imdb_rating",
    "votes",
    "overview",
]


def _norm_cols(df: pd.DataFrame) -> pd.DataFrame:
    df = df.copy()
    df.columns = [str(c).strip().lower().replace(" ", "_") for c in df.columns]
    return df


def _pick(df: pd.DataFrame, names: list[str]) -> str | None:
    for n in names:
        if n in df.columns:
            return n
    return None


def _text(s: pd.Series) -> pd.Series:
    return s.astype("string").str.strip()


def _parse_year(s: pd.Series) -> pd.Series:
    # non-numeric and fractional years both become missing
    years = pd.to_numeric(s, errors="coerce").astype("Float64")
    return years.where(years.mod(1).eq(0).fillna(False)).astype("Int64")


@dataclass
class IngestResult:
    catalog: pd.DataFrame
    warnings: list[str] = field(default_factory=list)


def normalize_catalog(df: pd.DataFrame) -> IngestResult:
    """Map a reference-dataset table onto the canonical catalog columns.

    Accepts either the reference column names (``Series_Title``,
    ``Released_Year``, ``IMDB_Rating``, ``No_of_Votes``, ...) or the canonical
    snake_case names. Columns outside the schema, such as ``Poster_Link``, are
    dropped. Unparseable years become missing rather than zero.
    """
    df = _norm_cols(df)
    title_col = _pick(df, ["series_title", "title"])
    genre_col = _pick(df, ["genre", "genres"])
    rating_col = _pick(df, ["imdb_rating", "rating"])
    if not title_col or not genre_col or not rating_col:
        raise CatalogSchemaError(
            "Catalog must provide Series_Title, Genre and IMDB_Rating columns; "
            f"found {list(df.columns)}"
        )
    year_col = _pick(df, ["released_year", "release_year", "year"])
    director_col = _pick(df, ["director"])
    votes_col = _pick(df, ["no_of_votes", "votes", "num_votes"])
    overview_col = _pick(df, ["overview"])

    warnings: list[str] = []
    out = pd.DataFrame(index=df.index)
    out["title"] = _text(df[title_col])
    out["release_year"] = _parse_year(df[year_col]) if year_col else pd.NA
    out["release_year"] = out["release_year"].astype("Int64")
    out["genre"] = _text(df[genre_col]).fillna("")
    out["director"] = _text(df[director_col]) if director_col else pd.NA
    for col in CAST_COLUMNS:
        out[col] = _text(df[col]) if col in df.columns else pd.NA
        out[col] = out[col].astype("string")
    out["imdb_rating"] = pd.to_numeric(df[rating_col], errors="coerce")
    if votes_col:
        raw = df[votes_col]
        if not pd.api.types.is_numeric_dtype(raw):
            raw = raw.astype(str).str.replace(",", "", regex=False)
        votes = pd.to_numeric(raw, errors="coerce")
    else:
        votes = pd.Series(np.nan, index=df.index)
    out["votes"] = votes.fillna(0).clip(lower=0).astype("int64")
    out["overview"] = _text(df[overview_col]).fillna("") if overview_col else ""

    bad_year = int(out["release_year"].isna().sum())
    if year_col and bad_year:
        warnings.append(f"{bad_year} rows have a missing or unparseable release year")

    missing_rating = out["imdb_rating"].isna()
    if missing_rating.any():
        warnings.append(f"dropped {int(missing_rating.sum())} rows without an IMDB rating")
        out = out[~missing_rating]

    for w in warnings:
        logger.warning("Catalog: %s", w)
    return IngestResult(catalog=out[CATALOG_COLUMNS].reset_index(drop=True), warnings=warnings)


def load_catalog(path: str | Path) -> IngestResult:
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(f"Catalog file not found: {p}")
    df = pd.read_csv(p, encoding="utf-8")
    res = normalize_catalog(df)
    logger.info("Loaded %d catalog rows from %s", len(res.catalog), p)
    return res


def cast_members(row: pd.Series) -> list[str]:
    return [str(row[c]) for c in CAST_COLUMNS if c in row.index and pd.notna(row[c])]


def catalog_options(catalog: pd.DataFrame) -> dict[str, list[str]]:
    """Sorted filter choices for genre, actor and director, sentinels first."""
    genres = sorted({g for g in catalog["genre"].dropna().astype(str) if g})
    directors = sorted({d for d in catalog["director"].dropna().astype(str) if d})
    actors = sorted(
        {a for c in CAST_COLUMNS for a in catalog[c].dropna().astype(str) if a}
    )
    return {
        "genre": [ALL_GENRES, *genres],
        "actor": [ALL, *actors],
        "director": [ALL, *directors],
    }


def export_frame(df: pd.DataFrame, out_path: str | Path) -> Path:
    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    if out.suffix.lower() == ".parquet":
        df.to_parquet(out, index=False)
    else:
        df.to_csv(out, index=False)
    return out
