from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd
import typer
from pydantic import ValidationError

from .clustering import cluster_summary
from .config import AppConfig
from .data_io import IngestResult, catalog_options, export_frame, load_catalog
from .errors import ImdbHybridError
from .pipeline import prepare_catalog, run_pipeline
from .schemas import ALL, ALL_GENRES, RecommendationRequest

app = typer.Typer(help="Hybrid IMDb movie recommender: rating, popularity and sentiment")


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _read_config(config: str) -> AppConfig:
    if not Path(config).is_file():
        typer.echo(f"❌ config file not found: {config}", err=True)
        raise typer.Exit(1)
    try:
        return AppConfig.from_file(config)
    except (OSError, ValueError) as exc:  # TOMLDecodeError is a ValueError
        typer.echo(f"❌ cannot read config file: {exc}", err=True)
        raise typer.Exit(1) from exc


def _read_catalog(path: str) -> IngestResult:
    try:
        return load_catalog(path)
    except (OSError, UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        typer.echo(f"❌ cannot read catalog file: {exc}", err=True)
        raise typer.Exit(1) from exc


def _resolve_config(catalog: str | None, config: str | None) -> AppConfig:
    cfg = _read_config(config) if config else AppConfig()
    if catalog:
        cfg.catalog_csv_path = catalog
    elif not config:
        typer.echo("❌ Provide --config or --catalog-file", err=True)
        raise typer.Exit(1)
    if not Path(cfg.catalog_csv_path).is_file():
        typer.echo(f"❌ catalog file not found: {cfg.catalog_csv_path}", err=True)
        raise typer.Exit(1)
    return cfg


@app.command()
def recommend(
    catalog: str | None = typer.Option(None, "--catalog-file", help="Path to catalog CSV file"),
    config: str | None = typer.Option(None, help="Path to config TOML file"),
    genre: str = typer.Option(ALL_GENRES, help="Exact genre label, or 'All Genres'"),
    actor: str = typer.Option(ALL, help="Substring of a cast member, or 'All'"),
    director: str = typer.Option(ALL, help="Exact director name, or 'All'"),
    min_rating: float = typer.Option(1.0, help="Minimum IMDB rating (1-10, inclusive)"),
    year_from: int | None = typer.Option(None, help="First release year (inclusive)"),
    year_to: int | None = typer.Option(None, help="Last release year (inclusive)"),
    topk: int | None = typer.Option(None, help="Number of recommendations to show"),
    clusters: int | None = typer.Option(None, help="Number of k-means clusters"),
    export_csv: str | None = typer.Option(None, help="Export recommendations to CSV file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log pipeline stages"),
):
    """Rank the catalog for the given filters and report precision/accuracy."""
    _setup_logging(verbose)
    cfg = _resolve_config(catalog, config)
    if topk is not None:
        cfg.top_n = topk
    if clusters is not None:
        cfg.n_clusters = clusters

    year_range = None
    if year_from is not None or year_to is not None:
        year_range = (
            year_from if year_from is not None else 0,
            year_to if year_to is not None else 9999,
        )

    try:
        request = RecommendationRequest(
            genre=genre,
            actor=actor,
            director=director,
            min_rating=min_rating,
            year_range=year_range,
        )
        res = _read_catalog(cfg.catalog_csv_path)
        result = run_pipeline(res.catalog, request, cfg)
    except (ImdbHybridError, ValidationError) as exc:
        typer.echo(f"❌ {exc}", err=True)
        raise typer.Exit(1) from exc

    if result.message:
        typer.echo(f"❌ {result.message}")
    else:
        typer.echo(f"\n🎬 Top {len(result.recommendations)} Recommendations:")
        typer.echo("=" * 80)
        for rec in result.as_recommendations():
            year = rec.release_year or ""
            typer.echo(f"{rec.rank:2d}. {rec.title} ({year})")
            typer.echo(
                f"    🎯 Score: {rec.final_score:.3f}  ⭐ {rec.imdb_rating:.1f}  "
                f"🗳 {rec.votes}  🎬 {rec.genre or ''}  cluster {rec.cluster}"
            )
        typer.echo()
    typer.echo(result.evaluation_text)

    if export_csv:
        export_frame(result.recommendations, export_csv)
        typer.echo(f"💾 Exported {len(result.recommendations)} recommendations to {export_csv}")


@app.command()
def clusters(
    catalog: str | None = typer.Option(None, "--catalog-file", help="Path to catalog CSV file"),
    config: str | None = typer.Option(None, help="Path to config TOML file"),
    n_clusters: int | None = typer.Option(None, "--clusters", help="Number of k-means clusters"),
    export_csv: str | None = typer.Option(None, help="Export clustered catalog to CSV file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log pipeline stages"),
):
    """Cluster the catalog over genre code and sentiment and summarise each cluster."""
    _setup_logging(verbose)
    cfg = _resolve_config(catalog, config)
    if n_clusters is not None:
        cfg.n_clusters = n_clusters
    try:
        res = _read_catalog(cfg.catalog_csv_path)
        clustered = prepare_catalog(res.catalog, cfg)
    except ImdbHybridError as exc:
        typer.echo(f"❌ {exc}", err=True)
        raise typer.Exit(1) from exc

    summary = cluster_summary(clustered)
    typer.echo(f"\n🧩 {len(summary)} clusters over {len(clustered)} movies:")
    typer.echo("=" * 80)
    for row in summary.itertuples(index=False):
        typer.echo(
            f"{row.cluster:2d}. size={row.size:<5d} genre_code={row.mean_genre_code:7.2f}  "
            f"sentiment={row.mean_sentiment:6.3f}  rating={row.mean_rating:.2f}  "
            f"top genre: {row.top_genre}"
        )

    if export_csv:
        export_frame(clustered, export_csv)
        typer.echo(f"💾 Exported clustered catalog to {export_csv}")


@app.command()
def options(
    catalog: str | None = typer.Option(None, "--catalog-file", help="Path to catalog CSV file"),
    config: str | None = typer.Option(None, help="Path to config TOML file"),
    field: str = typer.Option("genre", help="One of genre, actor, director"),
):
    """List the filter choices available in the catalog."""
    cfg = _resolve_config(catalog, config)
    try:
        res = _read_catalog(cfg.catalog_csv_path)
    except ImdbHybridError as exc:
        typer.echo(f"❌ {exc}", err=True)
        raise typer.Exit(1) from exc
    choices = catalog_options(res.catalog)
    if field not in choices:
        typer.echo(f"❌ Unknown field: {field}", err=True)
        raise typer.Exit(1)
    for value in choices[field]:
        typer.echo(value)


if __name__ == "__main__":
    app()
