import pandas as pd
from typer.testing import CliRunner

from imdb_hybrid.cli import app

runner = CliRunner()


def test_bad_catalog_path_exits_nonzero():
    result = runner.invoke(app, ["recommend", "--catalog-file", "missing_catalog.csv"])
    assert result.exit_code != 0
    assert "not found" in result.output.lower()


def test_catalog_or_config_required():
    result = runner.invoke(app, ["recommend"])
    assert result.exit_code == 1


def test_recommend_with_filters(sample_catalog_path, tmp_path):
    out = tmp_path / "recs.csv"
    result = runner.invoke(
        app,
        [
            "recommend",
            "--catalog-file",
            str(sample_catalog_path),
            "--actor",
            "Tom Hanks",
            "--min-rating",
            "8.0",
            "--export-csv",
            str(out),
        ],
    )
    assert result.exit_code == 0, result.output
    assert "Forrest Gump" in result.output
    assert "Apollo 13" not in result.output
    assert "Precision: " in result.output
    exported = pd.read_csv(out)
    assert set(exported["title"]) == {"Toy Story", "Forrest Gump", "Saving Private Ryan"}


def test_recommend_without_matches(sample_catalog_path):
    result = runner.invoke(
        app,
        ["recommend", "--catalog-file", str(sample_catalog_path), "--genre", "Western"],
    )
    assert result.exit_code == 0
    assert "No recommendations" in result.output
    assert "Precision: 0.0 | Accuracy: 0.0" in result.output


def test_invalid_rating_is_rejected(sample_catalog_path):
    result = runner.invoke(
        app,
        ["recommend", "--catalog-file", str(sample_catalog_path), "--min-rating", "11"],
    )
    assert result.exit_code == 1


def test_recommend_reads_config(sample_catalog_path, tmp_path, monkeypatch):
    monkeypatch.delenv("CATALOG_CSV_PATH", raising=False)
    monkeypatch.delenv("N_CLUSTERS", raising=False)
    cfg = tmp_path / "config.toml"
    cfg.write_text(
        f'[data]\ncatalog_csv_path = "{sample_catalog_path.as_posix()}"\n'
        "[ranking]\ntop_n = 2\n"
    )
    result = runner.invoke(app, ["recommend", "--config", str(cfg)])
    assert result.exit_code == 0, result.output
    assert "Top 2 Recommendations" in result.output


def test_clusters_command(sample_catalog_path, tmp_path):
    out = tmp_path / "clustered.csv"
    result = runner.invoke(
        app,
        [
            "clusters",
            "--catalog-file",
            str(sample_catalog_path),
            "--clusters",
            "3",
            "--export-csv",
            str(out),
        ],
    )
    assert result.exit_code == 0, result.output
    assert "3 clusters over 12 movies" in result.output
    clustered = pd.read_csv(out)
    assert set(clustered["cluster"]) == {0, 1, 2}


def test_clusters_command_rejects_large_k(sample_catalog_path):
    result = runner.invoke(
        app, ["clusters", "--catalog-file", str(sample_catalog_path), "--clusters", "40"]
    )
    assert result.exit_code == 1
    assert "clusters" in result.output


def test_options_lists_genres(sample_catalog_path):
    result = runner.invoke(
        app, ["options", "--catalog-file", str(sample_catalog_path), "--field", "genre"]
    )
    assert result.exit_code == 0
    lines = result.output.strip().splitlines()
    assert lines.index("All Genres") < lines.index("Crime, Drama")


def test_malformed_config_is_reported(tmp_path):
    cfg = tmp_path / "config.toml"
    cfg.write_text("[data\ncatalog_csv_path = ")
    result = runner.invoke(app, ["recommend", "--config", str(cfg)])
    assert result.exit_code == 1
    assert "cannot read config file" in result.output
    assert result.exception is None or isinstance(result.exception, SystemExit)


def test_missing_config_is_reported(tmp_path):
    result = runner.invoke(app, ["clusters", "--config", str(tmp_path / "none.toml")])
    assert result.exit_code == 1
    assert "config file not found" in result.output


def test_non_utf8_catalog_is_reported(tmp_path):
    bad = tmp_path / "catalog.csv"
    bad.write_bytes(b"Series_Title,Genre,IMDB_Rating\n\xff\xfeBad,Drama,8.0\n")
    for command in ("recommend", "clusters", "options"):
        result = runner.invoke(app, [command, "--catalog-file", str(bad)])
        assert result.exit_code == 1
        assert "cannot read catalog file" in result.output
