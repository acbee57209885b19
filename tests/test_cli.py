"""Tests for the command line entry point."""

from unittest.mock import AsyncMock, patch

import pytest
import typer
from typer.testing import CliRunner

from ameblo_downloader.cli import main
from ameblo_downloader.core import DownloadReport, ErrorPolicy, NetworkError

runner = CliRunner()


@pytest.fixture
def cli_app() -> typer.Typer:
    app = typer.Typer()
    app.command()(main)
    return app


def test_missing_author(cli_app):
    result = runner.invoke(cli_app, [])
    assert result.exit_code == 2


def test_extra_argument(cli_app):
    result = runner.invoke(cli_app, ["one", "two"])
    assert result.exit_code == 2


def test_author_must_be_one_segment(cli_app, tmp_path):
    result = runner.invoke(cli_app, ["a/b", "--config", str(tmp_path / "none.yaml")])
    assert result.exit_code == 2


def test_run_passes_settings(cli_app, tmp_path):
    with patch("ameblo_downloader.cli.async_run", new=AsyncMock(return_value=DownloadReport())) as mock_run:
        result = runner.invoke(
            cli_app,
            [
                "author",
                "--config", str(tmp_path / "none.yaml"),
                "--output-dir", str(tmp_path / "out"),
                "--on-error", "skip",
            ],
        )
    
    assert result.exit_code == 0
    author, settings = mock_run.call_args.args
    assert author == "author"
    assert settings.output_dir == tmp_path / "out"
    assert settings.on_error == ErrorPolicy.SKIP


def test_fatal_error_exit_code(cli_app, tmp_path):
    with patch(
        "ameblo_downloader.cli.async_run",
        new=AsyncMock(side_effect=NetworkError("Failed to fetch page", url="https://ameblo.jp/author/entrylist.html")),
    ):
        result = runner.invoke(cli_app, ["author", "--config", str(tmp_path / "none.yaml")])
    
    assert result.exit_code == 1
    assert "Fatal" in result.output
    assert "Failed to fetch page" in result.output


def test_invalid_config_value(cli_app, tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("download:\n  on_error: ignore\n", encoding="utf-8")
    
    result = runner.invoke(cli_app, ["author", "--config", str(config_path)])
    
    assert result.exit_code == 2
    assert "download.on_error" in result.output


def test_unknown_config_key(cli_app, tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("download:\n  retries: 3\n", encoding="utf-8")
    
    result = runner.invoke(cli_app, ["author", "--config", str(config_path)])
    
    assert result.exit_code == 2
    assert "download.retries" in result.output
