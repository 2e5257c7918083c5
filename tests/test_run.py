"""Tests for the command-line entry point."""

import logging
from pathlib import Path

import pytest
import yaml

from run import main

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("BOOKVAULT_DB_PATH", raising=False)
    monkeypatch.delenv("BOOKVAULT_LOG_LEVEL", raising=False)
    path = tmp_path / "config.yaml"
    path.write_text(
        yaml.dump({"storage": {"sqlite_path": str(tmp_path / "db" / "vault.db")}}),
        encoding="utf-8",
    )
    return path


class TestMain:
    def test_empty_library(self, config_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--config", str(config_file)]) == 0
        out = capsys.readouterr().out
        assert "Books: 0" in out
        assert "Last 7 days: 0 0 0 0 0 0 0" in out

    def test_highlights_matching_tag(
        self, config_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        code = main(
            [
                "--config",
                str(config_file),
                "--import",
                str(FIXTURES_DIR / "sample_export.json"),
                "--query",
                "SciFi",
            ]
        )
        assert code == 0
        out = capsys.readouterr().out
        assert "Dune | Herbert | 412 | <mark>SciFi</mark> | 2024-01-01" in out
        assert "The Hobbit" not in out

    def test_missing_import_file(
        self, config_file: Path, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.ERROR):
            code = main(["--config", str(config_file), "--import", str(tmp_path / "nope.json")])
        assert code == 1
        assert "Import failed" in caplog.text

    def test_scrape_adds_books(self, config_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(
            ["--config", str(config_file), "--scrape", str(FIXTURES_DIR / "sample_listing.html")]
        )
        assert code == 0
        out = capsys.readouterr().out
        assert "Dune | Frank Herbert | 100 | Scraped" in out

    def test_missing_scrape_file(
        self, config_file: Path, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.ERROR):
            code = main(["--config", str(config_file), "--scrape", str(tmp_path / "nope.html")])
        assert code == 1
        assert "Scrape failed" in caplog.text
