"""Unit tests for CLI command handling."""

from __future__ import annotations

from pathlib import Path

import pytest

from cli.main import main
from core.types import SplitDocument
from ingest.staging import StagingArea


@pytest.fixture(autouse=True)
def _local_backend(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BOOKLAKE_BACKEND", "local")
    monkeypatch.setenv("BOOKLAKE_LOCAL_ROOT", str(tmp_path / "lake"))
    monkeypatch.setenv("BOOKLAKE_ARCHIVE_BASE_URL", "http://127.0.0.1:9/epub")
    monkeypatch.setenv("BOOKLAKE_CONNECT_TIMEOUT", "0.2")


def test_cli_list_prints_nothing_for_empty_datalake(tmp_path: Path, capsys) -> None:
    """List should succeed on an empty datalake."""
    exit_code = main(["--staging-dir", str(tmp_path / "staging"), "list"])

    assert exit_code == 0 and capsys.readouterr().out == ""


def test_cli_pending_lists_staged_books(tmp_path: Path, capsys) -> None:
    """Pending should print staged ids one per line."""
    staging_dir = tmp_path / "staging"
    StagingArea(staging_dir).stage(9, SplitDocument(header="h", body="b"))

    exit_code = main(["--staging-dir", str(staging_dir), "pending"])

    assert exit_code == 0 and capsys.readouterr().out.split() == ["9"]


def test_cli_status_reports_not_found(tmp_path: Path, capsys) -> None:
    """Status should print the availability of a book."""
    exit_code = main(["--staging-dir", str(tmp_path / "staging"), "status", "5"])

    assert exit_code == 0 and capsys.readouterr().out.strip() == "5\tnot_found"


def test_cli_ingest_rejects_invalid_id(tmp_path: Path) -> None:
    """Invalid ids should be usage errors."""
    with pytest.raises(SystemExit) as error:
        main(["--staging-dir", str(tmp_path / "staging"), "ingest", "-3"])

    assert error.value.code == 2


def test_cli_ingest_reports_failed_download(tmp_path: Path, capsys) -> None:
    """Unreachable archives should produce exit code 1."""
    exit_code = main(["--staging-dir", str(tmp_path / "staging"), "ingest", "11"])

    assert exit_code == 1 and "not_started" in capsys.readouterr().out


@pytest.mark.parametrize("attempts", ["0", "-2", "many"])
def test_cli_ingest_random_rejects_non_positive_attempts(tmp_path: Path, attempts: str) -> None:
    """The draw budget must be a positive integer."""
    with pytest.raises(SystemExit) as error:
        main(["--staging-dir", str(tmp_path / "staging"), "ingest-random", "--attempts", attempts])

    assert error.value.code == 2
