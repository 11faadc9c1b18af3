"""Shared test fixtures for all test modules."""

from pathlib import Path

import pytest

from taskigt.utils.logging import close_logging


@pytest.fixture(autouse=True)
def isolated_home(tmp_path_factory, monkeypatch):
    """
    Point Path.home() at a temporary directory for every test.

    Keeps config lookups, the default document store and the log file
    away from the real home directory, clears TASKIGT_* overrides and
    closes the log file afterwards.
    """
    fake_home = tmp_path_factory.mktemp("home")
    monkeypatch.setattr(Path, "home", lambda: fake_home)

    for name in (
        "TASKIGT_STORAGE_DIRECTORY",
        "TASKIGT_DOCUMENT_DEFAULT_TITLE",
        "TASKIGT_DOCUMENT_PASTED_TITLE",
        "TASKIGT_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)

    yield fake_home

    close_logging()


@pytest.fixture
def sample_text():
    """Canonical document with nesting, all kinds and a blank line."""
    return (
        "  - Groceries\n"
        "    ? buy milk\n"
        "    * compare coffee prices\n"
        "      # check the shop flyer\n"
        "\n"
        "  | quote\n"
    )


@pytest.fixture
def storage_dir(tmp_path):
    """Empty directory for a DocumentStorage."""
    directory = tmp_path / "documents"
    directory.mkdir()
    return directory
