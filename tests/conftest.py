"""
Shared pytest fixtures for the todosync test suite.

Fixture Categories:
- Domain: sample task payloads
- Remote: in-memory task service, SyncEngine wired to it
- Configuration: an isolated working directory without TODOSYNC_* variables
- CLI: argument parser
"""

from __future__ import annotations

from typing import Any

import pytest

from tests.fakes import FakeTaskService
from todosync.application.sync import SyncEngine, TaskStore


# =============================================================================
# Domain Fixtures
# =============================================================================


@pytest.fixture
def task_payload() -> dict[str, Any]:
    """A task record as the REST store sends it."""
    return {
        "id": 1,
        "title": "Buy books",
        "description": "For the new term",
        "completed": False,
        "createdAt": "2024-01-15T10:30:00",
        "updatedAt": "2024-01-15T10:30:00",
    }


@pytest.fixture
def envelope():
    """Factory wrapping data in the store's {success, message, data} envelope."""

    def make(data: Any = None, message: str = "Success", success: bool = True) -> dict[str, Any]:
        return {"success": success, "message": message, "data": data}

    return make


# =============================================================================
# Remote Service & Engine Fixtures
# =============================================================================


@pytest.fixture
def fake_service() -> FakeTaskService:
    return FakeTaskService()


@pytest.fixture
def store() -> TaskStore:
    return TaskStore()


@pytest.fixture
def engine(fake_service: FakeTaskService, store: TaskStore) -> SyncEngine:
    """SyncEngine on the in-memory service, no settle delay."""
    return SyncEngine(fake_service, store=store)


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """
    Run in an empty directory with no TODOSYNC_* variables and a clean home.

    Returns the working directory.
    """
    for name in (
        "TODOSYNC_API_URL",
        "TODOSYNC_TIMEOUT",
        "TODOSYNC_MAX_RETRIES",
        "TODOSYNC_SETTLE_DELAY",
        "TODOSYNC_VERBOSE",
    ):
        monkeypatch.delenv(name, raising=False)

    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    monkeypatch.chdir(work)
    return work


# =============================================================================
# CLI Fixtures
# =============================================================================


@pytest.fixture
def cli_parser():
    """Create the CLI argument parser."""
    from todosync.cli.app import create_parser

    return create_parser()
