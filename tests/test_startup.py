"""Tests for application startup behavior."""

import pytest

from sudoku_engine import main
from sudoku_engine.api.routes import SolverSettings


@pytest.mark.asyncio
async def test_app_lifespan_fails_when_settings_invalid(monkeypatch):
    monkeypatch.setattr(
        main, "_get_settings", lambda: (None, "SUDOKU_MAX_SEARCHES must be positive")
    )

    with pytest.raises(RuntimeError, match="Invalid solver settings at startup"):
        async with main._app_lifespan(main.app):
            pass


@pytest.mark.asyncio
async def test_app_lifespan_fails_when_settings_missing_without_error(monkeypatch):
    monkeypatch.setattr(main, "_get_settings", lambda: (None, None))

    with pytest.raises(RuntimeError, match="Invalid solver settings at startup"):
        async with main._app_lifespan(main.app):
            pass


@pytest.mark.asyncio
async def test_app_lifespan_succeeds_with_valid_settings(monkeypatch):
    monkeypatch.setattr(main, "_get_settings", lambda: (SolverSettings(), None))

    async with main._app_lifespan(main.app):
        pass


@pytest.mark.asyncio
async def test_root_points_to_docs():
    assert await main.root() == {"message": "Sudoku Solver API", "docs": "/docs"}
