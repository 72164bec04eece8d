"""Main FastAPI application for Sudoku Solver."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes import _get_settings, router

_LOGGER = logging.getLogger(__name__)


@asynccontextmanager
async def _app_lifespan(_: FastAPI):
    """Eagerly validate solver settings so misconfiguration fails at startup."""
    settings, error = _get_settings()
    if error or settings is None:
        raise RuntimeError(f"Invalid solver settings at startup: {error}")
    _LOGGER.info(
        "Solver ready: default strategies=%r, max searches=%d, max block size=%d",
        settings.default_strategies,
        settings.max_searches,
        settings.max_block_size,
    )
    yield


app = FastAPI(
    title="Sudoku Solver API",
    description="API for solving N x N Sudoku puzzles with constraint propagation",
    version="1.0.0",
    lifespan=_app_lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": "Sudoku Solver API", "docs": "/docs"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("sudoku_engine.main:app", host="0.0.0.0", port=8000, reload=True)
