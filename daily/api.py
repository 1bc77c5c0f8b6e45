"""
FastAPI app factory. Serve with `uvicorn --factory daily.api:create_app`
or `python -m daily`.
"""
from __future__ import annotations

from fastapi import FastAPI

from . import __version__
from .config import AppConfig, load_config
from .repository import EntryRepository, new_repository
from .routes import base as base_routes
from .routes import entries as entries_routes


def create_app(config: AppConfig | None = None, repo: EntryRepository | None = None) -> FastAPI:
    """Build the app around one repository, opened here unless one is passed in.

    Raises SchemaInitError if the database cannot be bootstrapped.
    """
    config = config or load_config()
    if repo is None:
        repo = new_repository(config.db_path, config.schema_path)

    app = FastAPI(title="daily", version=__version__)
    app.state.config = config
    app.state.repo = repo

    app.include_router(base_routes.router)
    app.include_router(entries_routes.router)
    return app
