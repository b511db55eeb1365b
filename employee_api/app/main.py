"""
Main entrypoint for the Employee API.

This module assembles the FastAPI application: it sets up logging,
builds the record store, the validator registry and the employee
service, registers the exception handlers and includes the versioned
routers.  ``create_app`` does the work; the module-level ``app`` is
created at import time so it can be served directly::

    uvicorn employee_api.app.main:app --reload

Tests call ``create_app`` with their own settings or record store.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI

from .api.errors import register_exception_handlers
from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.db import init_db
from .core.logging_config import setup_logging
from .core.repository import InMemoryRepository, Repository
from .core.seed import seed_employees
from .core.validation import ConfigurationError, ValidationPipeline
from .schemas.employee import Employee
from .services.employee_repository import SqliteEmployeeRepository
from .services.employee_service import EmployeeService
from .services.validators import build_validator_registry

logger = logging.getLogger(__name__)


def build_repository(config: Settings) -> Repository[Employee]:
    """Create the record store selected by ``config.storage_backend``."""
    if config.storage_backend == "memory":
        return InMemoryRepository(children="benefits", owner_field="employee_id")
    if config.storage_backend == "sqlite":
        return SqliteEmployeeRepository(config.database_url)
    raise ConfigurationError(f"Unknown storage backend {config.storage_backend!r}")


def create_app(
    settings: Optional[Settings] = None,
    repository: Optional[Repository[Employee]] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use; defaults to the environment-derived
        ``core.config.settings``.
    repository : Optional[Repository[Employee]]
        Record store to use instead of the one selected by
        ``settings.storage_backend``.

    Returns
    -------
    FastAPI
        A configured application.  The SQLite schema is created and
        sample data seeded (if enabled) when the application starts.
    """
    config = settings or default_settings
    # Initialise logging before anything else so the wiring below can log.
    setup_logging(config.log_level, config.log_file)

    store = repository if repository is not None else build_repository(config)
    registry = build_validator_registry(store, max_page_size=config.max_page_size)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("Starting %s v%s with %s store", config.project_name,
                    config.api_version, type(store).__name__)
        if isinstance(store, SqliteEmployeeRepository):
            init_db(store.db_path)
        if config.seed_data:
            await seed_employees(store)
        yield
        logger.info("Shutting down")

    app = FastAPI(
        title=config.project_name,
        version=config.api_version,
        debug=config.debug,
        lifespan=lifespan,
    )
    app.state.settings = config
    app.state.repository = store
    app.state.validator_registry = registry
    app.state.validation_pipeline = ValidationPipeline(registry)
    app.state.employee_service = EmployeeService(store, default_page_size=config.default_page_size)

    register_exception_handlers(app)
    app.include_router(v1_router, prefix=config.api_prefix)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
