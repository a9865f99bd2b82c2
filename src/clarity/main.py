import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from clarity import __version__
from clarity.api.middleware.error_handler import (
    handle_clarity_error,
    handle_database_error,
    handle_generic_error,
    handle_integrity_error,
    handle_validation_error,
)
from clarity.api.middleware.logging import RequestLoggingMiddleware
from clarity.api.v1 import router as api_router
from clarity.api.v1.health import router as health_router
from clarity.config import settings
from clarity.core.exceptions import ClarityError
from clarity.core.logging import setup_logging
from clarity.db.session import init_models

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    await init_models()
    logger.info(f"Clarity API started ({settings.app_env})")
    yield
    # Shutdown


def create_app() -> FastAPI:
    setup_logging(settings.log_level, json_format=settings.log_json)

    app = FastAPI(
        title="Clarity API",
        description="Personal finance tracking with AI-assisted categorization",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register exception handlers (order matters - most specific first)
    app.add_exception_handler(ClarityError, handle_clarity_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(IntegrityError, handle_integrity_error)
    app.add_exception_handler(SQLAlchemyError, handle_database_error)
    app.add_exception_handler(Exception, handle_generic_error)

    app.include_router(health_router)
    app.include_router(health_router, prefix="/api")
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host=settings.host, port=settings.port)
