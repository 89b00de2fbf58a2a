from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError

from envelope_budget.api.middleware.error_handler import (
    handle_budget_error,
    handle_generic_error,
    handle_integrity_error,
    handle_validation_error,
)
from envelope_budget.api.middleware.logging import RequestLoggingMiddleware, configure_logging
from envelope_budget.api.v1 import router as v1_router
from envelope_budget.api.v1.health import router as health_router
from envelope_budget.config import settings
from envelope_budget.core.exceptions import BudgetError


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.log_level, json_output=settings.log_json)
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="Envelope Budget API",
        description="Envelope budgeting with bank transaction sync and rule-based categorization",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(RequestLoggingMiddleware)

    # Register exception handlers (order matters - most specific first)
    app.add_exception_handler(BudgetError, handle_budget_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(IntegrityError, handle_integrity_error)
    app.add_exception_handler(Exception, handle_generic_error)

    app.include_router(health_router)
    app.include_router(v1_router)

    return app


app = create_app()
