"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stackit.config import Settings
from stackit.interface.api.errors import register_error_handlers
from stackit.interface.api.routes import (
    answers,
    health,
    questions,
    tags,
    users,
    votes,
)
from stackit.util.di.container import create_container, setup_di
from stackit.util.observability import instrument_fastapi


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Logfire must be configured before this is called: `scripts/start_app.py`
    does it for the server, `tests/conftest.py` for the test suite.

    Args:
        container: DI container; tests pass one built with in-memory
            persistence, the server uses the production container
    """
    settings = Settings()

    app_instance = FastAPI(
        title="StackIt API",
        description="Backend API for StackIt, a question and answer forum with voting",
        version="0.1.0",
    )

    instrument_fastapi(app_instance)

    # The browser client authenticates with the auth_token cookie
    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept"],
        max_age=600,
    )

    setup_di(app_instance, container or create_container())
    register_error_handlers(app_instance)

    for module in (health, users, questions, answers, votes, tags):
        app_instance.include_router(module.router)

    return app_instance
