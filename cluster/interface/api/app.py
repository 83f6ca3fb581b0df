"""FastAPI application."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logfire

from cluster.config import Settings
from cluster.interface.api.errors import register_error_handlers
from cluster.interface.api.routes import (
    comments,
    health,
    investors,
    invitations,
    projects,
    stages,
    tasks,
    users,
    webhooks,
)
from cluster.interface.api.scheduler import create_scheduler
from cluster.util.di.container import create_container, setup_di
from cluster.util.observability import instrument_fastapi, instrument_httpx


@asynccontextmanager
async def lifespan(app_instance: FastAPI):
    """Run the invitation sweep for the lifetime of the app.

    The container is read from app state so a container swapped in with
    ``setup_di`` (tests) is the one the jobs use.
    """
    settings = Settings()
    container = app_instance.state.dishka_container
    scheduler = create_scheduler(container, settings.invitations)
    scheduler.start()
    logfire.info(
        "Scheduler started",
        jobs=[job.id for job in scheduler.get_jobs()],
    )
    try:
        yield
    finally:
        scheduler.shutdown(wait=False)
        logfire.info("Scheduler stopped")
        await container.close()


def create_app() -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    """
    settings = Settings()

    instrument_httpx()

    app_instance = FastAPI(
        title="Cluster API",
        description="Backend API for Cluster - project owners share progress with invited investors",
        version="0.1.0",
        lifespan=lifespan,
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",
            "http://localhost:5173",
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=["Authorization", "Content-Type", "Accept", "Origin"],
        max_age=600,
    )

    container = create_container()
    setup_di(app_instance, container)

    register_error_handlers(app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(projects.router)
    app_instance.include_router(stages.router)
    app_instance.include_router(tasks.router)
    app_instance.include_router(comments.router)
    app_instance.include_router(invitations.router)
    app_instance.include_router(investors.router)
    app_instance.include_router(users.router)
    app_instance.include_router(webhooks.router)

    return app_instance
