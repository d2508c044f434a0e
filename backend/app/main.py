from __future__ import annotations

import argparse
import os
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.app.api import actors, auth, employments, performances, users
from backend.app.api.error_handlers import register_error_handlers
from backend.app.core.config import Settings, get_settings
from backend.app.core.container import AppContainer
from backend.app.core.logging import configure_logging
from backend.app.services.actor_service import ActorService
from backend.app.services.auth_service import AuthService
from backend.app.services.employment_service import EmploymentService
from backend.app.services.integrity_service import IntegrityService
from backend.app.services.performance_service import PerformanceService
from backend.app.services.user_service import UserService
from backend.app.storage.db import Database
from backend.app.storage.repositories.actor_repository import ActorRepository
from backend.app.storage.repositories.employment_repository import EmploymentRepository
from backend.app.storage.repositories.performance_repository import PerformanceRepository
from backend.app.storage.repositories.user_repository import UserRepository


def _build_container(settings: Settings) -> AppContainer:
    if settings.database_url.startswith("sqlite:///"):
        db_path = Path(settings.database_url.replace("sqlite:///", "", 1))
        db_path.parent.mkdir(parents=True, exist_ok=True)

    database = Database(settings.database_url)
    database.create_all()

    actor_repository = ActorRepository(database.session)
    performance_repository = PerformanceRepository(database.session)
    employment_repository = EmploymentRepository(database.session)
    user_repository = UserRepository(database.session)
    integrity_service = IntegrityService(
        unit_of_work=database.session,
        actor_repository=actor_repository,
        performance_repository=performance_repository,
        employment_repository=employment_repository,
    )
    actor_service = ActorService(
        repository=actor_repository,
        employment_repository=employment_repository,
        performance_repository=performance_repository,
        integrity_service=integrity_service,
    )
    performance_service = PerformanceService(
        repository=performance_repository,
        employment_repository=employment_repository,
        integrity_service=integrity_service,
    )
    employment_service = EmploymentService(
        repository=employment_repository,
        actor_repository=actor_repository,
        performance_repository=performance_repository,
        integrity_service=integrity_service,
    )
    user_service = UserService(repository=user_repository)
    auth_service = AuthService(settings=settings, repository=user_repository)

    return AppContainer(
        settings=settings,
        database=database,
        actor_repository=actor_repository,
        performance_repository=performance_repository,
        employment_repository=employment_repository,
        user_repository=user_repository,
        integrity_service=integrity_service,
        actor_service=actor_service,
        performance_service=performance_service,
        employment_service=employment_service,
        user_service=user_service,
        auth_service=auth_service,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    configure_logging(settings.debug, settings.log_level)

    container = _build_container(settings)
    app.state.container = container
    try:
        yield
    finally:
        container.database.engine.dispose()


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title=settings.app_name, version=settings.app_version, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    app.include_router(auth.router, prefix=settings.api_prefix)
    app.include_router(actors.router, prefix=settings.api_prefix)
    app.include_router(performances.router, prefix=settings.api_prefix)
    app.include_router(employments.router, prefix=settings.api_prefix)
    app.include_router(users.router)

    @app.get("/api/health")
    async def health() -> dict[str, str]:
        return {"status": "ok", "version": settings.app_version}

    return app


app = create_app()


def run() -> None:
    parser = argparse.ArgumentParser(description="Run the Theater API backend")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=3000)
    parser.add_argument("--log-level", default="info")
    parser.add_argument("--reload", action=argparse.BooleanOptionalAction, default=False)
    parser.add_argument("--access-log", action=argparse.BooleanOptionalAction, default=True)
    parser.add_argument("--debug", action=argparse.BooleanOptionalAction, default=None)
    parser.add_argument("--database-url", default=None, help="Override THEATER_DATABASE_URL.")
    args = parser.parse_args()

    if args.debug is True:
        os.environ["THEATER_DEBUG"] = "1"
    elif args.debug is False:
        os.environ["THEATER_DEBUG"] = "0"
    if args.database_url:
        os.environ["THEATER_DATABASE_URL"] = args.database_url

    get_settings.cache_clear()
    globals()["app"] = create_app()

    uvicorn.run(
        "backend.app.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level,
        access_log=args.access_log,
    )


if __name__ == "__main__":
    run()
