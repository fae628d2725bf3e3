"""
Application factory shared by the voters, polls and votes services.

Every service gets the same stack: CORS, a request counter feeding
``/<entities>/health``, error handlers mapping the store exceptions to HTTP
statuses and the ``/crash`` fault-injection endpoint. Only the router and the
services wired into ``app.state`` differ.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import BaseHTTPMiddleware

from voting_api.core.config import Settings, get_settings
from voting_api.core.errors import (
    AlreadyExistsError,
    BackendUnavailableError,
    MalformedInputError,
    NotFoundError,
    PartialFailureError,
    VotingError,
)
from voting_api.core.logging_config import setup_logging
from voting_api.core.metrics import HealthMetrics
from voting_api.db.create_tables import create_all
from voting_api.db.session import build_engine
from voting_api.repositories.kv_store import KeyValueStore
from voting_api.repositories.stores import poll_store, vote_store, voter_store
from voting_api.routers import polls as polls_router
from voting_api.routers import votes as votes_router
from voting_api.routers import voters as voters_router
from voting_api.routers.health import crash_router, health_router
from voting_api.services.poll_service import PollService
from voting_api.services.vote_service import VoteService
from voting_api.services.voter_service import VoterService

logger = logging.getLogger(__name__)

SERVICES = ("voters", "polls", "votes")

_ERROR_STATUS = (
    (MalformedInputError, 400),
    (NotFoundError, 404),
    (AlreadyExistsError, 409),
    (PartialFailureError, 500),
    (BackendUnavailableError, 500),
)


class CallCounterMiddleware(BaseHTTPMiddleware):
    """Count every handled request for the health report."""

    def __init__(self, app, *, metrics: HealthMetrics) -> None:
        super().__init__(app)
        self._metrics = metrics

    async def dispatch(self, request, call_next):
        self._metrics.record_call()
        return await call_next(request)


def _status_for(exc: VotingError) -> int:
    for exc_type, status in _ERROR_STATUS:
        if isinstance(exc, exc_type):
            return status
    return 500


async def _voting_error_handler(request: Request, exc: VotingError) -> JSONResponse:
    status = _status_for(exc)
    log = logger.error if status >= 500 else logger.warning
    log("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status, content={"detail": str(exc)})


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]
    logger.warning("%s %s malformed input: %s", request.method, request.url.path, errors)
    return JSONResponse(status_code=400, content={"detail": errors})


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("%s %s crashed: %s", request.method, request.url.path, exc, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


def _wire_services(app: FastAPI, service: str, backend: KeyValueStore, settings: Settings) -> None:
    if service == "voters":
        app.state.voter_service = VoterService(voter_store(backend))
        app.include_router(health_router("/voters"))
        app.include_router(voters_router.router)
    elif service == "polls":
        app.state.poll_service = PollService(poll_store(backend, settings))
        app.include_router(health_router("/polls"))
        app.include_router(polls_router.router)
    else:
        app.state.vote_service = VoteService(
            vote_store(backend, settings),
            voters=voter_store(backend),
            polls=poll_store(backend, settings),
        )
        app.include_router(health_router("/votes"))
        app.include_router(votes_router.router)


def create_app(
    service: str,
    *,
    settings: Optional[Settings] = None,
    backend: Optional[KeyValueStore] = None,
) -> FastAPI:
    """Build the FastAPI application of one service (``voters``, ``polls`` or ``votes``)."""
    if service not in SERVICES:
        raise ValueError(f"unknown service {service!r}; expected one of {', '.join(SERVICES)}")
    settings = settings or get_settings()
    setup_logging(settings.log_level)
    owned_engine = None
    if backend is None:
        owned_engine = build_engine(settings.database_url)
        backend = KeyValueStore(owned_engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        try:
            create_all(backend.engine)
        except SQLAlchemyError as exc:
            logger.error(
                "Error preparing backend at %s: %s", backend.engine.url.render_as_string(hide_password=True), exc
            )
            raise BackendUnavailableError(f"cannot prepare backend: {exc}") from exc
        backend.ping()
        logger.info("%s service ready (%s)", service, settings.app_env)
        yield
        if owned_engine is not None:
            owned_engine.dispose()

    app = FastAPI(title=f"Voting {service.capitalize()} API", lifespan=lifespan)
    app.state.metrics = HealthMetrics()

    app.add_middleware(CallCounterMiddleware, metrics=app.state.metrics)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_exception_handler(VotingError, _voting_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)

    _wire_services(app, service, backend, settings)
    app.include_router(crash_router)
    return app
