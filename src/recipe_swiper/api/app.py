"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from uuid import UUID

from fastapi import FastAPI, Query, Request, status
from fastapi.responses import JSONResponse

from recipe_swiper.api.admin import router as admin_router
from recipe_swiper.api.models import (
    SessionRequest,
    SessionStateResponse,
    StartSessionRequest,
    StartSessionResponse,
    SwipeDirection,
    SwipeRequest,
    SwipeResponse,
)
from recipe_swiper.app_logging import configure_logging
from recipe_swiper.containers import AppContainer
from recipe_swiper.services.sessions import SessionNotFoundError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app.state.container.load_reference_data()
        yield

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(admin_router)

    @app.exception_handler(SessionNotFoundError)
    async def session_not_found(
        request: Request, exc: SessionNotFoundError
    ) -> JSONResponse:
        logger.info("Unknown session: %s", exc.session_id)
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)}
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/session")
    async def start_session(
        body: StartSessionRequest, request: Request
    ) -> StartSessionResponse:
        """Start a swiping session and return its opening suggestion."""
        state_container: AppContainer = request.app.state.container
        session_id, outcome = state_container.session_service.start_session(
            body.preferences(), body.dietary_restrictions
        )
        opening = SwipeResponse.from_outcome(outcome)
        return StartSessionResponse(session_id=session_id, **opening.model_dump())

    @app.post("/swipe")
    async def swipe(body: SwipeRequest, request: Request) -> SwipeResponse:
        """Accept or reject an ingredient."""
        state_container: AppContainer = request.app.state.container
        session_service = state_container.session_service
        if body.direction is SwipeDirection.ACCEPT:
            outcome = session_service.accept_ingredient(
                body.session_id, body.ingredient_name
            )
        else:
            outcome = session_service.reject_ingredient(
                body.session_id, body.ingredient_name
            )
        return SwipeResponse.from_outcome(outcome)

    @app.post("/session/reset")
    async def reset_session(body: SessionRequest, request: Request) -> dict[str, bool]:
        """Clear a session's swipes."""
        state_container: AppContainer = request.app.state.container
        state_container.session_service.reset(body.session_id)
        return {"ok": True}

    @app.post("/session/end")
    async def end_session(body: SessionRequest, request: Request) -> dict[str, bool]:
        """Forget a session."""
        state_container: AppContainer = request.app.state.container
        state_container.session_service.end_session(body.session_id)
        return {"ok": True}

    @app.get("/session/state")
    async def session_state(
        request: Request, session_id: UUID = Query(alias="sessionId")
    ) -> SessionStateResponse:
        """Return a read-only snapshot of a session."""
        state_container: AppContainer = request.app.state.container
        snapshot = state_container.session_service.get_state(session_id)
        return SessionStateResponse.from_snapshot(snapshot)

    return app
