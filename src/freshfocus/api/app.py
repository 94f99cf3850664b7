"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status

from freshfocus.api.inventory import router as inventory_router
from freshfocus.api.recipes import router as recipes_router
from freshfocus.api.schemas import Credentials
from freshfocus.app_logging import configure_logging
from freshfocus.containers import AppContainer
from freshfocus.domain.models import UserRecord
from freshfocus.services.users import AuthenticationError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "FreshFocus started",
            extra={"ingredients": len(app.state.container.fridge.store.all())},
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="FreshFocus", lifespan=lifespan)
    app.state.container = container

    app.include_router(inventory_router)
    app.include_router(recipes_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/auth/register", status_code=status.HTTP_201_CREATED)
    async def register(payload: Credentials, request: Request) -> dict[str, object]:
        """Create an account with the identity provider."""
        state_container: AppContainer = request.app.state.container
        try:
            user = state_container.user_service.register(
                payload.email, payload.password
            )
        except AuthenticationError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message
            ) from exc
        return _user_payload(user)

    @app.post("/auth/sign-in")
    async def sign_in(payload: Credentials, request: Request) -> dict[str, object]:
        """Sign in with the identity provider."""
        state_container: AppContainer = request.app.state.container
        try:
            user = state_container.user_service.sign_in(
                payload.email, payload.password
            )
        except AuthenticationError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message
            ) from exc
        return _user_payload(user)

    return app


def _user_payload(user: UserRecord) -> dict[str, object]:
    return {"id": user.id, "email": user.email}
