"""FastAPI application entrypoint. No business logic; only wiring, middleware and error handlers."""

import logging
from urllib.parse import urlencode

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, RedirectResponse

from alliance import __version__
from alliance.api import router
from alliance.auth.authorizer import CLEAR_SESSION_FLAG
from alliance.auth.errors import Forbidden, Unauthenticated, Unauthorized
from alliance.auth.session import SessionCodec
from alliance.core.config import Settings, get_settings
from alliance.core.database import Database

logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"


def login_url(redirect_to: str) -> str:
    return f"{LOGIN_PATH}?{urlencode({'redirectTo': redirect_to})}"


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """Build the app around explicit settings; tests pass their own settings and database."""
    settings = settings or get_settings()
    codec = SessionCodec.from_settings(settings)

    app = FastAPI(
        title=f"{settings.APP_NAME} API",
        version=__version__,
        docs_url="/docs" if settings.APP_ENV == "dev" else None,
        redoc_url=None,
    )
    app.state.settings = settings
    app.state.database = database or Database(settings)
    app.state.session_codec = codec

    @app.middleware("http")
    async def _clear_stale_session(request: Request, call_next):
        response = await call_next(request)
        if getattr(request.state, CLEAR_SESSION_FLAG, False):
            codec.destroy(response)
        return response

    @app.exception_handler(Unauthenticated)
    async def _unauthenticated(request: Request, exc: Unauthenticated) -> RedirectResponse:
        return RedirectResponse(url=login_url(exc.redirect_to), status_code=status.HTTP_302_FOUND)

    @app.exception_handler(Unauthorized)
    async def _unauthorized(request: Request, exc: Unauthorized) -> JSONResponse:
        logger.warning(
            "Unauthorized: user_id=%s role=%s path=%s",
            exc.user.id,
            exc.user.role.value,
            request.url.path,
        )
        return JSONResponse(status_code=status.HTTP_401_UNAUTHORIZED, content={"detail": exc.message})

    @app.exception_handler(Forbidden)
    async def _forbidden(request: Request, exc: Forbidden) -> JSONResponse:
        logger.warning(
            "Forbidden: user_id=%s role=%s path=%s",
            exc.user.id,
            exc.user.role.value,
            request.url.path,
        )
        return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content={"detail": exc.message})

    app.include_router(router)

    @app.get("/")
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": f"{settings.APP_NAME} API"}

    return app


app = create_app()
