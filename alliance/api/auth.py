"""Login page, login form handler and logout."""

from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Depends, Form, Query, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from alliance.api.deps import current_user_optional, get_app_settings, get_authenticator
from alliance.auth.authenticator import Authenticator
from alliance.auth.errors import InvalidCredentials
from alliance.core.config import Settings
from alliance.core.security import PASSWORD_MAX_LEN, USERNAME_MAX_LEN
from alliance.models import User

router = APIRouter()

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parents[1] / "templates"))

DEFAULT_REDIRECT = "/"


def safe_redirect(to: str | None, default: str = DEFAULT_REDIRECT) -> str:
    """Only allow same-site absolute paths; anything else falls back to default."""
    if not to or not to.startswith("/") or to.startswith("//") or to.startswith("/\\"):
        return default
    return to


def _render_login(
    request: Request,
    settings: Settings,
    *,
    redirect_to: str,
    error: str = "",
    username: str = "",
    status_code: int = status.HTTP_200_OK,
) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "login.html",
        {
            "app_name": settings.APP_NAME,
            "redirect_to": redirect_to,
            "error": error,
            "username": username,
        },
        status_code=status_code,
    )


@router.get("/login", response_class=HTMLResponse)
def login_page(
    request: Request,
    settings: Annotated[Settings, Depends(get_app_settings)],
    user: Annotated[User | None, Depends(current_user_optional)],
    redirect_to: Annotated[str, Query(alias="redirectTo")] = DEFAULT_REDIRECT,
):
    """Render the login form, or skip it when a session is already active."""
    if user is not None:
        return RedirectResponse(url=safe_redirect(redirect_to), status_code=status.HTTP_302_FOUND)
    return _render_login(request, settings, redirect_to=safe_redirect(redirect_to))


@router.post("/login", response_class=HTMLResponse)
def login(
    request: Request,
    settings: Annotated[Settings, Depends(get_app_settings)],
    authenticator: Annotated[Authenticator, Depends(get_authenticator)],
    username: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
    remember: Annotated[bool, Form()] = False,
    redirect_to: Annotated[str, Form(alias="redirectTo")] = DEFAULT_REDIRECT,
):
    """
    Check the submitted credentials and start a session.

    Every failure re-renders the form with the same generic message.
    """
    redirect_to = safe_redirect(redirect_to)
    username = username.strip()
    try:
        if not username or len(username) > USERNAME_MAX_LEN or not password or len(password) > PASSWORD_MAX_LEN:
            raise InvalidCredentials()
        user = authenticator.login(username, password)
    except InvalidCredentials as e:
        return _render_login(
            request,
            settings,
            redirect_to=redirect_to,
            error=e.message,
            username=username,
            status_code=status.HTTP_400_BAD_REQUEST,
        )
    response = RedirectResponse(url=redirect_to, status_code=status.HTTP_303_SEE_OTHER)
    authenticator.create_session(response, user, remember=remember)
    return response


@router.post("/logout")
def logout(
    authenticator: Annotated[Authenticator, Depends(get_authenticator)],
) -> RedirectResponse:
    response = RedirectResponse(url="/login", status_code=status.HTTP_303_SEE_OTHER)
    authenticator.logout(response)
    return response
