"""
web/routes.py -- Jinja2 template routes for the userauth web UI.

These routes serve server-rendered HTML. They share app.state with the API
routes (same CredentialService) but return HTML instead of JSON.

Client session cache:
  The signed SessionMiddleware cookie plays the part of the client's local
  key-value store. Login writes session["user"] = {"id", "email"}; the
  dashboard reads it; logout removes the key. No server-side session state
  exists.

Routes:
  GET  /           -- 302 to /home
  GET  /home       -- login form
  POST /home       -- handle password login, 303 to /dashboard
  GET  /dashboard  -- welcome page for the cached user (302 /home if none)
  POST /logout     -- clear the cached user, 303 to /home
"""

import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from auth.dependencies import get_client_info, get_credential_service
from auth.errors import CredentialError
from core.config import get_settings
from core.limiter import limiter

logger = logging.getLogger("userauth.web")

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))
router = APIRouter()

_settings = get_settings()

# Key under which the logged-in user is cached in the session.
SESSION_USER_KEY = "user"


def _cached_user(request: Request) -> Optional[dict]:
    """Return the cached user blob, or None if absent or missing an email."""
    user = request.session.get(SESSION_USER_KEY)
    if isinstance(user, dict) and user.get("email"):
        return user
    return None


# ---------------------------------------------------------------------------
# GET / -- entry point
# ---------------------------------------------------------------------------


@router.get("/", response_class=HTMLResponse)
def index(request: Request) -> RedirectResponse:
    return RedirectResponse("/home", status_code=302)


# ---------------------------------------------------------------------------
# GET /home, POST /home -- login
# ---------------------------------------------------------------------------


@router.get("/home", response_class=HTMLResponse)
def login_form(request: Request) -> HTMLResponse:
    if _cached_user(request):
        return RedirectResponse("/dashboard", status_code=302)
    return templates.TemplateResponse(request, "home.html", {"error": None, "email": ""})


@router.post("/home", response_class=HTMLResponse)
@limiter.limit(_settings.login_rate_limit)  # must sit below @router.post
async def login_post(
    request: Request,
    email: str = Form(default=""),
    password: str = Form(default=""),
) -> HTMLResponse:
    """Authenticate through the credential service and cache the user.

    On failure the form is re-rendered with the service's public message;
    the email is echoed back (Jinja2 autoescapes it), the password never is.
    """
    service = get_credential_service(request)
    try:
        user = await service.authenticate(email, password, get_client_info(request))
    except CredentialError as exc:
        return templates.TemplateResponse(
            request,
            "home.html",
            {"error": exc.message, "email": email},
            status_code=exc.status_code,
        )

    request.session[SESSION_USER_KEY] = {"id": user.id, "email": user.email}
    return RedirectResponse("/dashboard", status_code=303)


# ---------------------------------------------------------------------------
# GET /dashboard
# ---------------------------------------------------------------------------


@router.get("/dashboard", response_class=HTMLResponse)
def dashboard(request: Request) -> HTMLResponse:
    user = _cached_user(request)
    if user is None:
        return RedirectResponse("/home", status_code=302)
    return templates.TemplateResponse(request, "dashboard.html", {"user": user})


# ---------------------------------------------------------------------------
# POST /logout
# ---------------------------------------------------------------------------


@router.post("/logout")
def logout(request: Request) -> RedirectResponse:
    """Drop the cached user and return to the login page."""
    user = request.session.pop(SESSION_USER_KEY, None)
    if user:
        logger.info("Logout - Email: %s", user.get("email"))
    return RedirectResponse("/home", status_code=303)
