"""
api/routes/auth.py -- JSON credential endpoints.

Routes:
  POST /signup           -- register; 201 {message}
  POST /login            -- authenticate; 200 {message, user:{id,email}}
  POST /change-password  -- replace password; 200 {message}

Handlers stay thin: they pass the body and caller metadata to the
CredentialService and shape the success response. Every failure is a
CredentialError that the handler in api/main.py renders as {"message": ...}.

Security:
  POST /login carries its own, tighter rate limit in place of the global one.
  Cache-Control: no-store on every response that follows a password check.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from api.models import ChangePasswordRequest, LoginRequest, LoginResponse, MessageResponse, SignupRequest, UserInfo
from auth.dependencies import get_client_info, get_credential_service
from auth.models import ClientInfo
from auth.service import CredentialService
from core.config import get_settings
from core.limiter import limiter

router = APIRouter()

_settings = get_settings()


@router.post("/signup", response_model=MessageResponse, status_code=201)
async def signup(
    body: SignupRequest,
    service: CredentialService = Depends(get_credential_service),
    client: ClientInfo = Depends(get_client_info),
) -> MessageResponse:
    """Register a new account with email and password."""
    await service.register(body.email, body.password, client)
    return MessageResponse(message="User registered successfully")


@router.post("/login", response_model=LoginResponse)
@limiter.limit(_settings.login_rate_limit)  # must sit below @router.post
async def login(
    request: Request,
    body: LoginRequest,
    service: CredentialService = Depends(get_credential_service),
    client: ClientInfo = Depends(get_client_info),
) -> JSONResponse:
    """Check email and password; return the user's id and email.

    Wrong password and unknown email produce the same 401 body.
    """
    user = await service.authenticate(body.email, body.password, client)
    resp = JSONResponse(
        status_code=200,
        content=LoginResponse(
            message="Login successful",
            user=UserInfo(id=user.id, email=user.email),
        ).model_dump(),
    )
    resp.headers["Cache-Control"] = "no-store"
    return resp


@router.post("/change-password", response_model=MessageResponse)
async def change_password(
    body: ChangePasswordRequest,
    service: CredentialService = Depends(get_credential_service),
    client: ClientInfo = Depends(get_client_info),
) -> JSONResponse:
    await service.change_password(body.email, body.old_password, body.new_password, client)
    resp = JSONResponse(content=MessageResponse(message="Password changed successfully").model_dump())
    resp.headers["Cache-Control"] = "no-store"
    return resp
