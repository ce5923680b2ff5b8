"""
API request and response models for the userauth REST endpoints.

These Pydantic v2 models define the HTTP transport contract. They are kept
separate from the dataclasses in auth/models.py, which own the internal
domain representation. Route handlers map between the two.

Request fields are Optional on purpose: a missing field must produce the
service's 400 {"message": ...} response, not a schema error, so presence is
checked by auth.validation rather than by Pydantic.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class SignupRequest(BaseModel):
    """Request body for POST /signup."""

    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(BaseModel):
    """Request body for POST /login."""

    email: Optional[str] = None
    password: Optional[str] = None


class ChangePasswordRequest(BaseModel):
    """Request body for POST /change-password.

    The wire format is camelCase (oldPassword / newPassword); snake_case
    names are accepted too.
    """

    model_config = ConfigDict(populate_by_name=True)

    email: Optional[str] = None
    old_password: Optional[str] = Field(default=None, alias="oldPassword")
    new_password: Optional[str] = Field(default=None, alias="newPassword")


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class MessageResponse(BaseModel):
    """Body of every non-login response, success or error."""

    model_config = ConfigDict(frozen=True)

    message: str


class UserInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    email: str


class LoginResponse(BaseModel):
    """Response for a successful POST /login."""

    model_config = ConfigDict(frozen=True)

    message: str
    user: UserInfo


class HealthResponse(BaseModel):
    """Response for GET /health."""

    model_config = ConfigDict(frozen=True)

    status: str = "healthy"
    version: str
    components: dict[str, str]
