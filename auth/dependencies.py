"""
auth/dependencies.py -- FastAPI Depends() helpers shared by api/ and web/.

get_credential_service() hands route handlers the service instance built in
the application lifespan. get_client_info() captures the caller metadata the
audit trail records.

Layer rule: no imports from api/ or web/. This module may import from
fastapi because it is part of the dependency injection system.
"""

from __future__ import annotations

from fastapi import Request

from auth.models import ClientInfo
from auth.service import CredentialService


def get_credential_service(request: Request) -> CredentialService:
    return request.app.state.credentials


def get_client_info(request: Request) -> ClientInfo:
    """Return the caller's address and User-Agent header.

    Behind a reverse proxy request.client is the proxy; run uvicorn with
    --proxy-headers so it reflects X-Forwarded-For instead.
    """
    return ClientInfo(
        ip=request.client.host if request.client else "unknown",
        user_agent=request.headers.get("user-agent", ""),
    )
