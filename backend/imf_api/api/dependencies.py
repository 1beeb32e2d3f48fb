"""
API Dependencies
Bearer token gate for protected endpoints.
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from imf_api.exceptions import UnauthorizedError
from imf_api.services import auth_service

# auto_error=False so the gate can tell "no header" from "bad header"
bearer_scheme = HTTPBearer(auto_error=False, bearerFormat="JWT")


@dataclass(frozen=True)
class TokenUser:
    """Identity decoded from a verified session token."""
    id: str
    email: str


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> TokenUser:
    """
    Verify the bearer token by signature and expiry only.
    No database lookup is made, so a token stays valid for its whole
    lifetime even if the account changes afterwards.
    """
    if not request.headers.get("Authorization"):
        raise UnauthorizedError("No token provided.")

    if credentials is None:
        raise UnauthorizedError("Invalid token.")

    payload = auth_service.decode_access_token(credentials.credentials)
    if not payload:
        raise UnauthorizedError("Invalid token.")

    user_id = payload.get("id")
    email = payload.get("email")
    if not user_id or not email:
        raise UnauthorizedError("Invalid token.")

    user = TokenUser(id=str(user_id), email=email)
    request.state.user = user
    return user
