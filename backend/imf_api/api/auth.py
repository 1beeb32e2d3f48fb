"""
Authentication Router
Endpoints for sign-up and sign-in.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from imf_api.database import get_db
from imf_api.schemas.common import ErrorResponse, MessageResponse
from imf_api.schemas.user import Credentials, TokenResponse
from imf_api.services import auth_service

router = APIRouter()


@router.post(
    "/signup",
    response_model=MessageResponse,
    responses={400: {"model": ErrorResponse, "description": "User already exists"}},
)
async def signup(credentials: Credentials, db: AsyncSession = Depends(get_db)):
    """
    Register a new user.
    Neither the password nor its hash is ever returned.
    """
    await auth_service.register_user(db, credentials.email, credentials.password)
    return MessageResponse(message="User registered successfully.")


@router.post(
    "/signin",
    response_model=TokenResponse,
    responses={401: {"model": ErrorResponse, "description": "Invalid credentials"}},
)
async def signin(credentials: Credentials, db: AsyncSession = Depends(get_db)):
    """Sign in to receive a JWT valid for 24 hours."""
    token = await auth_service.authenticate_user(db, credentials.email, credentials.password)
    return TokenResponse(token=token)
