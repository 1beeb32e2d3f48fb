"""
Authentication Service
Handles password hashing, JWT creation and validation, registration and sign-in.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from jwt import PyJWTError
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from imf_api.config import settings
from imf_api.exceptions import ConflictError, UnauthorizedError
from imf_api.models.user import User
from imf_api.store import RecordStore

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials."

# Password hashing configuration
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check if plain password matches hashed version."""
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password: str) -> str:
    """Generate bcrypt hash of password."""
    return pwd_context.hash(password)

def create_access_token(
    data: dict,
    expires_delta: Optional[timedelta] = None,
    now: Optional[datetime] = None,
) -> str:
    """Create a new JWT access token. Expiry is absolute, counted from `now`."""
    to_encode = data.copy()
    issued_at = now or datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)

    to_encode.update({"iat": issued_at, "exp": issued_at + expires_delta})
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)

def decode_access_token(token: str) -> Optional[dict]:
    """Decode and validate a JWT access token. Returns None if the signature or expiry check fails."""
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp"]},
        )
    except PyJWTError:
        return None


async def register_user(db: AsyncSession, email: str, password: str) -> User:
    """
    Create a new user account.

    Raises:
        ConflictError: If the email is already registered.
    """
    users = RecordStore(db, User)
    if await users.find_unique(email=email):
        raise ConflictError("User already exists.")

    try:
        user = await users.create(email=email, hashed_password=get_password_hash(password))
    except IntegrityError as e:
        # Another request registered the same email between the check and the insert
        await db.rollback()
        raise ConflictError("User already exists.") from e

    logger.info("Registered user %s", user.id)
    return user


async def authenticate_user(db: AsyncSession, email: str, password: str) -> str:
    """
    Verify credentials and issue a session token carrying {id, email}.

    Unknown email and wrong password fail with the same message so that
    callers cannot tell which accounts exist.
    """
    user = await RecordStore(db, User).find_unique(email=email)

    if not user or not verify_password(password, user.hashed_password):
        logger.warning("Failed sign-in attempt")
        raise UnauthorizedError(INVALID_CREDENTIALS)

    return create_access_token(data={"id": user.id, "email": user.email})
