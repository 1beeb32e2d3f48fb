"""
Unit tests for password hashing, token handling, registration and sign-in.
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest
from sqlalchemy import select

from imf_api.exceptions import ConflictError, UnauthorizedError
from imf_api.models.user import User
from imf_api.services import auth_service


class TestPasswordHashing:

    def test_hash_is_salted_and_verifies(self):
        first = auth_service.get_password_hash("pw123456")
        second = auth_service.get_password_hash("pw123456")

        assert first != second
        assert first != "pw123456"
        assert auth_service.verify_password("pw123456", first)
        assert not auth_service.verify_password("pw1234567", first)


class TestAccessTokens:

    def test_round_trip_claims(self):
        token = auth_service.create_access_token({"id": "abc", "email": "a@x.com"})
        payload = auth_service.decode_access_token(token)

        assert payload["id"] == "abc"
        assert payload["email"] == "a@x.com"
        assert payload["exp"] - payload["iat"] == 24 * 60 * 60

    def test_accepted_just_before_expiry(self):
        issued = datetime.now(timezone.utc) - timedelta(hours=24) + timedelta(minutes=1)
        token = auth_service.create_access_token({"id": "abc", "email": "a@x.com"}, now=issued)

        assert auth_service.decode_access_token(token) is not None

    def test_rejected_after_expiry(self):
        issued = datetime.now(timezone.utc) - timedelta(hours=24) - timedelta(minutes=1)
        token = auth_service.create_access_token({"id": "abc", "email": "a@x.com"}, now=issued)

        assert auth_service.decode_access_token(token) is None

    def test_rejects_foreign_signature(self):
        exp = datetime.now(timezone.utc) + timedelta(hours=1)
        token = jwt.encode(
            {"id": "abc", "email": "a@x.com", "exp": exp},
            "Zk2Lq9Wm4Xn7Bv1Cr8Ty3Hu6Jp0Ga5Fs",
            algorithm="HS256",
        )

        assert auth_service.decode_access_token(token) is None

    def test_rejects_token_without_expiry(self):
        token = jwt.encode(
            {"id": "abc", "email": "a@x.com"},
            auth_service.settings.jwt_secret,
            algorithm="HS256",
        )

        assert auth_service.decode_access_token(token) is None

    def test_rejects_garbage(self):
        assert auth_service.decode_access_token("not-a-token") is None


@pytest.mark.asyncio
class TestRegistration:

    async def test_register_stores_hash_only(self, db_session):
        user = await auth_service.register_user(db_session, "a@x.com", "pw123456")

        assert user.id
        assert user.email == "a@x.com"
        assert user.hashed_password != "pw123456"
        assert auth_service.verify_password("pw123456", user.hashed_password)

    async def test_duplicate_email_conflicts(self, db_session):
        await auth_service.register_user(db_session, "a@x.com", "pw123456")

        with pytest.raises(ConflictError):
            await auth_service.register_user(db_session, "a@x.com", "other-password")

        result = await db_session.execute(select(User).where(User.email == "a@x.com"))
        assert len(result.scalars().all()) == 1

    async def test_email_is_case_sensitive(self, db_session):
        await auth_service.register_user(db_session, "a@x.com", "pw123456")
        user = await auth_service.register_user(db_session, "A@x.com", "pw123456")

        assert user.email == "A@x.com"


@pytest.mark.asyncio
class TestAuthentication:

    async def test_signin_issues_verifiable_token(self, db_session):
        user = await auth_service.register_user(db_session, "a@x.com", "pw123456")

        token = await auth_service.authenticate_user(db_session, "a@x.com", "pw123456")
        payload = auth_service.decode_access_token(token)

        assert payload["id"] == user.id
        assert payload["email"] == "a@x.com"

    async def test_wrong_password_and_unknown_email_look_the_same(self, db_session):
        await auth_service.register_user(db_session, "a@x.com", "pw123456")

        with pytest.raises(UnauthorizedError) as wrong_password:
            await auth_service.authenticate_user(db_session, "a@x.com", "nope")
        with pytest.raises(UnauthorizedError) as unknown_user:
            await auth_service.authenticate_user(db_session, "b@x.com", "pw123456")

        assert wrong_password.value.message == unknown_user.value.message == "Invalid credentials."
