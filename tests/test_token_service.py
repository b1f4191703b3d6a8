"""
Unit tests for token issuing/verification and password handling.
"""

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from app.core.config import get_settings
from app.core.errors import (
    ExpiredTokenError,
    InvalidCredentialsError,
    MalformedTokenError,
    MissingTokenError,
    UnauthorizedError,
    UserExistsError,
)
from app.core.security import hash_password, verify_password
from app.services.account_service import AccountService
from app.services.token_service import TokenService
from tests.conftest import PASSWORD, make_user

settings = get_settings()


class TestTokenService:

    def test_round_trip_carries_identity(self, db):
        user = make_user(db, is_subscriber=True)

        identity = TokenService.verify(TokenService.issue(user))

        assert identity.user_id == user.id
        assert identity.email == user.email
        assert identity.is_subscriber is True

    def test_default_validity_is_seven_days(self, db):
        user = make_user(db)

        identity = TokenService.verify(TokenService.issue(user))

        remaining = identity.expires_at - datetime.now(timezone.utc)
        assert timedelta(days=6, hours=23) < remaining <= timedelta(days=7)

    @pytest.mark.parametrize("token", [None, ""])
    def test_missing_token(self, token):
        with pytest.raises(MissingTokenError):
            TokenService.verify(token)

    def test_expired_token(self, db):
        user = make_user(db)
        token = TokenService.issue(user, expires_delta=timedelta(seconds=-5))

        with pytest.raises(ExpiredTokenError):
            TokenService.verify(token)

    def test_tampered_signature(self, db):
        user = make_user(db)
        token = TokenService.issue(user)
        header, payload, signature = token.split(".")
        tampered = ".".join([header, payload, signature[::-1]])

        with pytest.raises(MalformedTokenError):
            TokenService.verify(tampered)

    def test_wrong_secret(self, db):
        user = make_user(db)
        forged = jwt.encode(
            {"sub": user.id, "email": user.email, "is_subscriber": True,
             "exp": datetime.now(timezone.utc) + timedelta(days=1)},
            "someone-elses-secret",
            algorithm="HS256",
        )

        with pytest.raises(MalformedTokenError):
            TokenService.verify(forged)

    def test_garbage(self):
        with pytest.raises(MalformedTokenError):
            TokenService.verify("not.a.jwt")

    def test_missing_claims(self):
        token = jwt.encode(
            {"sub": "abc", "exp": datetime.now(timezone.utc) + timedelta(days=1)},
            settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )

        with pytest.raises(MalformedTokenError):
            TokenService.verify(token)

    def test_token_errors_are_unauthorized(self):
        for error in (MissingTokenError, MalformedTokenError, ExpiredTokenError):
            assert issubclass(error, UnauthorizedError)
            assert error.http_status == 401

    def test_subscriber_flag_is_frozen_at_issue_time(self, db):
        user = make_user(db, is_subscriber=False)
        token = TokenService.issue(user)

        user.is_subscriber = True
        db.commit()

        assert TokenService.verify(token).is_subscriber is False
        assert TokenService.verify(TokenService.issue(user)).is_subscriber is True


class TestAccounts:

    def test_password_is_hashed(self):
        hashed = hash_password("s3cret!")
        assert hashed != "s3cret!"
        assert verify_password("s3cret!", hashed)
        assert not verify_password("wrong", hashed)

    def test_non_bcrypt_hash_does_not_verify(self):
        assert verify_password("anything", "plaintext") is False

    def test_email_is_case_insensitive(self, db):
        make_user(db, email="Alice@Example.com")

        with pytest.raises(UserExistsError):
            make_user(db, email="alice@example.COM")

        user = AccountService.authenticate(db, "ALICE@example.com", PASSWORD)
        assert user.email == "alice@example.com"

    def test_bad_credentials_are_indistinguishable(self, db):
        make_user(db, email="bob@example.com")

        with pytest.raises(InvalidCredentialsError) as wrong_password:
            AccountService.authenticate(db, "bob@example.com", "nope-nope")
        with pytest.raises(InvalidCredentialsError) as unknown_email:
            AccountService.authenticate(db, "nobody@example.com", PASSWORD)

        assert wrong_password.value.message == unknown_email.value.message
