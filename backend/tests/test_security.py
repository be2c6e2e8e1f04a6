"""
NoteDrawer Backend — Password Hashing and Token Tests
======================================================

What:  Unit tests for PasswordHasher and TokenService.

What we test:
    ✅ Stored hash never equals the password; verify accepts only the right one
    ✅ Malformed hashes never verify
    ✅ Tokens round-trip the principal id and type tag
    ✅ Expired, tampered and malformed-claim tokens are rejected
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from notedrawer.exceptions import InvalidTokenError
from notedrawer.schemas.auth import DrawerPrincipal, UserPrincipal
from notedrawer.services.password_hasher import PasswordHasher
from notedrawer.services.token_service import TokenService


class TestPasswordHasher:
    """Tests for bcrypt hashing."""

    def test_hash_differs_from_password(self, password_hasher):
        hashed = password_hasher.hash("p1")
        assert hashed != "p1"
        assert "p1" not in hashed

    def test_verify_accepts_only_matching_password(self, password_hasher):
        hashed = password_hasher.hash("p1")
        assert password_hasher.verify(hashed, "p1") is True
        assert password_hasher.verify(hashed, "p2") is False

    def test_same_password_gets_fresh_salt(self, password_hasher):
        assert password_hasher.hash("p1") != password_hasher.hash("p1")

    def test_malformed_hash_never_verifies(self, password_hasher):
        assert password_hasher.verify("not-a-bcrypt-hash", "p1") is False

    def test_passwords_longer_than_bcrypt_limit(self, password_hasher):
        """Only the first 72 bytes count, matching bcrypt's own behaviour."""
        long_password = "x" * 100
        hashed = password_hasher.hash(long_password)
        assert password_hasher.verify(hashed, long_password) is True
        assert password_hasher.verify(hashed, "x" * 72) is True
        assert password_hasher.verify(hashed, "x" * 71) is False

    def test_rounds_are_encoded_in_hash(self):
        hashed = PasswordHasher(rounds=5).hash("p1")
        assert hashed.startswith("$2b$05$")

    @pytest.mark.asyncio
    async def test_async_wrappers(self, password_hasher):
        hashed = await password_hasher.hash_async("secret")
        assert await password_hasher.verify_async(hashed, "secret") is True
        assert await password_hasher.verify_async(hashed, "other") is False


class TestTokenService:
    """Tests for principal token issue / verify."""

    def test_user_token_round_trip(self, token_service):
        user_id = uuid.uuid4()
        principal = token_service.verify(token_service.issue(user_id, "user"))

        assert isinstance(principal, UserPrincipal)
        assert principal.type == "user"
        assert principal.id == user_id

    def test_drawer_token_round_trip(self, token_service):
        drawer_id = uuid.uuid4()
        principal = token_service.verify(token_service.issue(drawer_id, "drawer"))

        assert isinstance(principal, DrawerPrincipal)
        assert principal.id == drawer_id

    def test_token_expires_after_seven_days(self, token_service):
        issued = datetime.now(timezone.utc)
        token = token_service.issue(uuid.uuid4(), "user", now=issued)
        claims = jwt.get_unverified_claims(token)

        assert claims["exp"] - claims["iat"] == int(timedelta(days=7).total_seconds())

    def test_expired_token_rejected(self, token_service):
        issued = datetime.now(timezone.utc) - timedelta(days=8)
        token = token_service.issue(uuid.uuid4(), "user", now=issued)

        with pytest.raises(InvalidTokenError):
            token_service.verify(token)

    def test_token_signed_with_other_secret_rejected(self, token_service):
        other = TokenService(secret="some-other-secret")
        token = other.issue(uuid.uuid4(), "user")

        with pytest.raises(InvalidTokenError):
            token_service.verify(token)

    def test_garbage_token_rejected(self, token_service):
        with pytest.raises(InvalidTokenError):
            token_service.verify("not.a.jwt")

    def test_unknown_principal_type_rejected(self, token_service):
        token = jwt.encode(
            {"id": str(uuid.uuid4()), "type": "admin"},
            token_service.secret,
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError):
            token_service.verify(token)

    def test_non_uuid_id_rejected(self, token_service):
        token = jwt.encode({"id": "42", "type": "user"}, token_service.secret, algorithm="HS256")
        with pytest.raises(InvalidTokenError):
            token_service.verify(token)
