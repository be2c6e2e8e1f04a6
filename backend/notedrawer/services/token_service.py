"""
NoteDrawer Backend — Token Service
===================================

What:  Issues and verifies signed bearer tokens carrying a principal.
How:   HS256 JWTs via python-jose. Claims are {id, type, iat, exp}; `id`
       is the user or drawer UUID and `type` is "user" or "drawer".

Verified claims are trusted as-is: the principal is not re-checked against
the credential store on each request, so a token stays valid for its
whole lifetime (7 days by default).
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from pydantic import ValidationError as PydanticValidationError

from notedrawer.config import Settings
from notedrawer.exceptions import InvalidTokenError
from notedrawer.schemas.auth import Principal, principal_adapter

logger = logging.getLogger(__name__)


class TokenService:
    """
    Signs and verifies principal tokens.

    Built once at startup from settings and shared by every request; it
    holds no mutable state.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expires_delta: timedelta = timedelta(days=7),
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.expires_delta = expires_delta

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            expires_delta=timedelta(days=settings.jwt_expire_days),
        )

    def issue(
        self,
        principal_id: uuid.UUID,
        principal_type: str,
        *,
        now: Optional[datetime] = None,
    ) -> str:
        """
        Create a token for the given principal.

        Args:
            principal_id: users.id or drawers.id
            principal_type: "user" or "drawer"
            now: issuance time override (tests)

        Returns:
            Encoded JWT string.
        """
        issued_at = now or datetime.now(timezone.utc)
        claims = {
            "id": str(principal_id),
            "type": principal_type,
            "iat": issued_at,
            "exp": issued_at + self.expires_delta,
        }
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Principal:
        """
        Decode a token and return the principal it carries.

        Raises:
            InvalidTokenError: bad signature, expired, or claims that do not
                describe a user or drawer principal.
        """
        try:
            claims = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError as e:
            raise InvalidTokenError(context={"reason": str(e)}) from None

        try:
            return principal_adapter.validate_python(
                {"id": claims.get("id"), "type": claims.get("type")}
            )
        except PydanticValidationError:
            logger.warning("Token signature valid but claims malformed: type=%r", claims.get("type"))
            raise InvalidTokenError(context={"reason": "malformed claims"}) from None
