"""
NoteDrawer Backend — Request Dependencies and Auth Gateway
===========================================================

What:  FastAPI dependencies that hand startup-built objects to routes and
       authenticate bearer tokens.
How:   The application factory stores settings, the token service and the
       password hasher on `app.state`; these helpers read them back per
       request, so nothing is referenced as a module global.

Auth Gateway (`get_current_principal`):
    1. Read `Authorization: Bearer <token>`
    2. Missing / non-bearer header → UnauthenticatedError("No auth token")
    3. Token fails verification    → UnauthenticatedError("Invalid token")
    4. Otherwise attach the principal to `request.state.principal`
"""

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from notedrawer.exceptions import InvalidTokenError, UnauthenticatedError
from notedrawer.schemas.auth import Principal
from notedrawer.services.account_service import AccountService
from notedrawer.services.token_service import TokenService

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_account_service(request: Request) -> AccountService:
    return AccountService(
        tokens=request.app.state.token_service,
        hasher=request.app.state.password_hasher,
    )


async def get_current_principal(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> Principal:
    """Authenticate the request and return its principal."""
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedError("No auth token")

    try:
        principal = tokens.verify(credentials.credentials)
    except InvalidTokenError as e:
        logger.debug("Rejected bearer token: %s", e.context.get("reason"))
        raise UnauthenticatedError("Invalid token") from None

    request.state.principal = principal
    return principal
