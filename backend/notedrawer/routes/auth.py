"""
NoteDrawer Backend — User Account Routes
=========================================

What:  POST /api/register and POST /api/login.
How:   Validates the body, delegates to AccountService, returns the token
       together with the public view of the user.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from notedrawer.database import get_db_session
from notedrawer.dependencies import get_account_service
from notedrawer.schemas.auth import (
    LoginRequest,
    RegisterRequest,
    UserAuthResponse,
    UserOut,
)
from notedrawer.schemas.note import ErrorResponse
from notedrawer.services.account_service import AccountService

router = APIRouter(prefix="/api", tags=["Accounts"])


@router.post(
    "/register",
    response_model=UserAuthResponse,
    responses={400: {"description": "Duplicate email or missing fields", "model": ErrorResponse}},
    summary="Register a user account",
)
async def register(
    payload: RegisterRequest,
    db: AsyncSession = Depends(get_db_session),
    accounts: AccountService = Depends(get_account_service),
) -> UserAuthResponse:
    token, user = await accounts.register_user(
        db,
        email=payload.email,
        password=payload.password,
        username=payload.username,
    )
    return UserAuthResponse(token=token, user=UserOut.model_validate(user))


@router.post(
    "/login",
    response_model=UserAuthResponse,
    responses={400: {"description": "Invalid credentials", "model": ErrorResponse}},
    summary="Log in as a user",
)
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
    accounts: AccountService = Depends(get_account_service),
) -> UserAuthResponse:
    token, user = await accounts.login_user(db, email=payload.email, password=payload.password)
    return UserAuthResponse(token=token, user=UserOut.model_validate(user))
