"""
NoteDrawer Backend — Drawer Routes
===================================

What:  POST /api/drawers (create) and POST /api/drawers/login.

A drawer is created and logged into with the same {drawerName, password}
body. Both return a token whose principal type is "drawer".
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from notedrawer.database import get_db_session
from notedrawer.dependencies import get_account_service
from notedrawer.schemas.auth import DrawerAuthResponse, DrawerCredentials, DrawerOut
from notedrawer.schemas.note import ErrorResponse
from notedrawer.services.account_service import AccountService

router = APIRouter(prefix="/api/drawers", tags=["Drawers"])


@router.post(
    "",
    response_model=DrawerAuthResponse,
    responses={400: {"description": "Drawer name taken or missing fields", "model": ErrorResponse}},
    summary="Create a shared drawer",
)
async def create_drawer(
    payload: DrawerCredentials,
    db: AsyncSession = Depends(get_db_session),
    accounts: AccountService = Depends(get_account_service),
) -> DrawerAuthResponse:
    token, drawer = await accounts.create_drawer(
        db,
        drawer_name=payload.drawer_name,
        password=payload.password,
    )
    return DrawerAuthResponse(token=token, drawer=DrawerOut.model_validate(drawer))


@router.post(
    "/login",
    response_model=DrawerAuthResponse,
    responses={400: {"description": "Invalid credentials", "model": ErrorResponse}},
    summary="Log in to a shared drawer",
)
async def login_drawer(
    payload: DrawerCredentials,
    db: AsyncSession = Depends(get_db_session),
    accounts: AccountService = Depends(get_account_service),
) -> DrawerAuthResponse:
    token, drawer = await accounts.login_drawer(
        db,
        drawer_name=payload.drawer_name,
        password=payload.password,
    )
    return DrawerAuthResponse(token=token, drawer=DrawerOut.model_validate(drawer))
