"""
NoteDrawer Backend — Authentication Schemas
============================================

What:  Pydantic models for the account/drawer endpoints and the Principal
       decoded from a bearer token.
How:   Request bodies use camelCase aliases on the wire (drawerName);
       Principal is a discriminated union on `type`, so the rest of the
       code handles users and drawers through the same (type, id) pair.
"""

import uuid
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

CAMEL_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    from_attributes=True,
)


# ══════════════════════════════════════════════════════════════════════════
# Principal — who is making the request
# ══════════════════════════════════════════════════════════════════════════


class UserPrincipal(BaseModel):
    """A request authenticated as a registered user."""

    model_config = ConfigDict(frozen=True)

    type: Literal["user"] = "user"
    id: uuid.UUID


class DrawerPrincipal(BaseModel):
    """A request authenticated as a shared drawer."""

    model_config = ConfigDict(frozen=True)

    type: Literal["drawer"] = "drawer"
    id: uuid.UUID


Principal = Annotated[Union[UserPrincipal, DrawerPrincipal], Field(discriminator="type")]

principal_adapter: TypeAdapter[Principal] = TypeAdapter(Principal)


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class RegisterRequest(BaseModel):
    model_config = CAMEL_CONFIG

    email: str = Field(min_length=1, max_length=320)
    password: str = Field(min_length=1)
    username: Optional[str] = Field(default=None, max_length=255)


class LoginRequest(BaseModel):
    model_config = CAMEL_CONFIG

    email: str = Field(min_length=1, max_length=320)
    password: str = Field(min_length=1)


class DrawerCredentials(BaseModel):
    """Body of both POST /api/drawers and POST /api/drawers/login."""

    model_config = CAMEL_CONFIG

    drawer_name: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1)


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class UserOut(BaseModel):
    """Public view of a user; never includes the password hash."""

    model_config = CAMEL_CONFIG

    id: uuid.UUID
    email: str
    username: Optional[str] = None


class DrawerOut(BaseModel):
    model_config = CAMEL_CONFIG

    id: uuid.UUID
    drawer_name: str


class UserAuthResponse(BaseModel):
    model_config = CAMEL_CONFIG

    token: str
    user: UserOut


class DrawerAuthResponse(BaseModel):
    model_config = CAMEL_CONFIG

    token: str
    drawer: DrawerOut
