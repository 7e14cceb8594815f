"""Schémas Agents / Guard schemas."""

from pydantic import BaseModel, ConfigDict, Field

from guard_patrol.models.user import UserRole


class GuardCreate(BaseModel):
    username: str = Field(min_length=1, max_length=50)
    password: str = Field(min_length=1, max_length=255)
    name: str = Field(min_length=1, max_length=100)


class GuardUpdate(BaseModel):
    username: str | None = Field(default=None, min_length=1, max_length=50)
    password: str | None = Field(default=None, min_length=1, max_length=255)
    name: str | None = Field(default=None, min_length=1, max_length=100)
    is_active: bool | None = None


class UserRead(BaseModel):
    """Profil sans identifiant de connexion / Profile without credential."""
    model_config = ConfigDict(from_attributes=True)
    id: int
    username: str
    name: str
    role: UserRole
    is_active: bool
