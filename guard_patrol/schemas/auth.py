"""Schémas d'authentification / Authentication schemas."""

from pydantic import BaseModel

from guard_patrol.schemas.user import UserRead


class LoginRequest(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    user: UserRead
