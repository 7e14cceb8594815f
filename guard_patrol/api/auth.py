"""
Routes d'authentification / Authentication routes.
Verification des identifiants, sans jeton / Credential check, no tokens.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from guard_patrol.config import settings
from guard_patrol.database import get_db
from guard_patrol.models.user import User
from guard_patrol.rate_limit import limiter
from guard_patrol.schemas.auth import LoginRequest, LoginResponse
from guard_patrol.schemas.user import UserRead

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
@limiter.limit(settings.RATE_LIMIT_LOGIN)
async def login(request: Request, data: LoginRequest, db: AsyncSession = Depends(get_db)):
    """Connexion par identifiants / Login with credentials."""
    result = await db.execute(select(User).where(User.username == data.username))
    user = result.scalar_one_or_none()

    if user is None or user.password != data.password:
        logger.warning("Failed login for %r", data.username)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid username or password")

    if not user.is_active:
        logger.warning("Login attempt on disabled account %r", data.username)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Account disabled")

    return LoginResponse(user=UserRead.model_validate(user))
