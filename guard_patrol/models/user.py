"""
Modèle Utilisateur / User model.
Agents de sécurité et superviseurs / Security guards and supervisors.
"""

import enum
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Enum, String, func
from sqlalchemy.orm import Mapped, mapped_column

from guard_patrol.database import Base


class UserRole(str, enum.Enum):
    """Role applicatif / Application role."""
    GUARD = "GUARD"
    SUPERVISOR = "SUPERVISOR"


class User(Base):
    """Utilisateur de l'application / Application user."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    # Identifiant de connexion stocke tel quel (pas de hachage) / Credential stored as-is (no hashing)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    role: Mapped[UserRole] = mapped_column(Enum(UserRole), nullable=False, default=UserRole.GUARD)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())

    def __repr__(self) -> str:
        return f"<User {self.username} ({self.role.value})>"
