"""
Modèles SQLAlchemy / SQLAlchemy models.
Importer tous les modèles ici pour que Base.metadata les connaisse.
Import all models here so Base.metadata knows about them.
"""

from guard_patrol.models.user import User, UserRole
from guard_patrol.models.checkpoint import Checkpoint
from guard_patrol.models.patrol_record import PatrolRecord

__all__ = [
    "User",
    "UserRole",
    "Checkpoint",
    "PatrolRecord",
]
