"""
Seed des donnees de demonstration / Demo data seeding.
Crée un superviseur, deux agents et cinq points au premier démarrage si aucun utilisateur n'existe.
Creates a supervisor, two guards and five checkpoints on first startup if no users exist.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from guard_patrol.models.checkpoint import Checkpoint
from guard_patrol.models.user import User, UserRole

logger = logging.getLogger(__name__)

DEMO_USERS = [
    {"username": "admin", "password": "admin123", "name": "Admin User", "role": UserRole.SUPERVISOR},
    {"username": "guard1", "password": "guard123", "name": "John Smith", "role": UserRole.GUARD},
    {"username": "guard2", "password": "guard123", "name": "Jane Doe", "role": UserRole.GUARD},
]

DEMO_CHECKPOINTS = [
    {
        "name": "Main Entrance", "latitude": 40.7128, "longitude": -74.0060,
        "checklist": ["Door locked", "Lights off", "No damage visible", "No safety hazards"],
    },
    {
        "name": "Parking Lot", "latitude": 40.7138, "longitude": -74.0070,
        "checklist": ["Gate secured", "Adequate lighting", "No unauthorized vehicles", "No safety hazards"],
    },
    {
        "name": "Building A", "latitude": 40.7118, "longitude": -74.0050,
        "checklist": ["All doors locked", "Windows secure", "Alarm system active", "No suspicious activity"],
    },
    {
        "name": "Warehouse", "latitude": 40.7148, "longitude": -74.0080,
        "checklist": ["Loading dock secure", "Inventory area locked", "Fire exits clear", "No safety hazards"],
    },
    {
        "name": "Back Perimeter", "latitude": 40.7108, "longitude": -74.0040,
        "checklist": ["Fence intact", "Gate locked", "Lighting functional", "No trespassing signs visible"],
    },
]


async def seed_demo_data(session: AsyncSession) -> None:
    """Insérer les données de démo si la base est vide / Insert demo data if the database is empty."""
    result = await session.execute(select(func.count(User.id)))
    count = result.scalar()

    if count:
        logger.info("%s existing user(s), seed skipped", count)
        return

    session.add_all(User(**u, is_active=True) for u in DEMO_USERS)
    session.add_all(Checkpoint(**c) for c in DEMO_CHECKPOINTS)
    await session.commit()
    logger.info("Demo data created: %d users, %d checkpoints", len(DEMO_USERS), len(DEMO_CHECKPOINTS))
