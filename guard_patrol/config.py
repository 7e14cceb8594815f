"""
Configuration de l'application / Application configuration.
Utilise pydantic-settings pour charger depuis .env ou variables d'environnement.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Guard Patrol"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = True

    # Database - SQLite par défaut pour le développement
    # Database - SQLite by default for development
    DATABASE_URL: str = "sqlite+aiosqlite:///./guard_patrol.db"

    # CORS - origines autorisées / allowed origins
    CORS_ORIGINS: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Rate Limiting
    RATE_LIMIT_LOGIN: str = "5/minute"
    RATE_LIMIT_CHECKIN: str = "20/minute"

    # Rayon de pointage, identique client et serveur / Check-in radius, same on client and server
    PROXIMITY_RADIUS_M: float = 50.0
    # Attente max d'un fix GPS / Max wait for a GPS fix
    POSITION_TIMEOUT_S: float = 10.0
    # Rondes attendues par agent et par jour / Expected patrols per guard per day
    DAILY_PATROL_TARGET: int = 5

    # Donnees de demo au premier demarrage / Demo data on first startup
    SEED_DEMO_DATA: bool = True

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
