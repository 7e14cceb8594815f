"""
Dépendances partagées / Shared dependencies.
Injectées dans les routes via Depends(), remplaçables dans les tests.
Injected into routes via Depends(), overridable in tests.
"""

from datetime import datetime, timezone

from guard_patrol.database import async_session
from guard_patrol.services.record_store import RecordStore, SqlRecordStore

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


def get_record_store() -> RecordStore:
    """Registre des rondes / Patrol record store."""
    return SqlRecordStore(async_session)


def today_utc() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%d")
