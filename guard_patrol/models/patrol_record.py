"""Modele Ronde effectuee / Patrol record model.

Enregistrement immuable : noms et coordonnees denormalises a l'ecriture, sans cle
etrangere, pour que la suppression d'un agent ou d'un point ne touche pas l'historique.
Immutable record: names and coordinates denormalized at write time, no foreign keys,
so deleting a guard or checkpoint never touches history.
"""

from sqlalchemy import JSON, Float, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from guard_patrol.database import Base


class PatrolRecord(Base):
    __tablename__ = "patrol_records"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    guard_id: Mapped[int] = mapped_column(Integer, nullable=False)
    guard_name: Mapped[str] = mapped_column(String(100), nullable=False)
    checkpoint_id: Mapped[int] = mapped_column(Integer, nullable=False)
    checkpoint_name: Mapped[str] = mapped_column(String(100), nullable=False)
    checkpoint_latitude: Mapped[float] = mapped_column(Float, nullable=False)
    checkpoint_longitude: Mapped[float] = mapped_column(Float, nullable=False)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    # Distance calculee par le serveur / Server-computed distance
    distance_m: Mapped[float] = mapped_column(Float, nullable=False)
    timestamp: Mapped[str] = mapped_column(String(32), nullable=False)  # ISO 8601 UTC
    checklist_results: Mapped[dict[str, bool]] = mapped_column(JSON, nullable=False)
    photo_url: Mapped[str | None] = mapped_column(String(500))
    # Cle d'idempotence fournie par le client / Client-supplied idempotency key
    submission_id: Mapped[str | None] = mapped_column(String(36), unique=True)

    __table_args__ = (
        Index("ix_patrol_records_guard_timestamp", "guard_id", "timestamp"),
        Index("ix_patrol_records_timestamp", "timestamp"),
    )

    def __repr__(self) -> str:
        return f"<PatrolRecord {self.id} guard:{self.guard_id} checkpoint:{self.checkpoint_id}>"
