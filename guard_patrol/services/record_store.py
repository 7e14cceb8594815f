"""
Registre des rondes / Patrol record store.

Seul point d'ecriture des rondes. Le registre recalcule lui-meme la distance au point
de controle : la position declaree par le client n'est jamais crue sur parole.
Only write path for patrol records. The store recomputes the distance to the
checkpoint itself: a client's "I am in range" claim is never trusted.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Callable

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from guard_patrol.config import settings
from guard_patrol.models.checkpoint import Checkpoint
from guard_patrol.models.patrol_record import PatrolRecord
from guard_patrol.models.user import User, UserRole
from guard_patrol.schemas.patrol import PatrolCreate, PatrolRead
from guard_patrol.services.errors import PatrolRejected, RejectionReason
from guard_patrol.utils.geo import haversine_m, is_within_radius

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RecordStore(ABC):
    """Contrat du registre / Record store contract."""

    @abstractmethod
    async def append(self, candidate: PatrolCreate) -> PatrolRead:
        """Enregistrer un pointage ou lever PatrolRejected / Append a check-in or raise PatrolRejected."""

    @abstractmethod
    async def list_by_date(self, date: str) -> list[PatrolRead]:
        """Rondes d'une journee (YYYY-MM-DD, UTC) / Records for one day (YYYY-MM-DD, UTC)."""

    @abstractmethod
    async def list_by_guard_and_date(self, guard_id: int, date: str) -> list[PatrolRead]:
        """Rondes d'un agent sur une journee / One guard's records for one day."""


class SqlRecordStore(RecordStore):
    """Registre SQLAlchemy, une transaction par ajout / SQLAlchemy store, one transaction per append."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        radius_m: float = settings.PROXIMITY_RADIUS_M,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._session_factory = session_factory
        self.radius_m = radius_m
        self._clock = clock

    def _now_iso(self) -> str:
        return self._clock().astimezone(timezone.utc).isoformat(timespec="milliseconds")

    async def append(self, candidate: PatrolCreate) -> PatrolRead:
        try:
            return await self._append(candidate)
        except IntegrityError:
            # Meme submission_id commis en parallele / Same submission_id committed concurrently
            if candidate.submission_id is None:
                raise
            existing = await self._find_submission(candidate.submission_id)
            if existing is None:
                raise
            return self._replay(existing, candidate)

    async def _append(self, candidate: PatrolCreate) -> PatrolRead:
        async with self._session_factory() as session:
            async with session.begin():
                if candidate.submission_id:
                    result = await session.execute(
                        select(PatrolRecord).where(PatrolRecord.submission_id == candidate.submission_id)
                    )
                    existing = result.scalar_one_or_none()
                    if existing is not None:
                        return self._replay(PatrolRead.model_validate(existing), candidate)

                checkpoint = await session.get(Checkpoint, candidate.checkpoint_id)
                if checkpoint is None:
                    raise self._reject(candidate, PatrolRejected(
                        RejectionReason.CHECKPOINT_NOT_FOUND, "Invalid checkpoint",
                    ))

                guard = await session.get(User, candidate.guard_id)
                if guard is None or not guard.is_active or guard.role != UserRole.GUARD:
                    raise self._reject(candidate, PatrolRejected(
                        RejectionReason.GUARD_NOT_FOUND, "Invalid guard",
                    ))

                # Memes libelles que le point, tous coches / Same labels as the checkpoint, all checked
                results = candidate.checklist_results
                if set(results) != set(checkpoint.checklist) or not all(results.values()):
                    raise self._reject(candidate, PatrolRejected(
                        RejectionReason.CHECKLIST_INCOMPLETE,
                        "All checklist items must be completed before submitting",
                    ))

                distance = haversine_m(
                    candidate.latitude, candidate.longitude, checkpoint.latitude, checkpoint.longitude
                )
                if not is_within_radius(distance, self.radius_m):
                    raise self._reject(candidate, PatrolRejected.out_of_range(distance, self.radius_m))

                record = PatrolRecord(
                    guard_id=guard.id,
                    guard_name=guard.name,
                    checkpoint_id=checkpoint.id,
                    checkpoint_name=checkpoint.name,
                    checkpoint_latitude=checkpoint.latitude,
                    checkpoint_longitude=checkpoint.longitude,
                    latitude=candidate.latitude,
                    longitude=candidate.longitude,
                    distance_m=distance,
                    timestamp=self._now_iso(),
                    checklist_results=dict(candidate.checklist_results),
                    photo_url=candidate.photo_url,
                    submission_id=candidate.submission_id,
                )
                session.add(record)
                await session.flush()
                created = PatrolRead.model_validate(record)

        logger.info(
            "Patrol %s accepted: guard=%s checkpoint=%s distance=%.1fm",
            created.id, created.guard_id, created.checkpoint_id, created.distance_m,
        )
        return created

    def _replay(self, existing: PatrolRead, candidate: PatrolCreate) -> PatrolRead:
        """Rejouer une soumission deja commise / Replay an already committed submission.

        Le meme submission_id ne renvoie la ronde que pour un pointage identique.
        A repeated submission_id only returns the record for an identical check-in.
        """
        same = (
            existing.guard_id == candidate.guard_id
            and existing.checkpoint_id == candidate.checkpoint_id
            and existing.latitude == candidate.latitude
            and existing.longitude == candidate.longitude
            and existing.checklist_results == candidate.checklist_results
        )
        if not same:
            raise self._reject(candidate, PatrolRejected(
                RejectionReason.SUBMISSION_CONFLICT,
                "Submission id already used by a different check-in",
            ))
        logger.info("Duplicate submission %s, returning patrol %s", candidate.submission_id, existing.id)
        return existing

    @staticmethod
    def _reject(candidate: PatrolCreate, exc: PatrolRejected) -> PatrolRejected:
        logger.warning(
            "Patrol rejected (%s): guard=%s checkpoint=%s distance=%s",
            exc.reason.value, candidate.guard_id, candidate.checkpoint_id,
            f"{exc.distance_m:.1f}m" if exc.distance_m is not None else "-",
        )
        return exc

    async def _find_submission(self, submission_id: str) -> PatrolRead | None:
        async with self._session_factory() as session:
            result = await session.execute(
                select(PatrolRecord).where(PatrolRecord.submission_id == submission_id)
            )
            record = result.scalar_one_or_none()
            return PatrolRead.model_validate(record) if record else None

    async def _list(self, *criteria) -> list[PatrolRead]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(PatrolRecord)
                .where(*criteria)
                .order_by(PatrolRecord.timestamp, PatrolRecord.id)
            )
            return [PatrolRead.model_validate(r) for r in result.scalars().all()]

    async def list_by_date(self, date: str) -> list[PatrolRead]:
        return await self._list(PatrolRecord.timestamp.startswith(date))

    async def list_by_guard_and_date(self, guard_id: int, date: str) -> list[PatrolRead]:
        return await self._list(
            PatrolRecord.guard_id == guard_id,
            PatrolRecord.timestamp.startswith(date),
        )
