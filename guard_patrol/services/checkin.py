"""
Machine a etats du pointage / Check-in state machine.

Une tentative par agent : choix du point -> fix GPS -> controle de proximite ->
checklist -> soumission au registre. Le controle de proximite local n'est qu'un
retour rapide pour l'agent ; le registre refait le sien.
One attempt per guard: select checkpoint -> GPS fix -> proximity check ->
checklist -> submit to the record store. The local proximity check is only fast
feedback for the guard; the store runs its own.
"""

import asyncio
import enum
import logging
import uuid
from dataclasses import dataclass, field

from guard_patrol.config import settings
from guard_patrol.schemas.checkpoint import CheckpointRead
from guard_patrol.schemas.patrol import PatrolCreate, PatrolRead
from guard_patrol.services.errors import (
    ChecklistIncomplete,
    InvalidTransition,
    PatrolRejected,
    PositionError,
)
from guard_patrol.services.position import PositionSource
from guard_patrol.services.record_store import RecordStore
from guard_patrol.utils.geo import Coordinate, distance_m, is_within_radius

logger = logging.getLogger(__name__)


class CheckinState(str, enum.Enum):
    """Etat d'une tentative de pointage / Check-in attempt state."""
    IDLE = "IDLE"
    ACQUIRING = "ACQUIRING"
    LOCATION_UNAVAILABLE = "LOCATION_UNAVAILABLE"
    OUT_OF_RANGE = "OUT_OF_RANGE"
    READY_TO_FILL = "READY_TO_FILL"
    SUBMITTING = "SUBMITTING"
    COMPLETED = "COMPLETED"
    SUBMIT_FAILED = "SUBMIT_FAILED"
    CANCELLED = "CANCELLED"


@dataclass(frozen=True)
class GuardContext:
    """Agent connecte, passe explicitement / Logged-in guard, passed explicitly."""
    guard_id: int
    name: str


@dataclass(frozen=True)
class CheckpointSnapshot:
    """Copie du point de controle prise a la selection / Checkpoint copy taken at selection time."""
    id: int
    name: str
    latitude: float
    longitude: float
    checklist: tuple[str, ...]

    @classmethod
    def from_read(cls, checkpoint: CheckpointRead) -> "CheckpointSnapshot":
        return cls(
            id=checkpoint.id,
            name=checkpoint.name,
            latitude=checkpoint.latitude,
            longitude=checkpoint.longitude,
            checklist=tuple(checkpoint.checklist),
        )

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(self.latitude, self.longitude)


@dataclass
class CheckinAttempt:
    checkpoint: CheckpointSnapshot
    checklist: dict[str, bool]
    state: CheckinState = CheckinState.ACQUIRING
    submission_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    position: Coordinate | None = None
    distance_m: float | None = None
    # Message a afficher a l'agent / Message to show the guard
    error: str | None = None
    rejection: PatrolRejected | None = None
    record: PatrolRead | None = None

    @property
    def missing_items(self) -> list[str]:
        return [item for item, done in self.checklist.items() if not done]


class CheckinStateMachine:
    """Pilote une tentative de pointage a la fois / Drives one check-in attempt at a time."""

    def __init__(
        self,
        guard: GuardContext,
        position_source: PositionSource,
        record_store: RecordStore,
        radius_m: float = settings.PROXIMITY_RADIUS_M,
        position_timeout_s: float = settings.POSITION_TIMEOUT_S,
    ):
        self.guard = guard
        self._position_source = position_source
        self._record_store = record_store
        self.radius_m = radius_m
        self.position_timeout_s = position_timeout_s
        self._attempt: CheckinAttempt | None = None

    @property
    def attempt(self) -> CheckinAttempt | None:
        return self._attempt

    @property
    def state(self) -> CheckinState:
        return self._attempt.state if self._attempt else CheckinState.IDLE

    def _require(self, *states: CheckinState) -> CheckinAttempt:
        if self._attempt is None or self._attempt.state not in states:
            raise InvalidTransition(
                f"Action not allowed in state {self.state.value} "
                f"(expected one of {', '.join(s.value for s in states)})"
            )
        return self._attempt

    def _is_stale(self, attempt: CheckinAttempt) -> bool:
        return attempt is not self._attempt or attempt.state is CheckinState.CANCELLED

    async def select_checkpoint(self, checkpoint: CheckpointSnapshot) -> CheckinAttempt:
        """Demarrer une tentative ; remplace la precedente / Start an attempt, replacing any previous one."""
        if self.state is CheckinState.SUBMITTING:
            raise InvalidTransition("A submission is in progress")

        previous = self._attempt
        if previous is not None and previous.state not in (CheckinState.COMPLETED, CheckinState.CANCELLED):
            logger.info("Guard %s: attempt at %s superseded", self.guard.guard_id, previous.checkpoint.name)
            previous.state = CheckinState.CANCELLED

        attempt = CheckinAttempt(
            checkpoint=checkpoint,
            checklist={item: False for item in checkpoint.checklist},
        )
        self._attempt = attempt
        await self._acquire(attempt)
        return attempt

    async def retry(self) -> CheckinAttempt:
        """Nouveau fix GPS pour le meme point / New GPS fix for the same checkpoint."""
        attempt = self._require(CheckinState.OUT_OF_RANGE, CheckinState.LOCATION_UNAVAILABLE)
        return await self.select_checkpoint(attempt.checkpoint)

    async def _acquire(self, attempt: CheckinAttempt) -> None:
        try:
            position = await asyncio.wait_for(
                self._position_source.current_position(), timeout=self.position_timeout_s
            )
        except asyncio.TimeoutError:
            self._location_unavailable(attempt, "Timed out waiting for a location fix. Please enable location services.")
            return
        except PositionError as exc:
            self._location_unavailable(attempt, f"Unable to get your location: {exc}. Please enable location services.")
            return
        except Exception:
            logger.exception("Guard %s: position source failed", self.guard.guard_id)
            self._location_unavailable(attempt, "Unable to get your location. Please enable location services.")
            return

        if self._is_stale(attempt):
            logger.debug("Guard %s: late position fix discarded", self.guard.guard_id)
            return

        distance = distance_m(position, attempt.checkpoint.coordinate)
        attempt.position = position
        attempt.distance_m = distance
        if is_within_radius(distance, self.radius_m):
            attempt.state = CheckinState.READY_TO_FILL
        else:
            attempt.state = CheckinState.OUT_OF_RANGE
            attempt.error = (
                f"You are {round(distance)}m away from the checkpoint. "
                f"You must be within {self.radius_m:g} meters to start the patrol."
            )

    def _location_unavailable(self, attempt: CheckinAttempt, message: str) -> None:
        if self._is_stale(attempt):
            return
        logger.info("Guard %s: no position for %s", self.guard.guard_id, attempt.checkpoint.name)
        attempt.state = CheckinState.LOCATION_UNAVAILABLE
        attempt.error = message

    def toggle_item(self, item: str) -> bool:
        """Inverser une tache, sans toucher aux autres / Flip one item, leaving the others alone."""
        attempt = self._require(CheckinState.READY_TO_FILL, CheckinState.SUBMIT_FAILED)
        if item not in attempt.checklist:
            raise ValueError(f"Unknown checklist item: {item}")
        attempt.checklist[item] = not attempt.checklist[item]
        attempt.state = CheckinState.READY_TO_FILL
        return attempt.checklist[item]

    async def submit(self) -> CheckinAttempt:
        """Soumettre au registre / Submit to the record store.

        Leve ChecklistIncomplete sans changer d'etat si une tache reste a faire.
        Raises ChecklistIncomplete without any state change while an item is unchecked.
        """
        attempt = self._require(CheckinState.READY_TO_FILL, CheckinState.SUBMIT_FAILED)
        missing = attempt.missing_items
        if missing:
            raise ChecklistIncomplete(missing)

        attempt.state = CheckinState.SUBMITTING
        attempt.error = None
        attempt.rejection = None
        candidate = PatrolCreate(
            guard_id=self.guard.guard_id,
            checkpoint_id=attempt.checkpoint.id,
            latitude=attempt.position.latitude,
            longitude=attempt.position.longitude,
            checklist_results=dict(attempt.checklist),
            submission_id=attempt.submission_id,
        )
        try:
            record = await self._record_store.append(candidate)
        except PatrolRejected as exc:
            attempt.state = CheckinState.SUBMIT_FAILED
            attempt.rejection = exc
            attempt.error = exc.message
            return attempt
        except Exception:
            attempt.state = CheckinState.SUBMIT_FAILED
            attempt.error = "An error occurred while submitting the patrol"
            raise

        attempt.record = record
        attempt.state = CheckinState.COMPLETED
        logger.info("Guard %s: patrol %s completed at %s", self.guard.guard_id, record.id, attempt.checkpoint.name)
        return attempt

    def cancel(self) -> None:
        """Abandonner la tentative / Abandon the attempt."""
        attempt = self._require(
            CheckinState.ACQUIRING,
            CheckinState.OUT_OF_RANGE,
            CheckinState.LOCATION_UNAVAILABLE,
            CheckinState.READY_TO_FILL,
            CheckinState.SUBMIT_FAILED,
        )
        attempt.state = CheckinState.CANCELLED
        self._attempt = None
