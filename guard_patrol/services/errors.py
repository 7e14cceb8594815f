"""
Exceptions metier / Domain exceptions.
Levees par le registre des rondes, les sources de position et la machine de pointage.
Raised by the record store, position sources and the check-in state machine.
"""

import enum


class RejectionReason(str, enum.Enum):
    """Motif de refus d'un pointage / Check-in rejection reason."""
    CHECKPOINT_NOT_FOUND = "CHECKPOINT_NOT_FOUND"
    GUARD_NOT_FOUND = "GUARD_NOT_FOUND"
    OUT_OF_RANGE = "OUT_OF_RANGE"
    CHECKLIST_INCOMPLETE = "CHECKLIST_INCOMPLETE"
    SUBMISSION_CONFLICT = "SUBMISSION_CONFLICT"


class PatrolRejected(Exception):
    """Refus du registre, aucun enregistrement cree / Store rejection, no record created."""

    def __init__(self, reason: RejectionReason, message: str, distance_m: float | None = None):
        super().__init__(message)
        self.reason = reason
        self.message = message
        self.distance_m = distance_m

    @classmethod
    def out_of_range(cls, distance_m: float, radius_m: float) -> "PatrolRejected":
        return cls(
            RejectionReason.OUT_OF_RANGE,
            f"You must be within {radius_m:g} meters of the checkpoint. "
            f"Current distance: {round(distance_m)}m",
            distance_m=distance_m,
        )

    def to_detail(self) -> dict:
        return {"reason": self.reason.value, "message": self.message, "distance_m": self.distance_m}


class PositionError(Exception):
    """Aucune position exploitable / No usable position."""


class PositionDenied(PositionError):
    """Localisation refusee ou absente sur l'appareil / Location denied or missing on device."""


class PositionUnavailable(PositionError):
    """Pas de fix obtenu dans le delai / No fix obtained in time."""


class InvalidTransition(Exception):
    """Action impossible dans l'etat courant / Action not allowed in the current state."""


class ChecklistIncomplete(Exception):
    """Soumission avec des taches non cochees / Submission with unchecked items."""

    def __init__(self, missing: list[str]):
        super().__init__(f"Checklist incomplete: {', '.join(missing)}")
        self.missing = missing
