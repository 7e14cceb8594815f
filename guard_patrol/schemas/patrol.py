"""Schemas Rondes / Patrol schemas — check-in submission, records, rejections."""

from pydantic import BaseModel, ConfigDict, Field


class PatrolCreate(BaseModel):
    """Soumission d'un pointage / Check-in submission."""
    guard_id: int
    checkpoint_id: int
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    checklist_results: dict[str, bool]
    photo_url: str | None = Field(default=None, max_length=500)
    # UUID de la tentative, rend la soumission idempotente / Attempt UUID, makes the submission idempotent
    submission_id: str | None = Field(default=None, max_length=36)


class PatrolRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    guard_id: int
    guard_name: str
    checkpoint_id: int
    checkpoint_name: str
    checkpoint_latitude: float
    checkpoint_longitude: float
    latitude: float
    longitude: float
    distance_m: float
    timestamp: str
    checklist_results: dict[str, bool]
    photo_url: str | None = None
    submission_id: str | None = None


class PatrolRejection(BaseModel):
    """Detail structure d'un refus / Structured rejection detail."""
    reason: str
    message: str
    distance_m: float | None = None
