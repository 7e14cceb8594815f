"""Schémas Point de contrôle / Checkpoint schemas."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _clean_checklist(items: list[str]) -> list[str]:
    """Retirer les libelles vides, refuser les doublons / Drop blank labels, reject duplicates."""
    cleaned = [item.strip() for item in items if item and item.strip()]
    if len(set(cleaned)) != len(cleaned):
        raise ValueError("Checklist items must be distinct")
    return cleaned


class CheckpointBase(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    checklist: list[str] = Field(default_factory=list)

    @field_validator("checklist")
    @classmethod
    def validate_checklist(cls, v: list[str]) -> list[str]:
        return _clean_checklist(v)


class CheckpointCreate(CheckpointBase):
    pass


class CheckpointUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    checklist: list[str] | None = None

    @field_validator("checklist")
    @classmethod
    def validate_checklist(cls, v: list[str] | None) -> list[str] | None:
        return _clean_checklist(v) if v is not None else None


class CheckpointRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    name: str
    latitude: float
    longitude: float
    checklist: list[str]
