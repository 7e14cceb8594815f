"""Schémas Rapports / Report schemas."""

from pydantic import BaseModel


class DailySummary(BaseModel):
    date: str
    completed: int
    expected: int
    missed: int
    completion_rate: int
    active_guards: int


class GuardProgress(BaseModel):
    guard_id: int
    date: str
    completed: int
    target: int
    remaining: int
