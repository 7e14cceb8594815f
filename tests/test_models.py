"""Tests des modèles / Model tests."""

from guard_patrol.models.checkpoint import Checkpoint
from guard_patrol.models.patrol_record import PatrolRecord
from guard_patrol.models.user import User, UserRole
from guard_patrol.services.checkin import CheckinState


def test_checkpoint_repr():
    c = Checkpoint(id=1, name="Main Entrance", latitude=40.7128, longitude=-74.0060, checklist=[])
    assert "Main Entrance" in repr(c)


def test_user_repr():
    u = User(id=1, username="guard1", password="x", name="John Smith", role=UserRole.GUARD)
    assert "guard1" in repr(u)


def test_patrol_record_has_no_foreign_keys():
    assert not PatrolRecord.__table__.foreign_keys


def test_enums():
    assert UserRole.SUPERVISOR.value == "SUPERVISOR"
    assert CheckinState.READY_TO_FILL.value == "READY_TO_FILL"
