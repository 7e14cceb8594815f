"""Tests du registre des rondes / Record store tests."""

import asyncio
import uuid

import pytest
from sqlalchemy import func, select

from guard_patrol.models.checkpoint import Checkpoint
from guard_patrol.models.patrol_record import PatrolRecord
from guard_patrol.models.user import User
from guard_patrol.schemas.patrol import PatrolCreate
from guard_patrol.services.errors import PatrolRejected, RejectionReason
from tests.conftest import CHECKLIST, CHECKPOINT_COORD, TODAY, offset_north


def _candidate(seeded, coord=CHECKPOINT_COORD, **overrides) -> PatrolCreate:
    data = {
        "guard_id": seeded.guard_id,
        "checkpoint_id": seeded.checkpoint_id,
        "latitude": coord.latitude,
        "longitude": coord.longitude,
        "checklist_results": {item: True for item in CHECKLIST},
    }
    data.update(overrides)
    return PatrolCreate(**data)


async def _count(session_factory) -> int:
    async with session_factory() as session:
        return (await session.execute(select(func.count(PatrolRecord.id)))).scalar()


@pytest.mark.asyncio
async def test_accepts_check_in_at_checkpoint(store, seeded, clock):
    record = await store.append(_candidate(seeded))
    assert record.id is not None
    assert record.distance_m == 0
    assert record.guard_name == "John Smith"
    assert record.checkpoint_name == "Main Entrance"
    assert record.checkpoint_latitude == CHECKPOINT_COORD.latitude
    assert record.timestamp == "2026-10-18T08:00:00.000+00:00"
    assert record.checklist_results == {item: True for item in CHECKLIST}


@pytest.mark.asyncio
async def test_rejects_two_hundred_meters(store, seeded, session_factory):
    with pytest.raises(PatrolRejected) as exc_info:
        await store.append(_candidate(seeded, offset_north(CHECKPOINT_COORD, 200)))
    exc = exc_info.value
    assert exc.reason is RejectionReason.OUT_OF_RANGE
    assert exc.distance_m == pytest.approx(200, rel=0.05)
    assert "Current distance: 200m" in exc.message
    assert await _count(session_factory) == 0


@pytest.mark.asyncio
async def test_server_distance_is_stored(store, seeded):
    record = await store.append(_candidate(seeded, offset_north(CHECKPOINT_COORD, 30)))
    assert record.distance_m == pytest.approx(30, rel=1e-6)


@pytest.mark.asyncio
async def test_unknown_checkpoint(store, seeded):
    with pytest.raises(PatrolRejected) as exc_info:
        await store.append(_candidate(seeded, checkpoint_id=9999))
    assert exc_info.value.reason is RejectionReason.CHECKPOINT_NOT_FOUND
    assert exc_info.value.distance_m is None


@pytest.mark.asyncio
async def test_unknown_guard(store, seeded):
    with pytest.raises(PatrolRejected) as exc_info:
        await store.append(_candidate(seeded, guard_id=9999))
    assert exc_info.value.reason is RejectionReason.GUARD_NOT_FOUND


@pytest.mark.asyncio
async def test_supervisor_cannot_check_in(store, seeded):
    with pytest.raises(PatrolRejected) as exc_info:
        await store.append(_candidate(seeded, guard_id=seeded.supervisor_id))
    assert exc_info.value.reason is RejectionReason.GUARD_NOT_FOUND


@pytest.mark.asyncio
async def test_inactive_guard(store, seeded, session_factory):
    async with session_factory() as session:
        guard = await session.get(User, seeded.guard_id)
        guard.is_active = False
        await session.commit()
    with pytest.raises(PatrolRejected) as exc_info:
        await store.append(_candidate(seeded))
    assert exc_info.value.reason is RejectionReason.GUARD_NOT_FOUND


@pytest.mark.asyncio
async def test_incomplete_checklist_rejected_before_distance(store, seeded, session_factory):
    results = {item: True for item in CHECKLIST}
    results["Lights off"] = False
    with pytest.raises(PatrolRejected) as exc_info:
        await store.append(_candidate(seeded, offset_north(CHECKPOINT_COORD, 500), checklist_results=results))
    assert exc_info.value.reason is RejectionReason.CHECKLIST_INCOMPLETE
    assert await _count(session_factory) == 0


@pytest.mark.asyncio
async def test_empty_checklist_rejected(store, seeded):
    with pytest.raises(PatrolRejected) as exc_info:
        await store.append(_candidate(seeded, checklist_results={}))
    assert exc_info.value.reason is RejectionReason.CHECKLIST_INCOMPLETE


@pytest.mark.asyncio
async def test_foreign_checklist_labels_rejected(store, seeded, session_factory):
    with pytest.raises(PatrolRejected) as exc_info:
        await store.append(_candidate(seeded, checklist_results={"anything": True}))
    assert exc_info.value.reason is RejectionReason.CHECKLIST_INCOMPLETE
    assert await _count(session_factory) == 0


@pytest.mark.asyncio
async def test_missing_checklist_labels_rejected(store, seeded, session_factory):
    results = {item: True for item in CHECKLIST[:2]}
    with pytest.raises(PatrolRejected) as exc_info:
        await store.append(_candidate(seeded, checklist_results=results))
    assert exc_info.value.reason is RejectionReason.CHECKLIST_INCOMPLETE
    assert await _count(session_factory) == 0


@pytest.mark.asyncio
async def test_duplicate_submission_returns_existing_record(store, seeded, session_factory, clock):
    submission_id = str(uuid.uuid4())
    first = await store.append(_candidate(seeded, submission_id=submission_id))
    clock.advance(seconds=5)
    second = await store.append(_candidate(seeded, submission_id=submission_id))
    assert second.id == first.id
    assert second.timestamp == first.timestamp
    assert await _count(session_factory) == 1


@pytest.mark.asyncio
async def test_reused_submission_id_for_other_check_in_conflicts(store, seeded, session_factory):
    submission_id = str(uuid.uuid4())
    await store.append(_candidate(seeded, submission_id=submission_id))
    with pytest.raises(PatrolRejected) as exc_info:
        await store.append(
            _candidate(
                seeded,
                offset_north(CHECKPOINT_COORD, 5000),
                guard_id=seeded.other_guard_id,
                submission_id=submission_id,
            )
        )
    assert exc_info.value.reason is RejectionReason.SUBMISSION_CONFLICT
    assert await _count(session_factory) == 1


@pytest.mark.asyncio
async def test_concurrent_check_ins_are_independent(store, seeded, session_factory):
    a, b = await asyncio.gather(
        store.append(_candidate(seeded, submission_id=str(uuid.uuid4()))),
        store.append(_candidate(seeded, offset_north(CHECKPOINT_COORD, 10), submission_id=str(uuid.uuid4()))),
    )
    assert a.id != b.id
    assert await _count(session_factory) == 2


@pytest.mark.asyncio
async def test_history_survives_checkpoint_and_guard_changes(store, seeded, session_factory):
    record = await store.append(_candidate(seeded))
    async with session_factory() as session:
        guard = await session.get(User, seeded.guard_id)
        guard.name = "Johnny Smith"
        checkpoint = await session.get(Checkpoint, seeded.checkpoint_id)
        await session.delete(checkpoint)
        await session.commit()

    [stored] = await store.list_by_date(TODAY)
    assert stored == record
    assert stored.guard_name == "John Smith"
    assert stored.checkpoint_name == "Main Entrance"
    assert stored.checkpoint_latitude == CHECKPOINT_COORD.latitude


@pytest.mark.asyncio
async def test_listing_by_date_and_guard(store, seeded, clock, session_factory):
    first = await store.append(_candidate(seeded))
    clock.advance(minutes=30)
    other = await store.append(_candidate(seeded, guard_id=seeded.other_guard_id))
    clock.advance(days=1)
    await store.append(_candidate(seeded))

    assert [r.id for r in await store.list_by_date(TODAY)] == [first.id, other.id]
    assert [r.id for r in await store.list_by_guard_and_date(seeded.guard_id, TODAY)] == [first.id]
    assert len(await store.list_by_date("2026-10-19")) == 1
    assert await store.list_by_date("2026-10-17") == []
