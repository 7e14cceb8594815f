"""
Client HTTP cote agent / Guard-side HTTP client.

Implemente le contrat du registre au-dessus de l'API : les refus 4xx structures
redeviennent des PatrolRejected pour la machine de pointage.
Implements the record store contract over the HTTP API: structured 4xx
rejections become PatrolRejected again for the check-in state machine.
"""

import httpx

from guard_patrol.schemas.checkpoint import CheckpointRead
from guard_patrol.schemas.patrol import PatrolCreate, PatrolRead, PatrolRejection
from guard_patrol.schemas.user import UserRead
from guard_patrol.services.errors import PatrolRejected, RejectionReason
from guard_patrol.services.record_store import RecordStore


class PatrolApiClient(RecordStore):
    def __init__(self, client: httpx.AsyncClient):
        self._client = client

    async def login(self, username: str, password: str) -> UserRead:
        resp = await self._client.post("/api/auth/login", json={"username": username, "password": password})
        resp.raise_for_status()
        return UserRead.model_validate(resp.json()["user"])

    async def list_checkpoints(self) -> list[CheckpointRead]:
        resp = await self._client.get("/api/checkpoints/")
        resp.raise_for_status()
        return [CheckpointRead.model_validate(c) for c in resp.json()]

    async def get_checkpoint(self, checkpoint_id: int) -> CheckpointRead:
        resp = await self._client.get(f"/api/checkpoints/{checkpoint_id}")
        resp.raise_for_status()
        return CheckpointRead.model_validate(resp.json())

    async def append(self, candidate: PatrolCreate) -> PatrolRead:
        resp = await self._client.post("/api/patrols/", json=candidate.model_dump())
        if resp.status_code in (400, 409, 422):
            detail = resp.json().get("detail")
            if isinstance(detail, dict) and "reason" in detail:
                rejection = PatrolRejection.model_validate(detail)
                raise PatrolRejected(RejectionReason(rejection.reason), rejection.message, rejection.distance_m)
        resp.raise_for_status()
        return PatrolRead.model_validate(resp.json())

    async def _list(self, params: dict) -> list[PatrolRead]:
        resp = await self._client.get("/api/patrols/", params=params)
        resp.raise_for_status()
        return [PatrolRead.model_validate(r) for r in resp.json()]

    async def list_by_date(self, date: str) -> list[PatrolRead]:
        return await self._list({"date": date})

    async def list_by_guard_and_date(self, guard_id: int, date: str) -> list[PatrolRead]:
        return await self._list({"date": date, "guard_id": guard_id})
