"""
Simulation d'une ronde agent / Guard patrol simulation.

Usage:
    API_URL=http://127.0.0.1:8000 GUARD_USERNAME=guard1 GUARD_PASSWORD=guard123 \
    CHECKPOINT_ID=1 OFFSET_M=12 \
    python -m scripts.simulate_patrol

OFFSET_M decale la position simulee vers le nord / shifts the simulated position north.
NO_LOCATION=1 simule un appareil sans localisation / simulates a device without location.
"""

import asyncio
import logging
import math
import os
import sys

import httpx

from guard_patrol.services.api_client import PatrolApiClient
from guard_patrol.services.checkin import CheckinState, CheckinStateMachine, CheckpointSnapshot, GuardContext
from guard_patrol.services.position import StaticPositionSource
from guard_patrol.utils.geo import EARTH_RADIUS_M, Coordinate

logger = logging.getLogger("guard_patrol.simulator")


async def simulate():
    api_url = os.getenv("API_URL", "http://127.0.0.1:8000")
    checkpoint_id = int(os.getenv("CHECKPOINT_ID", "1"))
    offset_m = float(os.getenv("OFFSET_M", "0"))

    async with httpx.AsyncClient(base_url=api_url, timeout=15) as http:
        api = PatrolApiClient(http)
        user = await api.login(os.getenv("GUARD_USERNAME", "guard1"), os.getenv("GUARD_PASSWORD", "guard123"))
        checkpoint = CheckpointSnapshot.from_read(await api.get_checkpoint(checkpoint_id))

        position = None
        if os.getenv("NO_LOCATION") != "1":
            position = Coordinate(
                checkpoint.latitude + math.degrees(offset_m / EARTH_RADIUS_M),
                checkpoint.longitude,
            )

        machine = CheckinStateMachine(GuardContext(user.id, user.name), StaticPositionSource(position), api)
        attempt = await machine.select_checkpoint(checkpoint)
        if attempt.state is not CheckinState.READY_TO_FILL:
            logger.warning("%s: %s", attempt.state.value, attempt.error)
            return 1

        for item in checkpoint.checklist:
            machine.toggle_item(item)
        attempt = await machine.submit()
        if attempt.state is CheckinState.COMPLETED:
            logger.info("Patrol %s recorded at %s (%.1fm)", attempt.record.id, attempt.record.timestamp, attempt.record.distance_m)
            return 0
        logger.warning("%s: %s", attempt.state.value, attempt.error)
        return 1


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    sys.exit(asyncio.run(simulate()))
