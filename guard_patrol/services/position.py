"""
Sources de position / Position sources.

Une source fournit un fix frais a chaque appel, jamais une position en cache.
A source yields a fresh fix on every call, never a cached position.
"""

from typing import Protocol

from guard_patrol.services.errors import PositionDenied
from guard_patrol.utils.geo import Coordinate


class PositionSource(Protocol):
    async def current_position(self) -> Coordinate:
        """Fix courant ou PositionDenied / PositionUnavailable / Current fix or PositionDenied / PositionUnavailable."""
        ...


class StaticPositionSource:
    """Position fixe, pour la simulation et les tests / Fixed position, for simulation and tests.

    `None` simule un appareil sans localisation / `None` simulates a device without location.
    """

    def __init__(self, coordinate: Coordinate | None):
        self.coordinate = coordinate
        self.requests = 0

    async def current_position(self) -> Coordinate:
        self.requests += 1
        if self.coordinate is None:
            raise PositionDenied("Geolocation is not supported by this device")
        return self.coordinate
