"""Utilitaires géographiques / Geographic utilities.

Distance orthodromique (Haversine, Terre sphérique) et test de rayon de pointage.
Great-circle distance (Haversine, spherical Earth) and check-in radius test.
"""

import math
from typing import NamedTuple

# Rayon moyen de la Terre en metres / Mean Earth radius in meters
EARTH_RADIUS_M = 6371000.0


class Coordinate(NamedTuple):
    """Point WGS-84 en degres decimaux / WGS-84 point in decimal degrees."""

    latitude: float
    longitude: float


def haversine_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Distance Haversine en metres / Haversine distance in meters."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    # Arrondis flottants : a peut depasser 1 de quelques ulp / float rounding can push a past 1
    a = min(1.0, a)
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def distance_m(a: Coordinate, b: Coordinate) -> float:
    """Distance entre deux coordonnees en metres / Distance between two coordinates in meters."""
    return haversine_m(a.latitude, a.longitude, b.latitude, b.longitude)


def is_within_radius(distance: float, radius_m: float) -> bool:
    """Rayon inclusif : 50.0 m passe pour un rayon de 50 m / Inclusive radius: 50.0 m passes a 50 m radius."""
    return distance <= radius_m
