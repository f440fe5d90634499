"""Great-circle helpers (spherical Earth, haversine)."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from .config import ParseErrorPolicy
from .numeric import cell, parse_float

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1, lon1, lat2, lon2):
    """
    Great-circle distance in km.  Works on scalars or numpy arrays (the
    usual broadcasting rules apply), so one left point can be measured
    against a whole column of right points in a single call.
    """
    φ1 = np.radians(lat1)
    φ2 = np.radians(lat2)
    dφ = np.radians(np.asarray(lat2, dtype=float) - np.asarray(lat1, dtype=float))
    dλ = np.radians(np.asarray(lon2, dtype=float) - np.asarray(lon1, dtype=float))

    a = np.sin(dφ / 2) ** 2 + np.cos(φ1) * np.cos(φ2) * np.sin(dλ / 2) ** 2
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lon: float

    def distance_to(self, other: "GeoPoint") -> float:
        """Distance to another point in km"""
        return float(haversine_km(self.lat, self.lon, other.lat, other.lon))

    @classmethod
    def from_row(
        cls,
        row: Sequence[str],
        lat_col: int,
        lon_col: int,
        policy: ParseErrorPolicy = ParseErrorPolicy.ZERO,
        *,
        row_no: int | None = None,
    ) -> Optional["GeoPoint"]:
        """
        Read a point from two cells of *row*.  Returns None only under the
        ``skip_row`` policy when either coordinate is malformed.
        """
        lat = parse_float(cell(row, lat_col), policy, row=row_no, col=lat_col)
        lon = parse_float(cell(row, lon_col), policy, row=row_no, col=lon_col)
        if lat is None or lon is None:
            return None
        return cls(lat, lon)
