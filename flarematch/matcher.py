"""
matcher.py – nearest-neighbour spatial join between two tables

Every left data row is measured against every right data row (haversine,
vectorised per left row).  The closest right row wins if it lies strictly
inside ``max_distance_km``; on equal distances the earlier right row wins.
Left rows without a winner are returned as *dangling*.

Public symbols
--------------
JoinResult             – matched rows, dangling rows, per-match bookkeeping
match_nearest(...)     – the join itself
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import numpy as np
from joblib import Parallel, delayed

from .config import MAX_DISTANCE_KM, ParseErrorPolicy
from .geo import GeoPoint, haversine_km

log = logging.getLogger("flarematch.matcher")

Row = List[str]
Table = List[Row]


@dataclass
class JoinResult:
    matched: List[Row] = field(default_factory=list)
    dangling: List[Row] = field(default_factory=list)
    # parallel to `matched`
    distances_km: List[float] = field(default_factory=list)
    match_indices: List[int] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.matched) + len(self.dangling)


# ────────────────────────────────────────────────────────────────────────────
# internal helpers
# ────────────────────────────────────────────────────────────────────────────
def _right_coordinates(
    rows: Sequence[Row], lat_col: int, lon_col: int, policy: ParseErrorPolicy
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Parse the right table once; rows skipped by the policy never compete."""
    lats: list[float] = []
    lons: list[float] = []
    keep: list[int] = []
    for i, row in enumerate(rows):
        p = GeoPoint.from_row(row, lat_col, lon_col, policy, row_no=i + 1)
        if p is None:
            continue
        lats.append(p.lat)
        lons.append(p.lon)
        keep.append(i)
    return np.array(lats, dtype=float), np.array(lons, dtype=float), np.array(keep, dtype=int)


def _match_chunk(
    rows: Sequence[Row],
    offset: int,
    lat_col: int,
    lon_col: int,
    right_lats: np.ndarray,
    right_lons: np.ndarray,
    right_idx: np.ndarray,
    max_distance_km: float,
    policy: ParseErrorPolicy,
) -> List[Tuple[Optional[int], float]]:
    """
    Resolve a contiguous slice of left rows.  Returns one
    ``(right_index | None, distance)`` pair per row, in input order.
    """
    out: List[Tuple[Optional[int], float]] = []
    for k, row in enumerate(rows):
        p = GeoPoint.from_row(row, lat_col, lon_col, policy, row_no=offset + k + 1)
        if p is None or right_idx.size == 0:
            out.append((None, float("nan")))
            continue

        d = haversine_km(p.lat, p.lon, right_lats, right_lons)
        d = np.where(np.isnan(d), np.inf, d)  # NaN never wins
        best = int(np.argmin(d))              # first minimum → earlier row on ties
        if d[best] < max_distance_km:
            out.append((int(right_idx[best]), float(d[best])))
        else:
            out.append((None, float(d[best])))
    return out


# ────────────────────────────────────────────────────────────────────────────
# public API
# ────────────────────────────────────────────────────────────────────────────
def match_nearest(
    left: Table,
    right: Table,
    left_lat_col: int,
    left_lon_col: int,
    right_lat_col: int,
    right_lon_col: int,
    max_distance_km: float = MAX_DISTANCE_KM,
    *,
    on_parse_error: ParseErrorPolicy = ParseErrorPolicy.ZERO,
    n_jobs: int = 1,
) -> JoinResult:
    """
    Join *left* to its nearest row in *right* (row 0 of both is the header).

    ``matched`` rows are ``left_row + right_row``; ``dangling`` rows are the
    left rows unchanged.  Both keep left-table order.  With ``n_jobs > 1``
    the left rows are split into contiguous chunks and resolved by joblib;
    the outcome is identical to the sequential run.
    """
    left_rows = left[1:]
    right_rows = right[1:]
    r_lat, r_lon, r_idx = _right_coordinates(right_rows, right_lat_col, right_lon_col, on_parse_error)

    args = (left_lat_col, left_lon_col, r_lat, r_lon, r_idx, max_distance_km, on_parse_error)
    if n_jobs > 1 and len(left_rows) > 1:
        bounds = np.array_split(np.arange(len(left_rows)), min(n_jobs, len(left_rows)))
        parts = Parallel(n_jobs=n_jobs)(
            delayed(_match_chunk)(left_rows[b[0]:b[-1] + 1], int(b[0]), *args)
            for b in bounds if b.size
        )
        picks = [p for part in parts for p in part]
    else:
        picks = _match_chunk(left_rows, 0, *args)

    result = JoinResult()
    for row, (j, dist) in zip(left_rows, picks):
        if j is None:
            result.dangling.append(list(row))
            continue
        result.matched.append(list(row) + list(right_rows[j]))
        result.distances_km.append(dist)
        result.match_indices.append(j)
        log.debug("Matched %s → right row %d (%.3f km)", row[:1], j, dist)

    log.info(
        "Spatial join (< %.1f km): %d matched, %d dangling of %d left rows",
        max_distance_km, len(result.matched), len(result.dangling), len(left_rows),
    )
    return result
