"""Axial coordinate helpers for the hex battle map.

Coordinate System:
    - Axial coordinates (q, r); the third cube coordinate is s = -(q + r)
    - Distance = max(|dq|, |dr|, |ds|)

Edge Numbering (clockwise from East):
    0 = East     : (+1,  0)
    1 = Northeast: (+1, -1)
    2 = Northwest: ( 0, -1)
    3 = West     : (-1,  0)
    4 = Southwest: (-1, +1)
    5 = Southeast: ( 0, +1)
"""
from __future__ import annotations

from typing import Dict, Iterator, List, Tuple

Position = Tuple[int, int]

AXIAL_DIRECTIONS: List[Position] = [
    (+1,  0),  # 0: East
    (+1, -1),  # 1: Northeast
    ( 0, -1),  # 2: Northwest
    (-1,  0),  # 3: West
    (-1, +1),  # 4: Southwest
    ( 0, +1),  # 5: Southeast
]


def axial_add(coord: Position, direction: int) -> Position:
    """Step one hex from ``coord`` along edge ``direction``."""
    q, r = coord
    dq, dr = AXIAL_DIRECTIONS[direction % 6]
    return (q + dq, r + dr)


def axial_neighbors(q: int, r: int) -> Dict[int, Position]:
    """Return all 6 neighbors of a hex as a dict of edge -> (q, r)."""
    return {edge: axial_add((q, r), edge) for edge in range(6)}


def axial_distance(q1: int, r1: int, q2: int, r2: int) -> int:
    """Calculate the distance between two hexes in axial coordinates.

    Args:
        q1, r1: First hex coordinates
        q2, r2: Second hex coordinates

    Returns:
        Number of steps between the two positions
    """
    dq = q1 - q2
    dr = r1 - r2
    ds = -(dq + dr)
    return max(abs(dq), abs(dr), abs(ds))


def distance(a: Position, b: Position) -> int:
    return axial_distance(a[0], a[1], b[0], b[1])


def hexes_in_distance(center: Position, radius: int) -> Iterator[Position]:
    """Yield every position within ``radius`` steps of ``center``, center first.

    Positions are produced ring by ring so callers that stop early see the
    nearest hexes first.
    """
    if radius < 0:
        return
    yield center
    for ring in range(1, radius + 1):
        # Start ``ring`` steps to the southwest, then walk each of the six sides.
        q, r = center
        dq, dr = AXIAL_DIRECTIONS[4]
        pos = (q + dq * ring, r + dr * ring)
        for side in range(6):
            for _ in range(ring):
                yield pos
                pos = axial_add(pos, side)


__all__ = [
    "Position",
    "AXIAL_DIRECTIONS",
    "axial_add",
    "axial_neighbors",
    "axial_distance",
    "distance",
    "hexes_in_distance",
]
