"""Hex map geometry used by reachability and target enumeration."""

from .coordinates import (
    Position,
    axial_add,
    axial_distance,
    axial_neighbors,
    distance,
    hexes_in_distance,
)

__all__ = [
    "Position",
    "axial_add",
    "axial_distance",
    "axial_neighbors",
    "distance",
    "hexes_in_distance",
]
