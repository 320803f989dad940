"""Tests for axial coordinate system."""
import pytest

from tactics_ai.map.coordinates import (
    AXIAL_DIRECTIONS,
    axial_add,
    axial_distance,
    axial_neighbors,
    distance,
    hexes_in_distance,
)


class TestAxialBasics:
    """Test basic axial coordinate functions."""

    def test_directions_are_unit_steps(self):
        for dq, dr in AXIAL_DIRECTIONS:
            assert axial_distance(0, 0, dq, dr) == 1

    def test_axial_add_wraps_direction(self):
        assert axial_add((2, 2), 0) == (3, 2)
        assert axial_add((2, 2), 6) == (3, 2)
        assert axial_add((2, 2), 4) == (1, 3)

    def test_neighbors(self):
        nbrs = axial_neighbors(0, 0)
        assert set(nbrs.values()) == {(1, 0), (1, -1), (0, -1), (-1, 0), (-1, 1), (0, 1)}

    @pytest.mark.parametrize(
        "a,b,expected",
        [((0, 0), (0, 0), 0), ((0, 0), (3, 0), 3), ((0, 0), (2, -3), 3), ((1, 2), (4, 4), 5)],
    )
    def test_distance(self, a, b, expected):
        assert distance(a, b) == expected
        assert distance(b, a) == expected


class TestHexesInDistance:
    """Test ring enumeration."""

    @pytest.mark.parametrize("radius", [0, 1, 2, 3])
    def test_count(self, radius):
        hexes = list(hexes_in_distance((5, 5), radius))
        assert len(hexes) == 1 + 3 * radius * (radius + 1)
        assert len(set(hexes)) == len(hexes)

    def test_center_first_then_rings(self):
        hexes = list(hexes_in_distance((0, 0), 2))
        assert hexes[0] == (0, 0)
        rings = [distance((0, 0), h) for h in hexes]
        assert rings == sorted(rings)

    def test_negative_radius_is_empty(self):
        assert list(hexes_in_distance((0, 0), -1)) == []
