"""Reachability and plain moves on the hex board."""

from __future__ import annotations

import pytest

from tactics_ai.errors import MovementError
from tactics_ai.game_models import UniqueType
from tactics_ai.movement import UnitMovement
from tests.battle_cases.board import (
    add_city,
    add_civilian,
    add_unit,
    make_board,
    set_terrain,
)


def test_open_ground_reach():
    state = make_board()
    warrior = add_unit(state, "r1", "red", (2, 2))
    reach = UnitMovement(state).get_distance_to_tiles(warrior)
    assert reach[(2, 2)] == 2.0
    assert reach[(3, 2)] == 1.0
    assert reach[(4, 2)] == 0.0
    assert (5, 2) not in reach
    assert len(reach) == 19


def test_rough_terrain_can_always_be_entered_with_movement_left():
    state = make_board()
    set_terrain(state, [(3, 2)], "hills")
    warrior = add_unit(state, "r1", "red", (2, 2), current_movement=1.0)
    reach = UnitMovement(state).get_distance_to_tiles(warrior)
    assert reach[(3, 2)] == 0.0


def test_land_units_stay_out_of_water_unless_embarked():
    state = make_board()
    set_terrain(state, [(3, 2)], "coast")
    warrior = add_unit(state, "r1", "red", (2, 2))
    movement = UnitMovement(state)
    assert (3, 2) not in movement.get_distance_to_tiles(warrior)
    warrior.is_embarked = True
    assert (3, 2) in movement.get_distance_to_tiles(warrior)


def test_enemy_units_and_cities_block():
    state = make_board()
    warrior = add_unit(state, "r1", "red", (2, 2))
    add_unit(state, "b1", "blue", (3, 2))
    add_city(state, "c1", "blue", (1, 2))
    reach = UnitMovement(state).get_distance_to_tiles(warrior)
    assert (3, 2) not in reach
    assert (1, 2) not in reach


def test_enemy_civilian_stops_movement():
    state = make_board()
    warrior = add_unit(state, "r1", "red", (0, 2))
    add_civilian(state, "worker", "blue", (1, 2))
    set_terrain(state, [(0, 1), (1, 1), (0, 3)], "coast")
    reach = UnitMovement(state).get_distance_to_tiles(warrior)
    assert reach[(1, 2)] == 1.0
    # only reachable through the civilian's tile
    assert (2, 2) not in reach


def test_move_to_tile_spends_movement_and_logs():
    state = make_board()
    warrior = add_unit(state, "r1", "red", (2, 2))
    UnitMovement(state).move_to_tile(warrior, state.tile((3, 2)))
    assert warrior.position == (3, 2)
    assert warrior.current_movement == 1.0
    assert state.tile((2, 2)).military_unit is None
    assert state.order_log[-1]["order"] == "move"


def test_move_to_unreachable_tile_raises():
    state = make_board()
    warrior = add_unit(state, "r1", "red", (0, 0))
    with pytest.raises(MovementError):
        UnitMovement(state).move_to_tile(warrior, state.tile((5, 5)))
    assert warrior.position == (0, 0)


def test_moving_onto_a_civilian_captures_it():
    state = make_board()
    warrior = add_unit(state, "r1", "red", (2, 2))
    worker = add_civilian(state, "worker", "blue", (3, 2))
    UnitMovement(state).move_to_tile(warrior, state.tile((3, 2)))
    assert worker.owner == "red"
    assert state.order_log[-1]["captured"] == "worker"


def test_uncapturable_civilian_is_destroyed():
    state = make_board()
    warrior = add_unit(state, "r1", "red", (2, 2))
    add_civilian(state, "prophet", "blue", (3, 2), UniqueType.UNCAPTURABLE)
    UnitMovement(state).move_to_tile(warrior, state.tile((3, 2)))
    assert "prophet" not in state.units
    assert state.tile((3, 2)).civilian_unit is None


def test_cannot_walk_onto_a_neutral_civilian():
    state = make_board()
    warrior = add_unit(state, "r1", "red", (2, 2))
    add_civilian(state, "trader", "green", (3, 2))
    movement = UnitMovement(state)
    assert movement.can_move_to(warrior, state.tile((3, 2))) is False
    assert movement.can_reach_in_current_turn(warrior, state.tile((3, 2))) is False
