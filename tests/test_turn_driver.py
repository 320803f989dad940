import pytest

from tactics_ai.game_models import UniqueType
from tactics_ai.turn_driver import automate_faction_turn
from tests.battle_cases.board import (
    StubPredictor,
    add_civilian,
    add_unit,
    make_board,
    make_context,
    set_terrain,
)


def test_unit_with_two_attacks_uses_both():
    state = make_board()
    add_unit(
        state, "r1", "red", (2, 2),
        max_attacks_per_turn=2,
        uniques={UniqueType.CAN_MOVE_AFTER_ATTACKING},
    )
    add_unit(state, "b1", "blue", (3, 2))
    add_unit(state, "b2", "blue", (2, 3))
    ctx = make_context(state, "refined", StubPredictor(default_to_attacker=5, default_to_defender=30))

    decisions = automate_faction_turn(ctx, "red")
    assert len(decisions) == 1
    d = decisions[0]
    assert d.attacks == 2
    assert d.out_of_movement is True
    assert d.summary() == "attacked 2x"
    assert [o["order"] for o in d.orders] == ["attack", "attack"]
    assert d.considered and all("value" in c for c in d.considered)


def test_single_attack_unit_stops_after_one():
    state = make_board()
    add_unit(state, "r1", "red", (2, 2), uniques={UniqueType.CAN_MOVE_AFTER_ATTACKING})
    add_unit(state, "b1", "blue", (3, 2))
    ctx = make_context(state, "refined", StubPredictor(default_to_defender=30))
    (d,) = automate_faction_turn(ctx, "red")
    assert d.attacks == 1
    assert d.out_of_movement is False


def test_repositioned_unit_does_not_attack():
    state = make_board(width=5, height=5)
    set_terrain(state, [(0, 4), (1, 4), (2, 4)], "coast")
    add_unit(state, "s", "red", (1, 4), is_embarked=True)
    add_unit(state, "b1", "blue", (1, 2))
    ctx = make_context(state, "refined", StubPredictor(default_to_attacker=10, default_to_defender=30))
    (d,) = automate_faction_turn(ctx, "red")
    assert d.repositioned is True
    assert d.attacks == 0
    assert [o["order"] for o in d.orders] == ["move"]


def test_civilians_do_not_act_and_idle_units_report_no_action():
    state = make_board()
    add_unit(state, "r1", "red", (0, 0))
    add_civilian(state, "r_worker", "red", (1, 0))
    add_unit(state, "b1", "blue", (5, 5))
    ctx = make_context(state)
    decisions = automate_faction_turn(ctx, "red")
    assert [d.unit_id for d in decisions] == ["r1"]
    assert decisions[0].summary() == "no action"


def test_unit_lost_in_combat_is_reported():
    state = make_board()
    add_unit(state, "r1", "red", (2, 2), uniques={UniqueType.SELF_DESTRUCTS})
    add_unit(state, "b1", "blue", (3, 2))
    ctx = make_context(state, "baseline", StubPredictor(default_to_defender=100))
    (d,) = automate_faction_turn(ctx, "red")
    assert d.removed is True
    assert d.summary() == "lost in combat"


def test_unknown_faction_is_rejected():
    state = make_board()
    ctx = make_context(state)
    with pytest.raises(ValueError, match="Known factions"):
        automate_faction_turn(ctx, "purple")
