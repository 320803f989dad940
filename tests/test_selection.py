import pytest

from tactics_ai import selection
from tactics_ai.selection import (
    choose_attack_target,
    min_attack_value_for_caution,
    rank_attack_targets,
)
from tactics_ai.value.weights import load_weights
from tests.battle_cases.board import add_unit, candidate, make_board, make_context


def _pick(monkeypatch, policy, values, **kw):
    """Run the selector over len(values) candidates with fixed scores."""
    state = make_board(width=8, height=3)
    attacker = add_unit(state, "r1", "red", (0, 1))
    cands = []
    for i, _ in enumerate(values):
        add_unit(state, f"b{i}", "blue", (i + 1, 0))
        cands.append(candidate(state, (0, 1), (i + 1, 0)))
    scores = {id(c): v for c, v in zip(cands, values)}
    monkeypatch.setattr(selection, "score_attack", lambda ctx, unit, c: scores[id(c)])
    ctx = make_context(state, policy)
    chosen = choose_attack_target(ctx, attacker, cands, **kw)
    return None if chosen is None else cands.index(chosen)


def test_baseline_picks_the_highest_value(monkeypatch):
    assert _pick(monkeypatch, "baseline", [40, 55]) == 1


@pytest.mark.parametrize("policy", ["baseline", "refined"])
def test_ties_keep_the_first_candidate(monkeypatch, policy):
    assert _pick(monkeypatch, policy, [55, 55]) == 0
    assert _pick(monkeypatch, policy, [10, 55, 55]) == 1


def test_baseline_threshold_is_strict(monkeypatch):
    assert _pick(monkeypatch, "baseline", [30]) is None
    assert _pick(monkeypatch, "baseline", [31]) == 0


def test_baseline_ignores_a_caller_threshold(monkeypatch):
    assert _pick(monkeypatch, "baseline", [20], min_attack_value=10) is None
    assert _pick(monkeypatch, "baseline", [31], min_attack_value=100) == 0


def test_baseline_never_picks_negative_values(monkeypatch):
    assert _pick(monkeypatch, "baseline", [-5, -1]) is None
    assert _pick(monkeypatch, "baseline", [0, 0]) is None


def test_refined_default_threshold_is_inclusive(monkeypatch):
    assert _pick(monkeypatch, "refined", [-25]) == 0
    assert _pick(monkeypatch, "refined", [-26]) is None


def test_refined_picks_best_of_negative_values(monkeypatch):
    assert _pick(monkeypatch, "refined", [-20, -5, -30]) == 1


def test_refined_explicit_threshold(monkeypatch):
    assert _pick(monkeypatch, "refined", [38], min_attack_value=38) == 0
    assert _pick(monkeypatch, "refined", [37], min_attack_value=38) is None
    assert _pick(monkeypatch, "refined", [-50], min_attack_value=-50) == 0


def test_no_candidates_means_no_target(monkeypatch):
    assert _pick(monkeypatch, "baseline", []) is None
    assert _pick(monkeypatch, "refined", []) is None


@pytest.mark.parametrize("caution,expected", [(0.0, -50), (1.0, 125), (0.5, 38), (0.2, -15)])
def test_min_attack_value_for_caution(caution, expected):
    assert min_attack_value_for_caution(caution, load_weights("refined")) == expected


@pytest.mark.parametrize("caution", [-0.1, 1.5])
def test_caution_outside_unit_interval_is_rejected(caution):
    with pytest.raises(ValueError):
        min_attack_value_for_caution(caution, load_weights("refined"))


def test_rank_attack_targets_keeps_enumeration_order():
    state = make_board()
    attacker = add_unit(state, "r1", "red", (1, 1))
    add_unit(state, "b1", "blue", (2, 1))
    add_unit(state, "b2", "blue", (1, 2))
    cands = [candidate(state, (1, 1), (1, 2)), candidate(state, (1, 1), (2, 1))]
    ctx = make_context(state, "refined")
    ranked = rank_attack_targets(ctx, attacker, cands)
    assert [c for c, _ in ranked] == cands
    assert all(isinstance(v, int) for _, v in ranked)
