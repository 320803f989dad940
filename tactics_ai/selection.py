"""Pick the single best attack out of the enumerated candidates."""
from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple

from .game_models import AttackableTile, Unit
from .numeric import round_half_up
from .scoring import score_attack
from .value.profiles import validate_caution
from .value.weights import AttackWeights, ScoringPolicy

if TYPE_CHECKING:
    from .context import BattleContext


def min_attack_value_for_caution(caution: float, weights: AttackWeights) -> int:
    """
    Interpolate the refined acceptance threshold for a caution level.

    Caution 0 accepts almost anything (-50 with the packaged weights);
    caution 1 only takes clearly favourable fights (125).

    Raises:
        ValueError: If ``caution`` is outside [0, 1]
    """
    caution = validate_caution(caution)
    low = weights.min_attack_value_caution_0
    high = weights.min_attack_value_caution_1
    return low + round_half_up(caution * (high - low))


def rank_attack_targets(
    ctx: "BattleContext",
    attacker: Unit,
    candidates: Sequence[AttackableTile],
) -> List[Tuple[AttackableTile, int]]:
    return [(candidate, score_attack(ctx, attacker, candidate)) for candidate in candidates]


def choose_attack_target(
    ctx: "BattleContext",
    attacker: Unit,
    candidates: Sequence[AttackableTile],
    min_attack_value: Optional[int] = None,
) -> Optional[AttackableTile]:
    """
    Return the highest-valued candidate, or None if nothing is worth it.

    Ties keep the earliest candidate. Baseline only accepts a best value
    strictly above its fixed threshold and never a negative one;
    ``min_attack_value`` is ignored there. Refined accepts any best value at
    or above ``min_attack_value`` (its default threshold when None).
    """
    w = ctx.weights
    if ctx.policy is ScoringPolicy.BASELINE:
        threshold = w.default_min_attack_value
        best_value: float = 0
    else:
        threshold = w.default_min_attack_value if min_attack_value is None else min_attack_value
        best_value = float("-inf")
    best: Optional[AttackableTile] = None
    for candidate in candidates:
        value = score_attack(ctx, attacker, candidate)
        if value > best_value:
            best_value = value
            best = candidate

    if best is None:
        return None
    if ctx.policy is ScoringPolicy.BASELINE:
        return best if best_value > threshold else None
    return best if best_value >= threshold else None


__all__ = [
    "choose_attack_target",
    "min_attack_value_for_caution",
    "rank_attack_targets",
]
