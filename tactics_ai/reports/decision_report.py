from __future__ import annotations
from dataclasses import dataclass, asdict, field
from typing import Any, Dict, List, Sequence
from datetime import datetime, timezone
import json

from ..turn_driver import UnitDecision


def _fmt_pos(pos: Any) -> str:
    if isinstance(pos, (list, tuple)) and len(pos) == 2:
        return f"({pos[0]},{pos[1]})"
    return str(pos)


def _sanitize_order(order: Dict[str, Any]) -> Dict[str, Any]:
    # positions become "(q,r)" strings so JSON and markdown agree
    out: Dict[str, Any] = {}
    for k, v in order.items():
        if isinstance(v, tuple):
            out[k] = _fmt_pos(v)
        else:
            out[k] = v
    return out


@dataclass
class CandidateDiag:
    target: str | None
    target_name: str | None
    at: str
    origin: str
    movement_left: float
    value: int


@dataclass
class UnitDiag:
    unit_id: str
    unit_name: str
    outcome: str
    attacks: int
    out_of_movement: bool
    candidates: List[CandidateDiag] = field(default_factory=list)
    orders: List[Dict[str, Any]] = field(default_factory=list)


@dataclass
class DecisionReport:
    timestamp: str
    faction: str
    policy: str
    caution: float
    min_attack_value: int | None
    turn: int
    units: List[UnitDiag]

    def to_json(self) -> str:
        d = asdict(self)
        return json.dumps(d, indent=2, sort_keys=False)

    def to_markdown(self) -> str:
        lines = []
        lines.append(f"# Combat Decisions: {self.faction} (turn {self.turn})")
        lines.append(f"- **Timestamp:** {self.timestamp}")
        threshold = "default" if self.min_attack_value is None else str(self.min_attack_value)
        lines.append(f"- **Policy:** {self.policy}  |  **Caution:** {self.caution:.2f}  |  **Min attack value:** {threshold}")
        if not self.units:
            lines.append("\nNo military units to act.")
            return "\n".join(lines)
        for u in self.units:
            lines.append(f"\n## {u.unit_name} ({u.unit_id}): {u.outcome}")
            if u.candidates:
                for c in u.candidates:
                    who = c.target_name or "?"
                    lines.append(f"- {who} at {c.at} from {c.origin} | movement left {c.movement_left:g} | value={c.value}")
            else:
                lines.append("- no attackable targets")
            for o in u.orders:
                lines.append(f"    - order: `{o}`")
        return "\n".join(lines)


def build_decision_report(
    faction: str,
    policy: str,
    caution: float,
    decisions: Sequence[UnitDecision],
    turn: int = 1,
    min_attack_value: int | None = None,
) -> DecisionReport:
    timestamp = datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")
    units: List[UnitDiag] = []
    for d in decisions:
        units.append(UnitDiag(
            unit_id=d.unit_id,
            unit_name=d.unit_name,
            outcome=d.summary(),
            attacks=int(d.attacks),
            out_of_movement=bool(d.out_of_movement),
            candidates=[
                CandidateDiag(
                    target=c.get("target"),
                    target_name=c.get("target_name"),
                    at=_fmt_pos(c.get("at")),
                    origin=_fmt_pos(c.get("from")),
                    movement_left=float(c.get("movement_left", 0.0)),
                    value=int(c.get("value", 0)),
                )
                for c in d.considered
            ],
            orders=[_sanitize_order(o) for o in d.orders],
        ))

    return DecisionReport(
        timestamp=timestamp,
        faction=faction,
        policy=str(policy),
        caution=float(caution),
        min_attack_value=min_attack_value,
        turn=int(turn),
        units=units,
    )


__all__ = ["DecisionReport", "UnitDiag", "CandidateDiag", "build_decision_report"]
