from __future__ import annotations
import argparse, logging, sys
from typing import Any, Dict

from .config import EngineConfig, resolve_config
from .context import BattleContext
from .reports.decision_report import build_decision_report
from .selection import choose_attack_target, min_attack_value_for_caution, rank_attack_targets
from .battle_helper import AttackOrchestrator
from .state.loaders import load_scenario
from .turn_driver import automate_faction_turn
from .value.profiles import list_profiles
from .value.weights import ScoringPolicy


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="python -m tactics_ai.cli",
        description="Combat target-selection engine"
    )
    sub = p.add_subparsers(dest="cmd")

    # decide
    dc = sub.add_parser("decide", help="Run one faction's combat turn on a scenario")
    dc.add_argument("scenario", type=str, help="Scenario file (.yaml or .json)")
    dc.add_argument("--faction", type=str, required=True, help="Faction to act for")
    _add_common_args(dc)
    dc.add_argument("--report", type=str, default=None, help="Path to save report (.json or .md)")
    dc.add_argument("--print-md", action="store_true", help="Print Markdown report to stdout")

    # score
    sc = sub.add_parser("score", help="List every candidate of one unit with its attack value")
    sc.add_argument("scenario", type=str, help="Scenario file (.yaml or .json)")
    sc.add_argument("--unit", type=str, required=True, help="Unit id")
    _add_common_args(sc)

    # profiles
    sub.add_parser("profiles", help="List caution profiles")

    args = p.parse_args(argv)
    if getattr(args, "cmd", None) is None:
        p.print_help()
        sys.exit(2)
    return args


def _add_common_args(ap: argparse.ArgumentParser) -> None:
    ap.add_argument("--policy", choices=[p.value for p in ScoringPolicy], default=None,
                    help="Scoring policy (default from config: refined)")
    ap.add_argument("--caution", type=float, default=None, help="Caution level in [0, 1] (refined only)")
    ap.add_argument("--profile", type=str, default=None, help="Named caution profile (see `profiles`)")
    ap.add_argument("--weights", type=str, default=None, help="Custom weights table (YAML)")
    ap.add_argument("--config", type=str, action="append", default=[], help="YAML/JSON config files (merged)")
    ap.add_argument("--env-prefix", type=str, default="TACTICS_AI__", help="Env prefix for overrides")
    ap.add_argument("--log-level", type=str, default=None, help="DEBUG shows every scored candidate")


def _cli_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    engine: Dict[str, Any] = {}
    if args.policy:
        engine["policy"] = args.policy
    if args.caution is not None:
        engine["caution"] = args.caution
        engine["profile"] = None  # an explicit level beats any configured profile
    if args.profile:
        engine["profile"] = args.profile
    if args.weights:
        engine["weights_path"] = args.weights
    out: Dict[str, Any] = {"engine": engine}
    if args.log_level:
        out["logging"] = {"level": args.log_level}
    return out


def _setup(args: argparse.Namespace):
    cfg = resolve_config(args.config, _cli_overrides(args), args.env_prefix)
    logging.basicConfig(
        level=getattr(logging, cfg.log_level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )
    state = load_scenario(args.scenario)
    ctx = BattleContext.create(state, policy=cfg.policy, weights=cfg.load_weights())
    return cfg, ctx


def _threshold(cfg: EngineConfig, ctx: BattleContext) -> int | None:
    if cfg.policy is ScoringPolicy.REFINED:
        return min_attack_value_for_caution(cfg.caution, ctx.weights)
    return None


def _decide(args: argparse.Namespace) -> int:
    cfg, ctx = _setup(args)
    decisions = automate_faction_turn(ctx, args.faction, caution=cfg.caution)
    report = build_decision_report(
        faction=args.faction,
        policy=cfg.policy.value,
        caution=cfg.caution,
        decisions=decisions,
        turn=ctx.state.turn,
        min_attack_value=_threshold(cfg, ctx),
    )

    for d in decisions:
        print(f"{d.unit_name} ({d.unit_id}): {d.summary()}")
    if not decisions:
        print(f"{args.faction} has no military units")

    if args.report:
        if args.report.endswith(".json"):
            with open(args.report, "w", encoding="utf-8") as f:
                f.write(report.to_json())
        elif args.report.endswith(".md"):
            with open(args.report, "w", encoding="utf-8") as f:
                f.write(report.to_markdown())
        else:
            print("Report path must end with .json or .md", file=sys.stderr)
            return 1
    if args.print_md:
        print(report.to_markdown())
    return 0


def _score(args: argparse.Namespace) -> int:
    cfg, ctx = _setup(args)
    unit = ctx.state.units.get(args.unit)
    if unit is None:
        print(f"Unknown unit '{args.unit}'", file=sys.stderr)
        return 1

    orchestrator = AttackOrchestrator(ctx)
    distance_to_tiles = ctx.movement.get_distance_to_tiles(unit)
    candidates = orchestrator.attackable_enemies(unit, distance_to_tiles)
    threshold = _threshold(cfg, ctx)
    chosen = choose_attack_target(ctx, unit, candidates, min_attack_value=threshold)

    shown = "default" if threshold is None else threshold
    print(f"{unit.name} ({unit.id}) | policy={cfg.policy.value} | min attack value={shown}")
    if not candidates:
        print("  no attackable targets")
    for candidate, value in rank_attack_targets(ctx, unit, candidates):
        target = candidate.combatant
        mark = "*" if candidate is chosen else " "
        name = target.name if target is not None else "?"
        print(f" {mark} {name:16s} at {candidate.tile_to_attack.position} "
              f"from {candidate.tile_to_attack_from.position}  value={value}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    if args.cmd == "decide":
        return _decide(args)
    if args.cmd == "score":
        return _score(args)
    if args.cmd == "profiles":
        list_profiles()
        return 0
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
