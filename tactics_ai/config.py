from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping
import os, json

import yaml

from .value.weights import AttackWeights, ScoringPolicy, load_weights
from .value.profiles import caution_for_profile, validate_caution

DEFAULTS: Dict[str, Any] = {
    "engine": {
        "policy": "refined",
        "caution": 0.0,
        "profile": None,
        "weights_path": None,
        "weights": {},
    },
    "logging": {"level": "WARNING"},
}


def _deep_merge(a: Dict[str, Any], b: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(a)
    for k, v in (b or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def _load_one(path: str) -> Dict[str, Any]:
    if not os.path.exists(path):
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        text = f.read()
    # JSON is a subset of YAML, so one parser covers both
    d = yaml.safe_load(text) if not path.endswith(".json") else json.loads(text)
    if d is None:
        return {}
    if not isinstance(d, dict):
        raise ValueError(f"Config file {path} must contain a mapping at the top level")
    return d


def load_configs(paths: Iterable[str] | None) -> Dict[str, Any]:
    cfg: Dict[str, Any] = {}
    for p in (paths or []):
        cfg = _deep_merge(cfg, _load_one(p))
    return cfg


def env_overrides(prefix: str = "TACTICS_AI__") -> Dict[str, Any]:
    # Nested via double underscores: TACTICS_AI__ENGINE__CAUTION=0.4
    out: Dict[str, Any] = {}
    for k, v in os.environ.items():
        if not k.startswith(prefix):
            continue
        parts = k[len(prefix):].split("__")
        cur = out
        for i, part in enumerate(parts):
            key = part.lower()
            if i == len(parts) - 1:
                cur[key] = _coerce(v)
            else:
                cur = cur.setdefault(key, {})
    return out


def _coerce(s: str) -> Any:
    t = s.strip().lower()
    if t in ("true", "false"):
        return t == "true"
    try:
        if "." in t:
            return float(t)
        return int(t)
    except ValueError:
        return s


def apply_cli_overrides(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    return _deep_merge(base, overrides or {})


@dataclass(frozen=True)
class EngineConfig:
    policy: ScoringPolicy = ScoringPolicy.REFINED
    caution: float = 0.0
    weights_path: str | None = None
    weights_overrides: Mapping[str, Any] = field(default_factory=dict)
    log_level: str = "WARNING"

    @classmethod
    def from_mapping(cls, cfg: Mapping[str, Any]) -> "EngineConfig":
        """Validate a merged config mapping; a named profile wins over ``caution``."""
        merged = _deep_merge(DEFAULTS, dict(cfg or {}))
        engine = merged.get("engine") or {}
        profile = engine.get("profile")
        caution = caution_for_profile(profile) if profile else validate_caution(engine.get("caution", 0.0))
        return cls(
            policy=ScoringPolicy.parse(engine.get("policy", "refined")),
            caution=caution,
            weights_path=engine.get("weights_path"),
            weights_overrides=dict(engine.get("weights") or {}),
            log_level=str((merged.get("logging") or {}).get("level", "WARNING")).upper(),
        )

    def load_weights(self) -> AttackWeights:
        return load_weights(self.policy, self.weights_path, self.weights_overrides)


def resolve_config(
    paths: Iterable[str] | None = None,
    cli: Dict[str, Any] | None = None,
    env_prefix: str = "TACTICS_AI__",
) -> EngineConfig:
    """Layer files, environment, then CLI flags over the defaults."""
    cfg = load_configs(paths)
    cfg = _deep_merge(cfg, env_overrides(env_prefix))
    cfg = apply_cli_overrides(cfg, cli or {})
    return EngineConfig.from_mapping(cfg)


__all__ = [
    "DEFAULTS",
    "EngineConfig",
    "load_configs",
    "env_overrides",
    "apply_cli_overrides",
    "resolve_config",
    "_deep_merge",
]
