"""
Caution profile management.

This module provides named caution levels so callers and the CLI can pick a
temperament ("reckless", "cautious", ...) instead of a raw number.
"""

from __future__ import annotations
import os
from typing import Dict, Optional
import yaml


_PROFILES_CACHE: Optional[Dict[str, float]] = None


def load_all_profiles() -> Dict[str, float]:
    """Load all caution profiles from profiles.yaml."""
    global _PROFILES_CACHE
    if _PROFILES_CACHE is not None:
        return _PROFILES_CACHE

    profiles_path = os.path.join(os.path.dirname(__file__), "profiles.yaml")
    with open(profiles_path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    _PROFILES_CACHE = {str(name): float(value) for name, value in raw.items()}
    return _PROFILES_CACHE


def get_available_profiles() -> list[str]:
    """Get list of available profile names."""
    return sorted(load_all_profiles().keys())


def validate_caution(caution: float) -> float:
    caution = float(caution)
    if not 0.0 <= caution <= 1.0:
        raise ValueError(f"Caution level must be within [0, 1], got {caution}")
    return caution


def caution_for_profile(profile_name: str) -> float:
    """
    Resolve a caution profile to its level.

    Raises:
        ValueError: If profile_name doesn't exist
    """
    profiles = load_all_profiles()
    key = profile_name.strip().lower()
    if key not in profiles:
        available = ", ".join(get_available_profiles())
        raise ValueError(
            f"Profile '{profile_name}' not found. "
            f"Available profiles: {available}"
        )
    return validate_caution(profiles[key])


def list_profiles() -> None:
    """Print all available profiles with their caution levels."""
    profiles = load_all_profiles()
    print("\n=== Available Caution Profiles ===\n")
    for name in sorted(profiles, key=profiles.get):
        print(f"  {name:10s} - caution {profiles[name]:.2f}")
    print()


__all__ = [
    "load_all_profiles",
    "get_available_profiles",
    "validate_caution",
    "caution_for_profile",
    "list_profiles",
]
