"""
Weights tables and caution profiles for attack evaluation.

This package provides:
- Scoring policies and their per-policy weights tables
- Named caution profiles for the refined policy
"""

from .weights import ScoringPolicy, AttackWeights, load_weights
from .profiles import (
    caution_for_profile,
    get_available_profiles,
    list_profiles,
    validate_caution,
)

__all__ = [
    "ScoringPolicy",
    "AttackWeights",
    "load_weights",
    "caution_for_profile",
    "get_available_profiles",
    "list_profiles",
    "validate_caution",
]
