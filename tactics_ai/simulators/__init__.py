"""Reference combat prediction and resolution."""

from .combat import DamagePredictor
from .battle import Battle

__all__ = ["DamagePredictor", "Battle"]
