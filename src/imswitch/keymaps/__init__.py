"""Key chord notation and trigger sequence storage."""

from .models import KeySequence, KeyStroke
from .triggers import TriggerKeySet

__all__ = [
    "KeySequence",
    "KeyStroke",
    "TriggerKeySet",
]
