"""Dataclasses describing key strokes and chord notation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

MODIFIER_PREFIXES = {
    "C": "ctrl",
    "M": "meta",
    "S": "shift",
    "s": "super",
    "H": "hyper",
    "A": "alt",
}

NAMED_KEYS = {
    "RET": "return",
    "ESC": "escape",
    "SPC": "space",
    "TAB": "tab",
    "DEL": "backspace",
    "LFD": "linefeed",
}


def _normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    values = tuple(m.strip().lower() for m in modifiers if m.strip())
    return tuple(sorted(dict.fromkeys(values)))


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """Single normalized key press."""

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "modifiers", _normalize_modifiers(self.modifiers))

    @property
    def token(self) -> str:
        if self.modifiers:
            modifier = "+".join(self.modifiers)
            return f"{modifier}+{self.key}"
        return self.key

    @classmethod
    def parse(cls, chord: str) -> "KeyStroke":
        """Parse one chord such as ``C-x``, ``C-M-<f1>`` or ``RET``."""

        text = chord.strip()
        if not text:
            raise ValueError("chord cannot be empty")

        modifiers: list[str] = []
        while len(text) > 2 and text[1] == "-" and text[0] in MODIFIER_PREFIXES:
            modifiers.append(MODIFIER_PREFIXES[text[0]])
            text = text[2:]

        if text.startswith("<") and text.endswith(">") and len(text) > 2:
            key = text[1:-1].lower()
        else:
            key = NAMED_KEYS.get(text, text)

        if len(key) > 1 and "-" in key and key[1] == "-":
            raise ValueError(f"Unknown modifier in chord '{chord}'")
        return cls(key=key, modifiers=tuple(modifiers))


@dataclass(frozen=True, slots=True)
class KeySequence:
    """Immutable, non-empty collection of keystrokes."""

    strokes: tuple[KeyStroke, ...]

    def __post_init__(self) -> None:
        if not self.strokes:
            raise ValueError("KeySequence requires at least one stroke")

    @property
    def tokens(self) -> tuple[str, ...]:
        return tuple(stroke.token for stroke in self.strokes)

    @property
    def notation(self) -> str:
        return " ".join(self.tokens)

    @classmethod
    def parse(cls, notation: str) -> "KeySequence":
        """Parse space separated chords, e.g. ``"C-x 4 f"``."""

        chords = notation.split()
        if not chords:
            raise ValueError("key notation cannot be empty")
        return cls(strokes=tuple(KeyStroke.parse(chord) for chord in chords))


__all__ = [
    "KeyStroke",
    "KeySequence",
    "MODIFIER_PREFIXES",
    "NAMED_KEYS",
]
