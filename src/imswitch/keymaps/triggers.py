"""Ordered set of key sequences that suppress the input method."""

from __future__ import annotations

from typing import Iterator, Sequence

from imswitch.runtime.telemetry import span

from .models import KeySequence


class TriggerKeySet:
    """Append-only collection of trigger sequences.

    Duplicates are kept; matching is exact on the token tuple, so a sequence
    added twice behaves exactly like one added once.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._sequences: list[KeySequence] = []
        self._logger_name = logger_name

    def add(self, sequence: KeySequence | str) -> KeySequence:
        if isinstance(sequence, str):
            sequence = KeySequence.parse(sequence)
        with span(
            "triggers::add",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"sequence": sequence.notation},
        ):
            self._sequences.append(sequence)
            return sequence

    def matches(self, tokens: Sequence[str]) -> bool:
        candidate = tuple(tokens)
        if not candidate:
            return False
        return any(sequence.tokens == candidate for sequence in self._sequences)

    def __iter__(self) -> Iterator[KeySequence]:
        return iter(tuple(self._sequences))

    def __len__(self) -> int:
        return len(self._sequences)


__all__ = ["TriggerKeySet"]
