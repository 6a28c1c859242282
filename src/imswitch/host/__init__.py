"""Host editor abstraction and the in-memory reference host."""

from .base import Advice, EditorHost, Hook
from .memory import (
    MINIBUFFER_EXIT_HOOK,
    MINIBUFFER_SETUP_HOOK,
    InMemoryHost,
    TimerHandle,
)

__all__ = [
    "Advice",
    "EditorHost",
    "Hook",
    "InMemoryHost",
    "MINIBUFFER_EXIT_HOOK",
    "MINIBUFFER_SETUP_HOOK",
    "TimerHandle",
]
