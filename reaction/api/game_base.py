from __future__ import annotations

from typing import TYPE_CHECKING

import pygame

if TYPE_CHECKING:
    from reaction.app.context import Context
from reaction.core.machine import StateListener
from reaction.core.state import StateChange


class Game(StateListener):
    """
    Base interface a UI surface implements.
    """

    def on_load(self, ctx: Context, manifest: dict) -> None:
        """Called once after the game module loads, before the first state notification."""
        ...

    def on_state_entered(self, change: StateChange) -> None:
        """Called on every state entry, and once with the current state on subscribe."""
        ...

    def on_update(self, dt_ms: float) -> None:
        """Called every frame; dt_ms is milliseconds elapsed."""
        ...

    def on_draw(self, surface: pygame.Surface) -> None:
        """Draw your game to the provided surface."""
        ...

    def on_event(self, event: pygame.event.Event) -> None:
        """Handle pygame events (mouse, touch, keyboard)."""
        ...

    def confirm_discard(self) -> bool:
        """
        Asked before the window closes while a measurement is running.
        Return False to keep the window open.
        """
        return True

    def on_unload(self) -> None:
        """Optional: cleanup when the game exits."""
        ...
