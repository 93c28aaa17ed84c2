from __future__ import annotations
import pygame
from typing import Callable, List, Optional, Tuple

_WHEEL_BUTTONS = (4, 5)

SURFACE = "surface"


class PointerRouter:
    """
    Turns raw pygame input into UI commands:
    - A click or tap inside a registered control's rect triggers that control.
    - Any other click or tap, and the space bar, is a surface activation.
    - Enter triggers the first registered control (keyboard fallback).
    - Respects --mirror by converting window coords -> logical coords.
    """

    def __init__(self, screen_size: Tuple[int, int], mirror: bool = False):
        self.screen_size = screen_size
        self.mirror = mirror
        self._controls: List[Tuple[str, pygame.Rect, Callable[[], None]]] = []
        self._on_surface: Optional[Callable[[], None]] = None

    def set_surface_handler(self, callback: Optional[Callable[[], None]]) -> None:
        self._on_surface = callback

    def set_controls(self, *controls: Tuple[str, pygame.Rect, Callable[[], None]]) -> None:
        """Replace the visible controls; call on every state change."""
        self._controls = list(controls)

    def control_names(self) -> List[str]:
        return [name for name, _, _ in self._controls]

    def _to_logical(self, x: float, y: float) -> Tuple[float, float]:
        if self.mirror:
            x = (self.screen_size[0] - 1) - x
        return float(x), float(y)

    def _activate_at(self, x: float, y: float) -> Optional[str]:
        pos = self._to_logical(x, y)
        for name, rect, callback in self._controls:
            if rect.collidepoint(int(pos[0]), int(pos[1])):
                callback()
                return name
        if self._on_surface is not None:
            self._on_surface()
            return SURFACE
        return None

    def handle_event(self, event: pygame.event.Event) -> Optional[str]:
        """
        Route one event. Returns the control name, SURFACE, or None when
        the event was not an activation.
        """
        if event.type == pygame.MOUSEBUTTONDOWN:
            # SDL mirrors touches as mouse events; FINGERDOWN already covers those
            if event.button in _WHEEL_BUTTONS or getattr(event, "touch", False):
                return None
            return self._activate_at(*event.pos)

        if event.type == pygame.FINGERDOWN:
            w, h = self.screen_size
            return self._activate_at(event.x * w, event.y * h)

        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_SPACE and self._on_surface is not None:
                self._on_surface()
                return SURFACE
            if event.key in (pygame.K_RETURN, pygame.K_KP_ENTER) and self._controls:
                name, _, callback = self._controls[0]
                callback()
                return name

        return None
