from __future__ import annotations
import math
import pygame
from typing import Optional

from reaction.api import Game
from reaction.app.context import Context
from reaction.core.state import DISCARD_GUARDED_STATES, GameState, StateChange
from reaction.input.pointer import PointerRouter
from reaction.render.shapes import draw_button, draw_lines_centered, draw_text, draw_text_centered


# Screen colours per state
START_BG = (24, 38, 64)
WAITING_BG = (190, 45, 45)
READY_BG = (40, 170, 80)
RESULT_BG = (24, 38, 64)
ERROR_BG = (215, 120, 30)

HUD_COLOR = (240, 240, 240)
TEXT_DIM = (210, 210, 210)
RECORD_COLOR = (255, 220, 60)
PANEL_COLOR = (14, 22, 38)
BUTTON_FILL = (40, 60, 96)
OVERLAY_ALPHA = 190

# Layout
BUTTON_W, BUTTON_H = 320, 80
RESULT_PANEL_W, RESULT_PANEL_H = 560, 360
HUD_FONT_SIZE = 28
STATUS_FONT_SIZE = 96
BODY_FONT_SIZE = 34
TIME_FONT_SIZE = 120

BACKGROUNDS = {
    GameState.Start: START_BG,
    GameState.Waiting: WAITING_BG,
    GameState.Ready: READY_BG,
    GameState.Result: RESULT_BG,
    GameState.Error: ERROR_BG,
}


class ReactionTest(Game):
    def on_load(self, ctx: Context, manifest):
        self.ctx = ctx
        self.manifest = manifest
        self.commands = ctx.commands
        self.w, self.h = ctx.screen_size

        cx, cy = self.w // 2, self.h // 2
        self.start_rect = pygame.Rect(0, 0, BUTTON_W, BUTTON_H)
        self.start_rect.center = (cx, cy + 60)
        self.panel_rect = pygame.Rect(0, 0, RESULT_PANEL_W, RESULT_PANEL_H)
        self.panel_rect.center = (cx, cy)
        self.play_again_rect = pygame.Rect(0, 0, BUTTON_W, BUTTON_H)
        self.play_again_rect.midbottom = (cx, self.panel_rect.bottom - 24)

        self.router = PointerRouter(ctx.screen_size, mirror=ctx.cfg.mirror)
        self.router.set_surface_handler(self.commands.on_surface_activated)

        self.change: Optional[StateChange] = None
        self._confirming = False
        self._quit_confirmed = False

    # ---------- notifications ----------
    def on_state_entered(self, change: StateChange) -> None:
        self.change = change
        if change.state not in DISCARD_GUARDED_STATES:
            self._confirming = False

        if change.state is GameState.Start:
            self.router.set_controls(("start", self.start_rect, self.commands.on_start_requested))
        elif change.state is GameState.Result:
            self.router.set_controls(("play_again", self.play_again_rect, self.commands.on_reset_requested))
        else:
            self.router.set_controls()

    # ---------- input ----------
    def on_event(self, event: pygame.event.Event) -> None:
        if self._confirming:
            if event.type == pygame.KEYDOWN and event.key == pygame.K_y:
                self._quit_confirmed = True
                pygame.event.post(pygame.event.Event(pygame.QUIT))
            elif event.type in (pygame.KEYDOWN, pygame.MOUSEBUTTONDOWN, pygame.FINGERDOWN):
                self._confirming = False
            return
        self.router.handle_event(event)

    def confirm_discard(self) -> bool:
        # second close request (or an explicit "y") goes through
        if self._quit_confirmed or self._confirming:
            return True
        self._confirming = True
        return False

    # ---------- draw ----------
    def on_draw(self, surface: pygame.Surface) -> None:
        if self.change is None:
            return
        state = self.change.state
        surface.fill(BACKGROUNDS[state])

        if state is GameState.Start:
            self._draw_start(surface)
        elif state is GameState.Waiting:
            self._draw_status(surface, "Wait for green...", "Click as soon as the screen turns green")
        elif state is GameState.Ready:
            self._draw_status(surface, "CLICK!", "Click anywhere as fast as you can")
        elif state is GameState.Result:
            self._draw_result(surface)
        elif state is GameState.Error:
            self._draw_error(surface)

        self._draw_best(surface)
        if self._confirming:
            self._draw_confirm(surface)

    def _draw_best(self, surface):
        best = self.change.best_score_ms
        label = f"Best: {best} ms" if best is not None else "Best: --"
        draw_text(surface, label, (20, 20), HUD_COLOR, size=HUD_FONT_SIZE)

    def _draw_start(self, surface):
        cx, cy = self.w // 2, self.h // 2
        draw_text_centered(surface, "Reaction Test", (cx, cy - 120), HUD_COLOR, size=STATUS_FONT_SIZE)
        draw_text_centered(surface, "Press start, wait for green, then click anywhere",
                           (cx, cy - 40), TEXT_DIM, size=BODY_FONT_SIZE)
        draw_button(surface, self.start_rect, "Start", HUD_COLOR, fill=BUTTON_FILL)

    def _draw_status(self, surface, status: str, hint: str):
        cx, cy = self.w // 2, self.h // 2
        draw_text_centered(surface, status, (cx, cy - 30), HUD_COLOR, size=STATUS_FONT_SIZE)
        draw_text_centered(surface, hint, (cx, cy + 50), TEXT_DIM, size=BODY_FONT_SIZE)

    def _draw_result(self, surface):
        outcome = self.change.outcome
        pygame.draw.rect(surface, PANEL_COLOR, self.panel_rect, border_radius=18)
        if outcome is not None:
            top = self.panel_rect.top
            draw_text_centered(surface, f"{outcome.reaction_time_ms} ms",
                               (self.panel_rect.centerx, top + 80), HUD_COLOR, size=TIME_FONT_SIZE)
            color = RECORD_COLOR if outcome.is_new_record else TEXT_DIM
            draw_lines_centered(surface, outcome.message,
                                (self.panel_rect.centerx, top + 180), color, size=BODY_FONT_SIZE)
        draw_button(surface, self.play_again_rect, "Play again", HUD_COLOR, fill=BUTTON_FILL)

    def _draw_error(self, surface):
        remaining = self._reset_countdown_s()
        self._draw_status(surface, "Too soon!", "Wait for the screen to turn green before clicking")
        draw_text_centered(surface, f"Restarting in {remaining}s",
                           (self.w // 2, self.h // 2 + 110), TEXT_DIM, size=HUD_FONT_SIZE)

    def _reset_countdown_s(self) -> int:
        handle = self.change.session.pending_handle
        if handle is None:
            return 0
        left_ms = handle.due_ms - self.ctx.timer_clock.now_ms()
        return max(0, math.ceil(left_ms / 1000))

    def _draw_confirm(self, surface):
        overlay = pygame.Surface((self.w, self.h), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, OVERLAY_ALPHA))
        surface.blit(overlay, (0, 0))
        draw_lines_centered(surface, "A measurement is running.\nLeave anyway?  Y / Esc to leave, any other key to stay",
                            (self.w // 2, self.h // 2), HUD_COLOR, size=BODY_FONT_SIZE)

    def on_unload(self) -> None:
        self.router.set_controls()


def get_game():
    return ReactionTest()
