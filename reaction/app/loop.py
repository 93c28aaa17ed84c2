from __future__ import annotations
import logging
import pygame

from reaction.api.config import EngineConfig
from reaction.api.ports import CommandPort
from reaction.app.const import BACKGROUND, FPS, FRAME_COLOR, GAMES_DIR
from reaction.app.context import Context
from reaction.app.loader import load_game_manifest, load_game_module, resolve_game_root
from reaction.core.config import SessionConfig
from reaction.core.machine import SessionStateMachine
from reaction.storage.score_store import FileScoreStore, MemoryScoreStore, ScoreStore
from reaction.timing.clock import MonotonicClock
from reaction.timing.scheduler import TickScheduler

logger = logging.getLogger(__name__)


def build_score_store(cfg: EngineConfig, key: str) -> ScoreStore:
    if cfg.ephemeral:
        logger.info("Best score kept in memory only")
        return MemoryScoreStore()
    return FileScoreStore(cfg.store_dir, key)


def _is_quit_request(event: pygame.event.Event) -> bool:
    return event.type == pygame.QUIT or (
        event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE)


def quit_allowed(machine: SessionStateMachine, game) -> bool:
    """Close requests go through unless a measurement is running and the game refuses."""
    return not machine.needs_discard_confirmation() or game.confirm_discard()


def run_game(game_id: str, cfg: EngineConfig) -> None:
    # load and validate everything before opening a window
    game_root = resolve_game_root(GAMES_DIR, game_id)
    manifest = load_game_manifest(game_root)
    session_cfg = SessionConfig.from_manifest(manifest)
    module = load_game_module(game_root)
    game = module.get_game()

    store = build_score_store(cfg, session_cfg.best_score_key)
    timer_clock = MonotonicClock()
    scheduler = TickScheduler(timer_clock)
    machine = SessionStateMachine(timer_clock, scheduler, store, session_cfg)

    pygame.init()
    pygame.display.set_caption(f"Reaction Test – {manifest['name']}")
    screen = pygame.display.set_mode(cfg.screen_size)
    frame_clock = pygame.time.Clock()

    # Render target: draw to off-screen if mirroring, otherwise draw directly to screen
    render_surface = screen if not cfg.mirror else pygame.Surface(
        cfg.screen_size).convert()

    ctx = Context(
        screen=render_surface,
        clock=frame_clock,
        cfg=cfg,
        commands=CommandPort(machine),
        timer_clock=timer_clock,
        screen_size=cfg.screen_size,
    )

    game.on_load(ctx, manifest)
    machine.subscribe(game)
    logger.info(f"Loaded {manifest['name']} (best score: {store.get()})")

    running = True
    try:
        while running:
            dt = frame_clock.tick(FPS)

            # input first, in arrival order; a click handled here beats a trigger due this frame
            for event in pygame.event.get():
                if _is_quit_request(event):
                    if not quit_allowed(machine, game):
                        logger.debug("Quit deferred until the player confirms")
                        continue
                    running = False
                    break
                game.on_event(event)

            if not running:
                break

            scheduler.run_due()

            # ---- draw to render_surface ----
            render_surface.fill(BACKGROUND)
            game.on_update(dt)
            game.on_draw(render_surface)
            pygame.draw.rect(render_surface, FRAME_COLOR,
                             (8, 8, cfg.screen_size[0] - 16, cfg.screen_size[1] - 16), 1)

            # ---- present to window ----
            if cfg.mirror:
                flipped = pygame.transform.flip(render_surface, True, False)
                screen.blit(flipped, (0, 0))

            pygame.display.flip()

    finally:
        scheduler.cancel_all()
        game.on_unload()
        pygame.quit()
