from __future__ import annotations

import pygame
import pytest

from reaction.api.config import EngineConfig
from reaction.api.ports import CommandPort
from reaction.app.const import GAMES_DIR
from reaction.app.context import Context
from reaction.app.loader import load_game_manifest, load_game_module, resolve_game_root
from reaction.app.loop import quit_allowed
from reaction.core.state import GameState


@pytest.fixture()
def posted(monkeypatch):
    events = []
    monkeypatch.setattr(pygame.event, "post", events.append)
    return events


@pytest.fixture()
def game(machine, clock, tmp_path):
    root = resolve_game_root(GAMES_DIR, "reaction-time")
    g = load_game_module(root).get_game()
    ctx = Context(
        screen=None,
        clock=None,
        cfg=EngineConfig((800, 600), tmp_path),
        commands=CommandPort(machine),
        timer_clock=clock,
        screen_size=(800, 600),
    )
    g.on_load(ctx, load_game_manifest(root))
    machine.subscribe(g)
    return g


def _key(key):
    return pygame.event.Event(pygame.KEYDOWN, key=key)


def _click(x, y):
    return pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(x, y))


def test_quit_goes_straight_through_outside_a_measurement(machine, game) -> None:
    assert quit_allowed(machine, game)
    assert not game._confirming


def test_first_quit_while_waiting_shows_prompt(machine, game) -> None:
    machine.start()

    assert not quit_allowed(machine, game)
    assert game._confirming
    assert machine.state is GameState.Waiting


def test_second_quit_request_leaves(machine, game) -> None:
    machine.start()
    quit_allowed(machine, game)

    assert quit_allowed(machine, game)


def test_y_posts_quit_and_confirms(machine, game, posted) -> None:
    machine.start()
    quit_allowed(machine, game)

    game.on_event(_key(pygame.K_y))

    assert [e.type for e in posted] == [pygame.QUIT]
    assert quit_allowed(machine, game)


@pytest.mark.parametrize("event", [_key(pygame.K_SPACE), _click(20, 20)])
def test_other_input_dismisses_prompt_without_a_click(machine, game, posted, event) -> None:
    machine.start()
    quit_allowed(machine, game)

    game.on_event(event)

    assert not game._confirming
    assert machine.state is GameState.Waiting
    assert posted == []
    # dismissed, so the next close request asks again
    assert not quit_allowed(machine, game)


def test_clicks_reach_the_machine_once_prompt_is_gone(machine, game, step) -> None:
    machine.start()
    step(2000)
    quit_allowed(machine, game)

    game.on_event(_click(20, 20))
    assert machine.state is GameState.Ready

    step(150)
    game.on_event(_click(20, 20))
    assert machine.state is GameState.Result
    assert machine.outcome.reaction_time_ms == 150


def test_prompt_survives_trigger_but_clears_on_result(machine, game, step) -> None:
    machine.start()
    quit_allowed(machine, game)

    step(2000)
    assert machine.state is GameState.Ready
    assert game._confirming

    machine.surface_clicked()
    assert machine.state is GameState.Result
    assert not game._confirming


@pytest.mark.parametrize("leave", ["reset", "premature"])
def test_prompt_clears_on_unguarded_states(machine, game, step, leave) -> None:
    machine.start()
    quit_allowed(machine, game)

    if leave == "reset":
        machine.reset()
        assert machine.state is GameState.Start
    else:
        machine.surface_clicked()
        assert machine.state is GameState.Error
    assert not game._confirming


def test_start_button_and_surface_are_routed_separately(machine, game) -> None:
    game.on_event(_click(20, 20))
    assert machine.state is GameState.Start

    game.on_event(_click(*game.start_rect.center))
    assert machine.state is GameState.Waiting


def test_error_countdown_follows_the_timer_clock(machine, game, step) -> None:
    machine.start()
    step(500)
    machine.surface_clicked()
    assert machine.state is GameState.Error
    assert game._reset_countdown_s() == 3

    step(1)
    assert game._reset_countdown_s() == 3

    step(2000)
    assert game._reset_countdown_s() == 1

    step(999)
    assert machine.state is GameState.Start


def test_countdown_is_zero_without_a_pending_reset(machine, game, step) -> None:
    machine.start()
    step(500)
    machine.surface_clicked()
    game.change.session.pending_handle = None

    assert game._reset_countdown_s() == 0
