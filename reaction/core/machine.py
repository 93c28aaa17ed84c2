"""
Session state machine for a single reaction-time measurement.

    Start --start--> Waiting --trigger--> Ready --click--> Result --reset--> Start
                        |
                        +--click--> Error --(auto reset / reset)--> Start

All events (commands from the UI and scheduler callbacks) arrive on the host
loop thread one at a time, so no locking is needed. Timers are cooperative:
the machine never waits, it only schedules callbacks and cancels them.
"""
from __future__ import annotations
import dataclasses
import logging
import random
from functools import partial
from typing import List, Optional

from reaction.core.config import SessionConfig
from reaction.core.evaluator import evaluate, rate
from reaction.core.state import (
    DISCARD_GUARDED_STATES,
    GameState,
    Outcome,
    Session,
    StateChange,
)
from reaction.storage.score_store import ScoreStore
from reaction.timing.clock import Clock
from reaction.timing.scheduler import TickScheduler

logger = logging.getLogger(__name__)


class StateListener:
    """Receives a notification every time the machine enters a state."""

    def on_state_entered(self, change: StateChange) -> None:
        ...


class SessionStateMachine:
    def __init__(
        self,
        clock: Clock,
        scheduler: TickScheduler,
        store: ScoreStore,
        config: Optional[SessionConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        self.clock = clock
        self.scheduler = scheduler
        self.store = store
        self.config = config or SessionConfig()
        self.rng = rng or random.Random()

        self.session = Session()
        self.outcome: Optional[Outcome] = None
        self._generation = 0  # bumped per session; stale callbacks compare against it
        self._listeners: List[StateListener] = []

    # ---------- queries ----------
    @property
    def state(self) -> GameState:
        return self.session.state

    def best_score(self) -> Optional[int]:
        return self.store.get()

    def needs_discard_confirmation(self) -> bool:
        return self.session.state in DISCARD_GUARDED_STATES

    def subscribe(self, listener: StateListener) -> None:
        """Register a listener and replay the current state to it."""
        self._listeners.append(listener)
        listener.on_state_entered(self._snapshot(previous=None))

    # ---------- commands ----------
    def start(self) -> None:
        if self.session.state is not GameState.Start:
            logger.debug(f"start ignored in {self.session.state.value}")
            return

        self._cancel_pending()
        self._generation += 1
        delay_ms = self._draw_delay_ms()
        logger.info(f"Session {self._generation}: trigger in {delay_ms:.0f}ms")

        handle = self.scheduler.schedule(
            delay_ms, partial(self._on_trigger, self._generation), label="trigger")
        self.session = Session(state=self.session.state, pending_handle=handle)
        self.outcome = None
        self._enter(GameState.Waiting)

    def reset(self) -> None:
        self._cancel_pending()
        self._generation += 1
        self.outcome = None
        previous = self.session.state
        self.session = Session(state=previous)
        self._enter(GameState.Start)

    def surface_clicked(self) -> None:
        state = self.session.state
        if state is GameState.Waiting:
            self._premature_response()
        elif state is GameState.Ready:
            self._record_response()
        else:
            logger.debug(f"surface click ignored in {state.value}")

    # ---------- transitions ----------
    def _on_trigger(self, generation: int) -> None:
        if generation != self._generation or self.session.state is not GameState.Waiting:
            logger.debug(f"stale trigger for session {generation} ignored")
            return
        self.session.pending_handle = None
        self.session.ready_entered_at = self.clock.now_ms()
        self._enter(GameState.Ready)

    def _premature_response(self) -> None:
        logger.info("Premature response; the trigger had not fired yet")
        self._cancel_pending()
        self.session.pending_handle = self.scheduler.schedule(
            self.config.error_reset_ms,
            partial(self._on_auto_reset, self._generation),
            label="error auto-reset",
        )
        self._enter(GameState.Error)

    def _on_auto_reset(self, generation: int) -> None:
        if generation != self._generation or self.session.state is not GameState.Error:
            logger.debug(f"stale auto-reset for session {generation} ignored")
            return
        self.session.pending_handle = None
        self.reset()

    def _record_response(self) -> None:
        started = self.session.ready_entered_at
        if started is None:
            logger.error("Response in ready state without a trigger timestamp; dropping it")
            return

        reaction_ms = max(0, int(round(self.clock.now_ms() - started)))
        best = self.store.get()
        is_new_record = best is None or reaction_ms < best
        if is_new_record:
            self.store.set(reaction_ms)
            best = reaction_ms
            logger.info(f"New best score: {reaction_ms}ms")

        self.session.reaction_time_ms = reaction_ms
        self.outcome = Outcome(
            reaction_time_ms=reaction_ms,
            rating=rate(reaction_ms),
            message=evaluate(reaction_ms, is_new_record),
            is_new_record=is_new_record,
            best_score_ms=best,
        )
        logger.info(f"Reaction time: {reaction_ms}ms")
        self._enter(GameState.Result)

    # ---------- helpers ----------
    def _draw_delay_ms(self) -> float:
        lo, hi = self.config.wait_min_ms, self.config.wait_max_ms
        return lo + self.rng.random() * (hi - lo)

    def _cancel_pending(self) -> None:
        if self.session.pending_handle is not None:
            self.scheduler.cancel(self.session.pending_handle)
            self.session.pending_handle = None

    def _enter(self, new_state: GameState) -> None:
        previous = self.session.state
        self.session.state = new_state
        if new_state not in (GameState.Ready, GameState.Result):
            self.session.ready_entered_at = None
        logger.info(f"State: {previous.value} -> {new_state.value}")

        change = self._snapshot(previous)
        for listener in list(self._listeners):
            listener.on_state_entered(change)

    def _snapshot(self, previous: Optional[GameState]) -> StateChange:
        return StateChange(
            state=self.session.state,
            previous=previous,
            session=dataclasses.replace(self.session),
            outcome=self.outcome,
            best_score_ms=self.store.get(),
        )
