from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

import pytest

from reaction.core.config import SessionConfig
from reaction.core.machine import SessionStateMachine, StateListener
from reaction.core.state import GameState, StateChange
from reaction.storage.score_store import FileScoreStore
from reaction.timing.clock import Clock
from reaction.timing.scheduler import TickScheduler


@dataclass
class FakeClock(Clock):
    t: float = 0.0

    def now_ms(self) -> float:
        return self.t

    def advance(self, dt_ms: float) -> None:
        self.t += float(dt_ms)


class FixedRandom:
    """Stands in for random.Random; random() always returns `value`."""

    def __init__(self, value: float = 0.5):
        self.value = value

    def random(self) -> float:
        return self.value


@dataclass
class RecordingListener(StateListener):
    changes: List[StateChange] = field(default_factory=list)

    def on_state_entered(self, change: StateChange) -> None:
        self.changes.append(change)

    @property
    def states(self) -> List[GameState]:
        return [c.state for c in self.changes]


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def scheduler(clock):
    return TickScheduler(clock)


@pytest.fixture()
def store(tmp_path):
    return FileScoreStore(tmp_path, "reactionGameBestScore")


@pytest.fixture()
def rng():
    # 1000 + 0.5 * 2000 -> trigger at 2000ms
    return FixedRandom(0.5)


@pytest.fixture()
def listener():
    return RecordingListener()


@pytest.fixture()
def machine(clock, scheduler, store, rng, listener):
    m = SessionStateMachine(clock, scheduler, store, SessionConfig(), rng=rng)
    m.subscribe(listener)
    return m


@pytest.fixture()
def step(clock, scheduler):
    """Move time forward and let the scheduler run, as one host-loop frame would."""

    def _step(dt_ms: float) -> None:
        clock.advance(dt_ms)
        scheduler.run_due()

    return _step
