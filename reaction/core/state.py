from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from reaction.timing.scheduler import Handle


class GameState(Enum):
    Start = "start"
    Waiting = "waiting"
    Ready = "ready"
    Result = "result"
    Error = "error"


# closing the window in these states throws away a measurement in progress
DISCARD_GUARDED_STATES = (GameState.Waiting, GameState.Ready)


class Rating(Enum):
    UltraFast = "ultra-fast"
    Great = "great"
    Good = "good"
    RoomToImprove = "room to improve"


@dataclass
class Session:
    state: GameState = GameState.Start
    ready_entered_at: Optional[float] = None  # clock ms, set on entering Ready
    reaction_time_ms: Optional[int] = None
    pending_handle: Optional[Handle] = None


@dataclass(frozen=True)
class Outcome:
    reaction_time_ms: int
    rating: Rating
    message: str
    is_new_record: bool
    best_score_ms: int


@dataclass(frozen=True)
class StateChange:
    state: GameState
    previous: Optional[GameState]
    session: Session  # snapshot; mutating it does not affect the machine
    outcome: Optional[Outcome]
    best_score_ms: Optional[int]
