from .state import GameState, Rating, Session, Outcome, StateChange
from .config import SessionConfig
from .evaluator import evaluate, rate
from .machine import SessionStateMachine, StateListener

__all__ = [
    "GameState", "Rating", "Session", "Outcome", "StateChange",
    "SessionConfig", "evaluate", "rate",
    "SessionStateMachine", "StateListener",
]
