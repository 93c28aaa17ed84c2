from __future__ import annotations
from typing import List, Tuple

from reaction.core.state import Rating

# (exclusive upper bound in ms, rating); anything slower is RoomToImprove
RATING_BRACKETS: List[Tuple[int, Rating]] = [
    (200, Rating.UltraFast),
    (300, Rating.Great),
    (500, Rating.Good),
]

MESSAGES = {
    Rating.UltraFast: "ultra-fast reaction!",
    Rating.Great: "great reaction!",
    Rating.Good: "good job!",
    Rating.RoomToImprove: "still room to improve",
}

NEW_RECORD_NOTICE = "new record!"


def rate(reaction_time_ms: int) -> Rating:
    for upper, rating in RATING_BRACKETS:
        if reaction_time_ms < upper:
            return rating
    return Rating.RoomToImprove


def evaluate(reaction_time_ms: int, is_new_record: bool) -> str:
    """
    Message shown on the result panel. The record notice goes on its own line.
    """
    message = MESSAGES[rate(reaction_time_ms)]
    if is_new_record:
        message += "\n" + NEW_RECORD_NOTICE
    return message
