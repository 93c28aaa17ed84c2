from __future__ import annotations
from dataclasses import dataclass
import pygame
from typing import Tuple
from reaction.api.config import EngineConfig
from reaction.api.ports import CommandPort
from reaction.timing.clock import Clock


@dataclass
class Context:
    screen: pygame.Surface
    clock: pygame.time.Clock
    cfg: EngineConfig
    commands: CommandPort
    timer_clock: Clock  # the clock session timers run on
    screen_size: Tuple[int, int]
