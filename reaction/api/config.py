from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple


@dataclass
class EngineConfig:
    screen_size: Tuple[int, int]
    store_dir: Path
    ephemeral: bool = False   # keep the best score in memory only
    mirror: bool = False
