from __future__ import annotations
from dataclasses import dataclass, fields
from typing import Any, Dict

WAIT_MIN_MS = 1000
WAIT_MAX_MS = 3000         # exclusive
ERROR_RESET_MS = 3000
BEST_SCORE_KEY = "reactionGameBestScore"


@dataclass(frozen=True)
class SessionConfig:
    wait_min_ms: int = WAIT_MIN_MS
    wait_max_ms: int = WAIT_MAX_MS
    error_reset_ms: int = ERROR_RESET_MS
    best_score_key: str = BEST_SCORE_KEY

    def __post_init__(self):
        if not 0 < self.wait_min_ms < self.wait_max_ms:
            raise ValueError(
                f"wait range must satisfy 0 < min < max, got [{self.wait_min_ms}, {self.wait_max_ms})")
        if self.error_reset_ms <= 0:
            raise ValueError(f"error_reset_ms must be positive, got {self.error_reset_ms}")
        if not self.best_score_key:
            raise ValueError("best_score_key must not be empty")

    @classmethod
    def from_manifest(cls, manifest: Dict[str, Any]) -> "SessionConfig":
        """
        Build from the `options:` block of a game manifest.
        Unknown option keys are left for the game itself.
        """
        options = (manifest or {}).get("options") or {}
        if not isinstance(options, dict):
            raise ValueError(f"manifest options must be a mapping, got {type(options).__name__}")
        kwargs = {}
        for f in fields(cls):
            if f.name not in options:
                continue
            value = options[f.name]
            kwargs[f.name] = str(value) if f.name == "best_score_key" else int(value)
        return cls(**kwargs)
