from pathlib import Path

# -----------------------------
# Window defaults (override from the launcher)
# -----------------------------

SCREEN_W, SCREEN_H = 1280, 720     # PyGame window size
FPS = 120                          # frame cap; input and timers are handled once per frame
BACKGROUND = (12, 14, 18)
FRAME_COLOR = (220, 220, 220)

DEFAULT_GAME = "reaction-time"

# Best scores live next to the code, like other runtime caches
REPO_ROOT = Path(__file__).resolve().parents[2]
GAMES_DIR = REPO_ROOT / "games"
SCORE_CACHE_DIR = REPO_ROOT / "runtime" / "cache" / "scores"
