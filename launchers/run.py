import argparse
import logging
import sys
from pathlib import Path
import os
os.environ['PYGAME_HIDE_SUPPORT_PROMPT'] = "hide"

# Ensure repo root is on sys.path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from reaction.api.config import EngineConfig
from reaction.app.const import DEFAULT_GAME, SCORE_CACHE_DIR, SCREEN_H, SCREEN_W
from reaction.app.loop import run_game


def parse_screen(value: str) -> tuple[int, int]:
    try:
        w, h = map(int, value.lower().split("x"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected WxH, got {value!r}")
    if w <= 0 or h <= 0:
        raise argparse.ArgumentTypeError(f"screen size must be positive, got {value!r}")
    return w, h


def main(argv=None):
    parser = argparse.ArgumentParser(description="Reaction Test Launcher")
    parser.add_argument("--game", default=DEFAULT_GAME, help="Game folder name under games/")
    parser.add_argument("--screen", type=parse_screen, default=(SCREEN_W, SCREEN_H),
                        help="Screen size WxH, e.g. 1280x720")
    parser.add_argument("--mirror", action="store_true", help="Mirror the game window horizontally")
    parser.add_argument("--store-dir", type=Path, default=SCORE_CACHE_DIR,
                        help="Directory holding the persisted best score")
    parser.add_argument("--ephemeral", action="store_true", help="Do not persist the best score")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Console log level")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    cfg = EngineConfig(
        screen_size=args.screen,
        store_dir=args.store_dir,
        ephemeral=args.ephemeral,
        mirror=args.mirror,
    )
    try:
        run_game(game_id=args.game, cfg=cfg)
    except (FileNotFoundError, AttributeError, ValueError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
