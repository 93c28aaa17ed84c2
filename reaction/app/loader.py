from __future__ import annotations
import importlib.util
import logging
from pathlib import Path
import yaml
from typing import Dict, Any

logger = logging.getLogger(__name__)


def resolve_game_root(games_dir: Path, game_id: str) -> Path:
    game_root = games_dir / game_id
    if not game_root.is_dir():
        available = sorted(p.name for p in games_dir.iterdir()
                           if p.is_dir() and not p.name.startswith("_")) if games_dir.is_dir() else []
        raise FileNotFoundError(
            f"No game '{game_id}' in {games_dir} (available: {', '.join(available) or 'none'})")
    return game_root


def load_game_manifest(game_root: Path) -> Dict[str, Any]:
    manifest = game_root / "manifest.yaml"
    if not manifest.exists():
        raise FileNotFoundError(f"Missing manifest.yaml in {game_root}")
    with open(manifest, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{manifest} must contain a mapping at top level")
    if not isinstance(data.get("options", {}), dict):
        raise ValueError(f"{manifest}: 'options' must be a mapping")
    data.setdefault("name", game_root.name)
    data.setdefault("options", {})
    logger.debug(f"Loaded manifest for {data['name']}: {data['options']}")
    return data


def load_game_module(game_root: Path):
    """
    Loads games/<id>/main.py module and returns the module object.
    The file must define a get_game() -> Game factory.
    """
    main_py = game_root / "main.py"
    if not main_py.exists():
        raise FileNotFoundError(f"Missing main.py in {game_root}")
    module_name = f"games.{game_root.name.replace('-', '_')}.main"
    spec = importlib.util.spec_from_file_location(module_name, main_py)
    assert spec and spec.loader
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)  # type: ignore[attr-defined]
    if not hasattr(module, "get_game"):
        raise AttributeError(f"{main_py} must define get_game()")
    return module
