"""Save game state to disk."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

if TYPE_CHECKING:  # pragma: no cover - used for type checking only
    from .player import Player


def save_game(player: Player, path: str | Path) -> None:
    """Write the player and the world changes to ``path`` as YAML."""

    data = {"player": player.to_state(), "world": player.world.to_state()}
    with open(path, "w", encoding="utf-8") as fh:
        yaml.safe_dump(data, fh, allow_unicode=True)
    player.world.debug(f"saved {path}")


def load_game(path: str | Path) -> dict[str, Any]:
    """Return previously saved data, or an empty dict if there is none."""

    path = Path(path)
    if not path.exists():
        return {}
    with open(path, encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, dict):
        raise yaml.YAMLError(f"Save file '{path.name}' must contain a mapping")
    return data


class SaveManager:
    """Handle persisting the game state.

    Parameters
    ----------
    save_path:
        File the game is saved to and loaded from.
    """

    def __init__(self, save_path: Path):
        self.save_path = Path(save_path)

    def load(self) -> dict[str, Any]:
        return load_game(self.save_path)

    def save(self, player: Player) -> None:
        save_game(player, self.save_path)


__all__ = ["SaveManager", "save_game", "load_game"]
