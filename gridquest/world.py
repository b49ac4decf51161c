"""World representation loaded from data files."""

import inspect
import os
import sys
from pathlib import Path
from typing import Any

import yaml

from .world_model import Item, Location, Map, Tile, build_event, build_item


def _valid_coords(value: Any) -> bool:
    return isinstance(value, (list, tuple)) and len(value) == 2 and all(isinstance(c, int) for c in value)


def _build_map(map_id: str, cfg: dict[str, Any]) -> Map:
    """Turn the legend/rows/events layout of a map entry into a ``Map``."""
    legend: dict[str, dict[str, Any]] = cfg.get("legend", {}) or {}
    tiles: list[list[Tile]] = []
    for row_idx, row in enumerate(cfg.get("rows", []) or []):
        tile_row: list[Tile] = []
        for col_idx, symbol in enumerate(row):
            template = legend.get(symbol)
            if template is None:
                raise ValueError(f"Unknown tile symbol {symbol!r} in map '{map_id}' at ({row_idx}, {col_idx})")
            tile_row.append(Tile(**template))
        tiles.append(tile_row)
    game_map = Map(id=map_id, name=cfg.get("name", map_id), tiles=tiles)
    for event_cfg in cfg.get("events", []) or []:
        event_cfg = dict(event_cfg)
        at = event_cfg.pop("at", None)
        if not isinstance(at, (list, tuple)) or len(at) != 2:
            raise ValueError(f"Event in map '{map_id}' needs 'at: [row, col]'")
        row, col = int(at[0]), int(at[1])
        if not game_map.in_bounds(row, col):
            raise ValueError(f"Event in map '{map_id}' placed out of bounds at ({row}, {col})")
        game_map.tiles[row][col].events.append(build_event(event_cfg))
    return game_map


class World:
    def __init__(self, data: dict[str, Any], debug: bool = False):
        self._debug_enabled = debug
        if not isinstance(data, dict) or "start" not in data:
            raise ValueError("World data needs a 'start' entry")
        raw_items = data.get("items", {}) or {}
        raw_maps = data.get("maps", {}) or {}
        self.items: dict[str, Item] = {
            item_id: item if isinstance(item, Item) else build_item(item_id, item) for item_id, item in raw_items.items()
        }
        self.maps: dict[str, Map] = {
            map_id: game_map if isinstance(game_map, Map) else _build_map(map_id, game_map)
            for map_id, game_map in raw_maps.items()
        }
        start = data["start"]
        coords = start.get("coords") if isinstance(start, dict) else None
        if not isinstance(coords, (list, tuple)) or len(coords) != 2:
            raise ValueError("World 'start' needs 'map' and 'coords: [row, col]'")
        self.start_map: str = str(start.get("map", ""))
        self.start_coords: tuple[int, int] = (int(coords[0]), int(coords[1]))
        self.player_config: dict[str, Any] = data.get("player", {}) or {}
        self.intro: str = data.get("intro", "") or ""
        self._base_seen = self._seen_tiles()
        self._base_visibility = self._event_visibility()

    def debug(self, message: str) -> None:
        if self._debug_enabled:
            frame = inspect.stack()[1]
            filename = os.path.basename(frame.filename)
            lineno = frame.lineno
            print(f"{filename}:{lineno} -- {message}", file=sys.stderr)

    @classmethod
    def from_file(cls, path: str | Path, debug: bool = False) -> "World":
        with open(path, encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
        return cls(data, debug=debug)

    def start_location(self) -> Location:
        return Location(self.maps[self.start_map], self.start_coords)

    def _seen_tiles(self) -> set[tuple[str, int, int]]:
        seen: set[tuple[str, int, int]] = set()
        for map_id, game_map in self.maps.items():
            for row_idx, row in enumerate(game_map.tiles):
                for col_idx, tile in enumerate(row):
                    if tile.seen:
                        seen.add((map_id, row_idx, col_idx))
        return seen

    def _event_visibility(self) -> dict[tuple[str, int, int, int], bool]:
        visibility: dict[tuple[str, int, int, int], bool] = {}
        for map_id, game_map in self.maps.items():
            for row_idx, row in enumerate(game_map.tiles):
                for col_idx, tile in enumerate(row):
                    for idx, event in enumerate(tile.events):
                        visibility[(map_id, row_idx, col_idx, idx)] = event.visible
        return visibility

    def to_state(self) -> dict[str, Any]:
        """Return the minimal state describing differences from the base world."""
        state: dict[str, Any] = {}
        seen = self._seen_tiles()
        seen_diff: dict[str, list[list[int]]] = {}
        for map_id, row, col in sorted(seen - self._base_seen):
            seen_diff.setdefault(map_id, []).append([row, col])
        if seen_diff:
            state["seen"] = seen_diff
        events_diff: list[dict[str, Any]] = []
        for key, visible in sorted(self._event_visibility().items()):
            if self._base_visibility.get(key) != visible:
                map_id, row, col, idx = key
                events_diff.append({"map": map_id, "at": [row, col], "index": idx, "visible": visible})
        if events_diff:
            state["events"] = events_diff
        return state

    def load_state(self, data: dict[str, Any] | None) -> None:
        data = data or {}
        for map_id, coords in (data.get("seen", {}) or {}).items():
            game_map = self.maps.get(map_id)
            if game_map is None:
                continue
            for pair in coords or []:
                if _valid_coords(pair) and game_map.in_bounds(*pair):
                    row, col = pair
                    game_map.tiles[row][col].seen = True
        for entry in data.get("events", []) or []:
            if not isinstance(entry, dict):
                continue
            game_map = self.maps.get(entry.get("map"))
            at = entry.get("at")
            if game_map is None or not _valid_coords(at) or not game_map.in_bounds(*at):
                continue
            row, col = at
            events = game_map.tiles[row][col].events
            idx = entry.get("index")
            if isinstance(idx, int) and 0 <= idx < len(events):
                events[idx].visible = bool(entry.get("visible"))
                self.debug(f"event {game_map.id} ({row}, {col}) #{idx} visible {events[idx].visible}")


__all__ = ["World"]
