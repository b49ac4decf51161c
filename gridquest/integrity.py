"""Integrity checks for world data and save files."""

from __future__ import annotations

from typing import Any

from . import world
from .world_model import Chest, EquipSlot, Equippable


def validate_world_structure(w: world.World) -> list[str]:
    """Return error messages for inconsistencies in ``w``."""

    errors: list[str] = []

    game_map = w.maps.get(w.start_map)
    if game_map is None:
        errors.append(f"Start map '{w.start_map}' not found")
    else:
        row, col = w.start_coords
        if not game_map.in_bounds(row, col):
            errors.append(f"Start position ({row}, {col}) is outside map '{w.start_map}'")
        elif not game_map.tiles[row][col].passable:
            errors.append(f"Start position ({row}, {col}) on map '{w.start_map}' is not passable")

    for entry in w.player_config.get("inventory", []) or []:
        item_id = entry.get("item") if isinstance(entry, dict) else None
        if item_id not in w.items:
            errors.append(f"Starting inventory references unknown item '{item_id}'")

    for map_id, m in w.maps.items():
        for row_idx, row in enumerate(m.tiles):
            for col_idx, tile in enumerate(row):
                for event in tile.events:
                    where = f"map '{map_id}' at ({row_idx}, {col_idx})"
                    words = event.command.split()
                    if len(words) != 1 or words[0] != event.command:
                        errors.append(f"Event command '{event.command}' on {where} must be a single word")
                    if isinstance(event, Chest):
                        for item_id in event.treasures:
                            if item_id not in w.items:
                                errors.append(f"Chest on {where} references unknown item '{item_id}'")

    return errors


def _is_coords(value: Any) -> bool:
    return isinstance(value, list) and len(value) == 2 and all(isinstance(c, int) for c in value)


def validate_save(data: dict[str, Any], w: world.World) -> list[str]:
    """Return error messages for a save file that does not match ``w``."""

    errors: list[str] = []
    player = data.get("player")
    if not isinstance(player, dict):
        return ["Save file has no player section"]

    location = player.get("location")
    if not isinstance(location, dict):
        errors.append("Saved player has no location")
    else:
        map_id = location.get("map")
        coords = location.get("coords")
        game_map = w.maps.get(map_id) if isinstance(map_id, str) else None
        if game_map is None:
            errors.append(f"Saved location references unknown map '{map_id}'")
        elif not _is_coords(coords) or not game_map.in_bounds(*coords):
            errors.append(f"Saved location {coords} is outside map '{map_id}'")

    if not isinstance(player.get("stats", {}), dict):
        errors.append("Saved stats must be a mapping")

    inventory = player.get("inventory", []) or []
    if not isinstance(inventory, list):
        errors.append("Saved inventory must be a list")
        inventory = []
    for entry in inventory:
        if not isinstance(entry, dict):
            errors.append(f"Saved inventory entry {entry!r} must be a mapping")
            continue
        item_id = entry.get("item")
        amount = entry.get("amount", 1)
        if not isinstance(item_id, str) or item_id not in w.items:
            errors.append(f"Saved inventory references unknown item '{item_id}'")
        elif not isinstance(amount, int) or amount < 1:
            errors.append(f"Saved inventory has invalid amount for '{item_id}'")

    outfit = player.get("outfit", {}) or {}
    if not isinstance(outfit, dict):
        errors.append("Saved outfit must be a mapping")
        outfit = {}
    allowed = {slot.value for slot in EquipSlot}
    for slot, item_id in outfit.items():
        item = w.items.get(item_id) if isinstance(item_id, str) else None
        if slot not in allowed:
            errors.append(f"Saved outfit uses unknown slot '{slot}'")
        elif not isinstance(item, Equippable):
            errors.append(f"Saved outfit references unknown equipment '{item_id}'")
        elif item.slot.value != slot:
            errors.append(f"Saved outfit puts '{item_id}' in slot '{slot}'")

    errors.extend(_validate_world_state(data.get("world") or {}))
    return errors


def _validate_world_state(state: Any) -> list[str]:
    if not isinstance(state, dict):
        return ["Saved world section must be a mapping"]
    errors: list[str] = []
    seen = state.get("seen", {}) or {}
    if not isinstance(seen, dict):
        errors.append("Saved seen tiles must be a mapping")
    else:
        for map_id, coords in seen.items():
            if not isinstance(coords, list) or not all(_is_coords(c) for c in coords):
                errors.append(f"Saved seen tiles for map '{map_id}' must be [row, col] pairs")
    events = state.get("events", []) or []
    if not isinstance(events, list):
        errors.append("Saved events must be a list")
    else:
        for entry in events:
            if (
                not isinstance(entry, dict)
                or not _is_coords(entry.get("at"))
                or not isinstance(entry.get("index"), int)
            ):
                errors.append(f"Saved event {entry!r} needs 'at: [row, col]' and an integer 'index'")
    return errors
