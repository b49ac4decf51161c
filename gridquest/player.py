"""The player character: position on the map, inventory and equipment."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .world_model import EquipSlot, Equippable, Item, Location, Stats

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .interfaces import IOBackend
    from .world import World

CANNOT_MOVE = "You can't go that way!\n\n"
NO_SUCH_ITEM_ERROR = "What?! You don't have THAT!\n\n"
NOT_EQUIPPED_ERROR = "You are not equipping that!\n\n"


@dataclass
class InventoryEntry:
    item: Item
    amount: int = 1


class Player:
    """A player exploring the tile maps of a ``World``.

    Parameters
    ----------
    world:
        Item catalog and maps the player lives in.
    io:
        Backend used for every message the player prints.
    """

    SYMBOL = "¶"
    VIEW_DISTANCE = 2

    def __init__(
        self,
        world: World,
        io: IOBackend,
        name: str = "Player",
        stats: Stats | None = None,
        gold: int = 0,
        location: Location | None = None,
    ) -> None:
        self.world = world
        self.io = io
        self.name = name
        self.stats = stats or Stats()
        self.gold = gold
        self.location = location or world.start_location()
        self.inventory: list[InventoryEntry] = []
        self.outfit: dict[EquipSlot, Equippable] = {}

    @classmethod
    def new_game(cls, world: World, io: IOBackend) -> Player:
        """Create the starting player described by the world's ``player`` section."""
        cfg = world.player_config
        player = cls(
            world,
            io,
            name=str(cfg.get("name", "Player")),
            stats=Stats(**(cfg.get("stats") or {})),
            gold=int(cfg.get("gold", 0) or 0),
        )
        for entry in cfg.get("inventory", []) or []:
            player.add_item(world.items[entry["item"]], int(entry.get("amount", 1)))
        player.update_map()
        return player

    # --- inventory ---
    def has_item(self, name: str) -> InventoryEntry | None:
        name_cf = name.casefold()
        for entry in self.inventory:
            if entry.item.name.casefold() == name_cf:
                return entry
        return None

    def add_item(self, item: Item, amount: int = 1) -> None:
        entry = self.has_item(item.name)
        if entry:
            entry.amount += amount
        else:
            self.inventory.append(InventoryEntry(item, amount))
        self.world.debug(f"inventory {self._inventory_summary()}")

    def remove_item(self, item: Item, amount: int = 1) -> None:
        entry = self.has_item(item.name)
        if not entry:
            return
        entry.amount -= amount
        if entry.amount <= 0:
            self.inventory.remove(entry)
        self.world.debug(f"inventory {self._inventory_summary()}")

    def add_gold(self, amount: int) -> None:
        self.gold = max(0, self.gold + amount)
        self.world.debug(f"gold {self.gold}")

    def _inventory_summary(self) -> list[tuple[str, int]]:
        return [(entry.item.id, entry.amount) for entry in self.inventory]

    # --- equipment ---
    def equip_item(self, name: str) -> None:
        entry = self.has_item(name)
        if not entry:
            self.io.output(NO_SUCH_ITEM_ERROR)
            return
        item = entry.item
        if not isinstance(item, Equippable):
            self.io.output(f"You cannot equip the {item}!\n\n")
            return
        current = self.outfit.pop(item.slot, None)
        if current is not None:
            current.stat_change.revert(self.stats)
            self.add_item(current)
        self.remove_item(item)
        self.outfit[item.slot] = item
        item.stat_change.apply(self.stats)
        self.world.debug(f"equip {item.slot.value} {item.id}")
        self.io.output(f"You have equipped the {item}!\n\n")

    def unequip_item(self, name: str) -> None:
        name_cf = name.casefold()
        for slot, item in self.outfit.items():
            if item.name.casefold() == name_cf:
                del self.outfit[slot]
                item.stat_change.revert(self.stats)
                self.add_item(item)
                self.world.debug(f"unequip {slot.value} {item.id}")
                self.io.output(f"You have unequipped the {item}!\n\n")
                return
        self.io.output(NOT_EQUIPPED_ERROR)

    def use_item(self, name: str, entity: Player) -> None:
        entry = self.has_item(name)
        if not entry:
            self.io.output(NO_SUCH_ITEM_ERROR)
            return
        item = entry.item
        item.use(self, entity)
        if item.consumable:
            self.remove_item(item)

    # --- movement ---
    def move_to(self, row: int, col: int) -> bool:
        game_map = self.location.map
        if not game_map.in_bounds(row, col) or not game_map.tiles[row][col].passable:
            self.io.output(CANNOT_MOVE)
            return False
        self.location = Location(game_map, (row, col))
        self.update_map()
        self.world.debug(f"location {game_map.id} ({row}, {col})")
        return True

    def move_up(self) -> bool:
        row, col = self.location.coords
        return self.move_to(row - 1, col)

    def move_left(self) -> bool:
        row, col = self.location.coords
        return self.move_to(row, col - 1)

    def move_down(self) -> bool:
        row, col = self.location.coords
        return self.move_to(row + 1, col)

    def move_right(self) -> bool:
        row, col = self.location.coords
        return self.move_to(row, col + 1)

    def update_map(self) -> None:
        """Mark every tile within view distance as seen."""
        game_map = self.location.map
        row, col = self.location.coords
        for r in range(row - self.VIEW_DISTANCE, row + self.VIEW_DISTANCE + 1):
            for c in range(col - self.VIEW_DISTANCE, col + self.VIEW_DISTANCE + 1):
                if game_map.in_bounds(r, c):
                    game_map.tiles[r][c].seen = True

    # --- display ---
    def _render_row(self, row: int, cols: range, full: bool) -> str:
        game_map = self.location.map
        symbols: list[str] = []
        for c in cols:
            if not game_map.in_bounds(row, c):
                continue
            tile = game_map.tiles[row][c]
            if (row, c) == self.location.coords:
                symbols.append(self.SYMBOL)
            elif full or tile.seen:
                symbols.append(tile.symbol)
            else:
                symbols.append(" ")
        return "  " + " ".join(symbols)

    def print_map(self, full: bool = False) -> None:
        game_map = self.location.map
        lines = [f"\nMap of {game_map.name}:", ""]
        for row_idx, row in enumerate(game_map.tiles):
            lines.append(self._render_row(row_idx, range(len(row)), full))
        lines.append("")
        lines.append(f"{self.SYMBOL} - {self.name}'s location")
        self.io.output("\n".join(lines) + "\n\n")

    def print_minimap(self) -> None:
        game_map = self.location.map
        row, col = self.location.coords
        dist = self.VIEW_DISTANCE
        cols = range(col - dist, col + dist + 1)
        lines = [""]
        for r in range(row - dist, row + dist + 1):
            if 0 <= r < len(game_map.tiles):
                lines.append(self._render_row(r, cols, True))
        self.io.output("\n".join(lines) + "\n\n")

    def print_inventory(self) -> None:
        lines = [f"Current gold in pouch: {self.gold}.", "", f"{self.name}'s inventory:"]
        if self.inventory:
            lines.extend(f"* {entry.item} ({entry.amount})" for entry in self.inventory)
        else:
            lines.append("Empty")
        self.io.output("\n".join(lines) + "\n\n")

    def print_status(self) -> None:
        stats = self.stats
        lines = [
            "Stats:",
            f"* HP: {stats.hp}/{stats.max_hp}",
            f"* Attack: {stats.attack}",
            f"* Defense: {stats.defense}",
            f"* Agility: {stats.agility}",
            "",
            "Equipment:",
        ]
        for slot in EquipSlot:
            item = self.outfit.get(slot)
            lines.append(f"* {slot.value.capitalize()}: {item if item else 'none'}")
        self.io.output("\n".join(lines) + "\n\n")

    # --- persistence ---
    def to_state(self) -> dict[str, Any]:
        row, col = self.location.coords
        return {
            "name": self.name,
            "gold": self.gold,
            "stats": self.stats.model_dump(),
            "inventory": [{"item": entry.item.id, "amount": entry.amount} for entry in self.inventory],
            "outfit": {slot.value: item.id for slot, item in self.outfit.items()},
            "location": {"map": self.location.map.id, "coords": [row, col]},
        }

    def load_state(self, state: dict[str, Any]) -> None:
        """Restore a state produced by ``to_state``.

        Saved stats already include equipment bonuses, so outfit items are
        put back without applying their stat changes again.
        """
        self.name = str(state.get("name", self.name))
        self.gold = int(state.get("gold", self.gold))
        if state.get("stats"):
            self.stats = Stats(**state["stats"])
        self.inventory = [
            InventoryEntry(self.world.items[entry["item"]], int(entry.get("amount", 1)))
            for entry in state.get("inventory", []) or []
        ]
        self.outfit = {}
        for slot, item_id in (state.get("outfit", {}) or {}).items():
            item = self.world.items[item_id]
            if isinstance(item, Equippable):
                self.outfit[EquipSlot(slot)] = item
        location = state.get("location")
        if location:
            row, col = location["coords"]
            self.location = Location(self.world.maps[location["map"]], (int(row), int(col)))
        self.world.debug(f"loaded {self.name} at {self.location.map.id} {self.location.coords}")


__all__ = ["Player", "InventoryEntry"]
