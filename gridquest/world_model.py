"""Data models for world elements."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .player import Player

NOTHING_HAPPENS = "Nothing happens.\n\n"


class EquipSlot(Enum):
    WEAPON = "weapon"
    SHIELD = "shield"
    HELMET = "helmet"
    TORSO = "torso"
    LEGS = "legs"


class Stats(BaseModel):
    max_hp: int = 10
    hp: int = 10
    attack: int = 1
    defense: int = 1
    agility: int = 1

    model_config = ConfigDict(extra="forbid")


class StatChange(BaseModel):
    max_hp: int = 0
    attack: int = 0
    defense: int = 0
    agility: int = 0

    model_config = ConfigDict(extra="forbid")

    def apply(self, stats: Stats) -> None:
        self._shift(stats, 1)

    def revert(self, stats: Stats) -> None:
        self._shift(stats, -1)

    def _shift(self, stats: Stats, sign: int) -> None:
        stats.max_hp += sign * self.max_hp
        stats.attack += sign * self.attack
        stats.defense += sign * self.defense
        stats.agility += sign * self.agility
        stats.hp = min(stats.hp, stats.max_hp)


class Item(BaseModel):
    id: str
    name: str
    price: int = 0
    consumable: bool = True
    disposable: bool = True

    model_config = ConfigDict(extra="forbid")

    def __str__(self) -> str:
        return self.name

    def use(self, user: Player, entity: Player) -> None:  # noqa: ARG002 - plain items do nothing
        user.io.output(NOTHING_HAPPENS)


class Food(Item):
    recovers: int = 0

    def use(self, user: Player, entity: Player) -> None:
        stats = entity.stats
        gained = max(0, min(self.recovers, stats.max_hp - stats.hp))
        stats.hp += gained
        user.io.output(f"{user.name} uses the {self.name}!\n{entity.name} recovers {gained} HP!\n\n")


class Equippable(Item):
    slot: EquipSlot
    stat_change: StatChange = Field(default_factory=StatChange)
    consumable: bool = False

    def use(self, user: Player, entity: Player) -> None:  # noqa: ARG002 - equips on the user
        user.equip_item(self.name)


class Event(BaseModel):
    """Tile-local action triggered by typing its ``command`` keyword."""

    command: str = "event"
    visible: bool = True

    model_config = ConfigDict(extra="forbid")

    def run(self, player: Player) -> None:
        player.io.output(NOTHING_HAPPENS)


class NPC(Event):
    command: str = "talk"
    name: str = "NPC"
    message: str = "Hello!"

    def run(self, player: Player) -> None:
        player.io.output(f"{self.name}: {self.message}\n\n")


class Chest(Event):
    """Hands out gold and treasures once, then disappears."""

    command: str = "open"
    gold: int = 0
    treasures: list[str] = Field(default_factory=list)

    def run(self, player: Player) -> None:
        items = [player.world.items[item_id] for item_id in self.treasures]
        loot: list[str] = []
        if self.gold > 0:
            player.add_gold(self.gold)
            loot.append(f"* {self.gold} gold")
        for item in items:
            player.add_item(item)
            loot.append(f"* {item}")
        text = "You open the treasure chest...\n\n"
        text += "Loot:\n" + "\n".join(loot) + "\n\n" if loot else "Loot: nothing!\n\n"
        player.io.output(text)
        self.visible = False


class Tile(BaseModel):
    passable: bool = True
    seen: bool = False
    description: str = ""
    graphic: str | None = None
    events: list[Event] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    @property
    def symbol(self) -> str:
        if self.graphic:
            return self.graphic
        return "·" if self.passable else "■"


class Map(BaseModel):
    id: str
    name: str
    tiles: list[list[Tile]] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < len(self.tiles) and 0 <= col < len(self.tiles[row])


@dataclass
class Location:
    map: Map
    coords: tuple[int, int]

    @property
    def tile(self) -> Tile:
        row, col = self.coords
        return self.map.tiles[row][col]


ITEM_TYPES: dict[str, type[Item]] = {
    "item": Item,
    "food": Food,
    "equippable": Equippable,
}

EVENT_TYPES: dict[str, type[Event]] = {
    "event": Event,
    "npc": NPC,
    "chest": Chest,
}


def build_item(item_id: str, cfg: dict[str, Any]) -> Item:
    cfg = dict(cfg or {})
    kind = cfg.pop("type", "item")
    cls = ITEM_TYPES.get(kind)
    if cls is None:
        raise ValueError(f"Unknown item type '{kind}' for item '{item_id}'")
    cfg.setdefault("name", item_id)
    return cls(id=item_id, **cfg)


def build_event(cfg: dict[str, Any]) -> Event:
    cfg = dict(cfg)
    kind = cfg.pop("type", "event")
    cls = EVENT_TYPES.get(kind)
    if cls is None:
        raise ValueError(f"Unknown event type '{kind}'")
    return cls(**cfg)


__all__ = [
    "EquipSlot",
    "Stats",
    "StatChange",
    "Item",
    "Food",
    "Equippable",
    "Event",
    "NPC",
    "Chest",
    "Tile",
    "Map",
    "Location",
    "ITEM_TYPES",
    "EVENT_TYPES",
    "build_item",
    "build_event",
]
