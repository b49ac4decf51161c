import sys
from pathlib import Path

import pytest
import yaml

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.append(str(ROOT_DIR))

from gridquest.commands import CommandProcessor  # noqa: E402
from gridquest.interfaces import IOBackend  # noqa: E402
from gridquest.persistence import SaveManager  # noqa: E402
from gridquest.player import Player  # noqa: E402
from gridquest.world import World  # noqa: E402


class DummyIO(IOBackend):
    def __init__(self, inputs: list[str] | None = None) -> None:
        self.inputs = inputs or []
        self.outputs: list[str] = []
        self.prompts: list[str] = []

    def get_input(self, prompt: str = "> ") -> str:
        self.prompts.append(prompt)
        if not self.inputs:
            raise EOFError
        return self.inputs.pop(0)

    def output(self, text: str) -> None:
        self.outputs.append(text)


WORLD = {
    "intro": "Welcome to the farm.",
    "start": {"map": "farm", "coords": [1, 1]},
    "player": {
        "name": "Bob",
        "gold": 3,
        "stats": {"max_hp": 10, "hp": 6, "attack": 1, "defense": 1, "agility": 1},
        "inventory": [
            {"item": "torch", "amount": 2},
            {"item": "rock"},
            {"item": "bread"},
            {"item": "sword"},
        ],
    },
    "items": {
        "torch": {"name": "Torch"},
        "rock": {"name": "Rock", "disposable": False},
        "bread": {"type": "food", "name": "Bread", "recovers": 5},
        "sword": {"type": "equippable", "name": "Sword", "slot": "weapon", "stat_change": {"attack": 3}},
        "axe": {"type": "equippable", "name": "Battle Axe", "slot": "weapon", "stat_change": {"attack": 5}},
        "helmet": {"type": "equippable", "name": "Iron Helmet", "slot": "helmet", "stat_change": {"defense": 2}},
    },
    "maps": {
        "farm": {
            "name": "Farm",
            "legend": {
                ".": {"description": "Green grass."},
                "#": {"passable": False, "description": "A fence."},
            },
            "rows": ["#####", "#...#", "#...#", "#####"],
            "events": [
                {"at": [1, 2], "type": "npc", "name": "Farmer", "message": "Nice day!"},
                {"at": [1, 3], "type": "chest", "gold": 5, "treasures": ["helmet", "axe"]},
                {"at": [2, 1], "type": "npc", "name": "Ghost", "message": "Boo!", "visible": False},
                {"at": [2, 2], "type": "npc", "name": "Ghost", "message": "Boo!", "visible": False},
                {"at": [2, 2], "type": "npc", "name": "Twin", "message": "First."},
                {"at": [2, 2], "type": "npc", "command": "TALK", "name": "Twin", "message": "Second."},
                {"at": [2, 2], "type": "event", "command": "help"},
                {"at": [2, 2], "type": "event", "command": "drop"},
                {"at": [2, 2], "type": "event", "command": "pray"},
            ],
        }
    },
}


@pytest.fixture
def io_backend() -> DummyIO:
    return DummyIO()


@pytest.fixture
def world_data() -> dict:
    return yaml.safe_load(yaml.safe_dump(WORLD))


@pytest.fixture
def world_file(tmp_path, world_data) -> Path:
    path = tmp_path / "world.yaml"
    with open(path, "w", encoding="utf-8") as fh:
        yaml.safe_dump(world_data, fh, allow_unicode=True)
    return path


@pytest.fixture
def world(world_file) -> World:
    return World.from_file(world_file)


@pytest.fixture
def player(world, io_backend) -> Player:
    return Player.new_game(world, io_backend)


@pytest.fixture
def processor(io_backend, tmp_path) -> CommandProcessor:
    return CommandProcessor(io_backend, SaveManager(tmp_path / "player.yaml"))
