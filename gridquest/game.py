"""Core game loop orchestrator."""

from __future__ import annotations

from pathlib import Path

import yaml

from gridquest import integrity, world

from .commands import CommandProcessor, is_quit
from .interfaces import IOBackend
from .io import ConsoleIO
from .persistence import SaveManager
from .player import Player

SAVE_PROMPT = "Do you want to save before quitting? (y/n): "
FAREWELL = "Goodbye!\n"


class Game:
    def __init__(
        self,
        world_path: str,
        save_path: str | None = None,
        io_backend: IOBackend | None = None,
        debug: bool = False,
        *,
        new_game: bool = False,
    ) -> None:
        path = Path(world_path)
        self.debug = debug
        self.io = io_backend or ConsoleIO()
        self.save_manager = SaveManager(Path(save_path) if save_path else path.parent / "player.yaml")

        try:
            self.world = world.World.from_file(path, debug=debug)
        except FileNotFoundError as exc:
            self.io.output(f"ERROR: Missing world file: {exc}\n")
            raise SystemExit from exc
        except (yaml.YAMLError, ValueError) as exc:
            self.io.output(f"ERROR: Invalid world file: {exc}\n")
            raise SystemExit from exc

        save_data = {}
        if not new_game:
            try:
                save_data = self.save_manager.load()
            except (OSError, yaml.YAMLError) as exc:
                self.io.output(f"ERROR: Failed to load save file: {exc}\n")
                raise SystemExit from exc

        errors = integrity.validate_world_structure(self.world)
        if save_data and not errors:
            errors.extend(integrity.validate_save(save_data, self.world))
        if errors:
            for msg in errors:
                self.io.output(f"ERROR: {msg}\n")
            raise SystemExit("Integrity check failed")

        self._show_intro = not save_data
        self.player = Player.new_game(self.world, self.io)
        if save_data:
            self.world.load_state(save_data.get("world"))
            self.player.load_state(save_data["player"])
        self.command_processor = CommandProcessor(self.io, self.save_manager)
        self.running = True
        self.world.debug(f"game_init save {self.save_manager.save_path} loaded {bool(save_data)}")

    def stop(self) -> None:
        self.running = False

    def quit(self) -> None:
        answer = self.io.get_input(SAVE_PROMPT)
        if answer.strip().lower() in ("y", "yes"):
            self.command_processor.save(self.player)
        self.io.output(FAREWELL)
        self.stop()

    def run(self) -> None:
        if self._show_intro and self.world.intro:
            self.io.output(f"{self.world.intro}\n\n")
        self.command_processor.describe_tile(self.player)
        try:
            while self.running:
                user_input = self.io.get_input()
                if self.debug:
                    self.world.debug(f"input={user_input}")
                self.command_processor.interpret(user_input, self.player)
                if is_quit(user_input):
                    self.quit()
        except (EOFError, KeyboardInterrupt):
            self.io.output("\n" + FAREWELL)
            self.stop()


def run(
    world_path: str,
    save_path: str | None = None,
    io_backend: IOBackend | None = None,
    debug: bool = False,
    *,
    new_game: bool = False,
) -> None:
    Game(
        world_path,
        save_path,
        io_backend=io_backend,
        debug=debug,
        new_game=new_game,
    ).run()
