"""Command handling for the world map."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .interfaces import IOBackend
from .persistence import SaveManager

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .player import Player
    from .world_model import Event

# Commands that are available everywhere.
DEFAULT_COMMANDS = """     Command          Purpose

        w (↑)
  a (←) s (↓) d (→)       Movement

          help      Show the help menu
         map       Print the map
         supermap       Print all the map
          inv         Check inventory
        status         Show player status
      use [item]      Use the specified item
      drop [item]        Drop the specified item
     equip [item]      Equip the specified item
    unequip [item]    Unequip the specified item
         save              Save the game
         quit               Quit the game

  """

SPECIAL_COMMANDS_HEADER = "* Special commands: "
NO_ITEM_DROP_ERROR = "You can't drop what you don't have!\n\n"
CANNOT_DROP_ERROR = "You cannot drop that item.\n\n"
DROPPED = "You have dropped {item}.\n\n"
UNKNOWN_COMMAND = "That isn't an available command at this time.\nType 'help' for a list of available commands.\n\n"
SAVE_SUCCESS = "Successfully saved the game!\n\n"

QUIT_COMMAND = "quit"

# Verbs that take an item name. Checked before anything else.
ITEM_COMMANDS: tuple[str, ...] = ("drop", "equip", "unequip", "use")

# Whole-line commands, mapped to their ``cmd_`` handler.
WORLD_COMMANDS: dict[str, str] = {
    "w": "move_up",
    "a": "move_left",
    "s": "move_down",
    "d": "move_right",
    "help": "help",
    "map": "map",
    "supermap": "supermap",
    "inv": "inv",
    "status": "status",
    "save": "save",
}


def is_quit(command: str) -> bool:
    """Return True if ``command`` asks to leave the game."""
    return command.lower() == QUIT_COMMAND


class CommandProcessor:
    """Interpret player input on the world map.

    Dispatch order is fixed: item verbs with an argument, then whole-line
    world commands, then the visible events of the current tile.
    """

    def __init__(self, io: IOBackend, saver: SaveManager) -> None:
        self.io = io
        self.save_manager = saver

    def interpret(self, command: str, player: Player) -> None:
        """Execute one line of input for ``player``."""

        command = command.lower()
        if is_quit(command):
            return

        words = command.split()

        if len(words) > 1 and words[0] in ITEM_COMMANDS:
            name = " ".join(words[1:])
            player.world.debug(f"command {words[0]} args {name!r}")
            getattr(self, f"cmd_{words[0]}")(player, name)
            return

        handler = WORLD_COMMANDS.get(command)
        if handler:
            player.world.debug(f"command {handler}")
            getattr(self, f"cmd_{handler}")(player)
            return

        if words:
            event = self._find_event(player, words[0])
            if event is not None:
                player.world.debug(f"event {event.command} at {player.location.coords}")
                event.run(player)
                return

        self.io.output(UNKNOWN_COMMAND)

    def _find_event(self, player: Player, word: str) -> Event | None:
        word_cf = word.casefold()
        for event in player.location.tile.events:
            if event.visible and event.command.casefold() == word_cf:
                return event
        return None

    def display_default_commands(self) -> None:
        """Print the commands that are available everywhere."""
        self.io.output(DEFAULT_COMMANDS)

    def display_special_commands(self, player: Player) -> None:
        """Print the commands offered by visible events on the current tile."""
        commands = [event.command for event in player.location.tile.events if event.visible]
        if commands:
            self.io.output(SPECIAL_COMMANDS_HEADER + ", ".join(commands) + "\n\n")

    def help(self, player: Player) -> None:
        """Print the default and the tile-specific commands."""
        self.display_default_commands()
        self.display_special_commands(player)

    def describe_tile(self, player: Player) -> None:
        """Show the surroundings after ``player`` arrives on a tile."""
        player.print_minimap()
        self.io.output(f"{player.location.tile.description}\n\n")
        self.display_special_commands(player)

    def save(self, player: Player) -> bool:
        try:
            self.save_manager.save(player)
        except OSError as exc:
            self.io.output(f"ERROR: Failed to save game: {exc}\n\n")
            return False
        self.io.output(SAVE_SUCCESS)
        return True

    def _move(self, player: Player, direction: str) -> None:
        if getattr(player, f"move_{direction}")():
            self.describe_tile(player)

    def cmd_drop(self, player: Player, name: str) -> None:
        entry = player.has_item(name)
        if entry and not entry.item.disposable:
            self.io.output(CANNOT_DROP_ERROR)
        elif entry:
            item = entry.item
            player.remove_item(item, 1)
            self.io.output(DROPPED.format(item=item))
        else:
            self.io.output(NO_ITEM_DROP_ERROR)

    def cmd_equip(self, player: Player, name: str) -> None:
        player.equip_item(name)

    def cmd_unequip(self, player: Player, name: str) -> None:
        player.unequip_item(name)

    def cmd_use(self, player: Player, name: str) -> None:
        player.use_item(name, player)

    def cmd_move_up(self, player: Player) -> None:
        self._move(player, "up")

    def cmd_move_left(self, player: Player) -> None:
        self._move(player, "left")

    def cmd_move_down(self, player: Player) -> None:
        self._move(player, "down")

    def cmd_move_right(self, player: Player) -> None:
        self._move(player, "right")

    def cmd_help(self, player: Player) -> None:
        self.help(player)

    def cmd_map(self, player: Player) -> None:
        player.print_map()

    def cmd_supermap(self, player: Player) -> None:
        player.print_map(True)

    def cmd_inv(self, player: Player) -> None:
        player.print_inventory()

    def cmd_status(self, player: Player) -> None:
        player.print_status()

    def cmd_save(self, player: Player) -> None:
        self.save(player)


__all__ = [
    "CommandProcessor",
    "DEFAULT_COMMANDS",
    "SPECIAL_COMMANDS_HEADER",
    "NO_ITEM_DROP_ERROR",
    "CANNOT_DROP_ERROR",
    "UNKNOWN_COMMAND",
    "SAVE_SUCCESS",
    "ITEM_COMMANDS",
    "WORLD_COMMANDS",
    "is_quit",
]
