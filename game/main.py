"""Entry point for running the sample adventure."""

import argparse
import sys
from pathlib import Path

from gridquest.game import run

DATA_DIR = Path(__file__).parent.parent / "data"


def run_cli() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--world",
        default=str(DATA_DIR / "world.yaml"),
        help="World file to play (default: data/world.yaml)",
    )
    parser.add_argument(
        "--save",
        default=None,
        help="Save file (default: player.yaml next to the world file)",
    )
    parser.add_argument(
        "--new",
        action="store_true",
        help="Ignore an existing save file and start a new game",
    )
    parser.add_argument(
        "--debug",
        nargs="?",
        const=True,
        metavar="FILE",
        help="Enable debug mode; optionally provide FILE to redirect the debug trace (STDERR) to it",
    )
    args = parser.parse_args()
    debug_opt = args.debug

    if isinstance(debug_opt, str):  # --debug FILE provided
        orig_stderr = sys.stderr
        with open(debug_opt, "w", encoding="utf-8") as fh:
            try:
                sys.stderr = fh
                run(args.world, args.save, debug=True, new_game=args.new)
            finally:
                sys.stderr = orig_stderr
    else:
        run(args.world, args.save, debug=bool(debug_opt), new_game=args.new)


if __name__ == "__main__":
    run_cli()
