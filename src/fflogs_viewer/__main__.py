import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

# Ensure the src directory is on sys.path when running as a script
_SRC_DIR = Path(__file__).resolve().parents[1]
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from fflogs_viewer.bootstrap import create_application
from fflogs_viewer.domain.models.character import CharacterIdentity
from fflogs_viewer.domain.models.metric import AVAILABLE_METRICS, resolve_metric
from fflogs_viewer.presentation.cli import render_character


def _print_help_surface() -> None:
    print("\nHelp:")
    print("- Pass the character as 'First Last World', e.g. \"Jane Doe Gilgamesh\".")
    print("- Set FFLV_CLIENT_ID and FFLV_CLIENT_SECRET (or put them in a .env file).")
    print("- Set FFLV_CACHE_ENABLED=0 to always query the API.")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fflogs_viewer", description="Look up a character's FF Logs rankings.")
    parser.add_argument("text", help="Character name and world, or any text containing them")
    parser.add_argument(
        "--metric",
        choices=[metric.internal_name for metric in AVAILABLE_METRICS],
        default=None,
        help="Ranking metric (defaults to FFLV_METRIC or rdps)",
    )
    parser.add_argument("--local-world", default=None, help="World assumed when the text names none")
    parser.add_argument("--digits", type=int, default=0, help="Decimal digits shown for percentiles")
    return parser


async def _run(args: argparse.Namespace) -> int:
    app = create_application(local_player_world=args.local_world)
    character = CharacterIdentity()
    try:
        task = app.lookup.fetch_character(character, args.text, resolve_metric(args.metric))
        if task is not None:
            await task
    finally:
        await app.aclose()

    render_character(character, decimal_digits=args.digits)
    return 1 if character.error is not None else 0


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    logging.basicConfig(
        level=os.getenv("FFLV_LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    args = _build_parser().parse_args(argv)
    try:
        return asyncio.run(_run(args))
    except KeyboardInterrupt:
        print("\nLookup cancelled.")
        return 130
    except Exception as exc:
        print("An unexpected error occurred.")
        print(f"Reason: {exc}")
        _print_help_surface()
        return 2


if __name__ == "__main__":
    sys.exit(main())
