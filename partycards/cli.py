"""
PartyCards CLI - Command-line interface for the engine.

Usage:
    partycards serve [--host H] [--port P]    Run the REST API
    partycards catalog [catalog_file]         Show packs and card counts
    partycards start --players A B ...        Start a game in the configured store
    partycards state <game_id>                Print a stored game as JSON

Settings come from the environment (see partycards.config).
"""

import argparse
import json
import sys

from .config import Settings
from .errors import PartyCardsError
from .logging_config import setup_logging


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="PartyCards - Party card game engine",
        prog="partycards",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the REST API")
    serve_parser.add_argument("--host", default="0.0.0.0", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=None, help="Port (default: $PORT or 3100)")

    # Catalog command
    catalog_parser = subparsers.add_parser("catalog", help="Show packs and card counts")
    catalog_parser.add_argument("catalog_file", nargs="?", help="Path to catalog JSON")

    # Start command
    start_parser = subparsers.add_parser("start", help="Start a game")
    start_parser.add_argument("--players", nargs="+", required=True, help="Player ids")

    # State command
    state_parser = subparsers.add_parser("state", help="Print a stored game")
    state_parser.add_argument("game_id", help="Game id")

    args = parser.parse_args(argv)
    try:
        settings = Settings.from_env()
    except PartyCardsError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        sys.exit(1)
    setup_logging(settings.log_level)

    commands = {
        "serve": cmd_serve,
        "catalog": cmd_catalog,
        "start": cmd_start,
        "state": cmd_state,
    }
    command = commands.get(args.command)
    if command is None:
        parser.print_help()
        sys.exit(1)

    try:
        command(args, settings)
    except PartyCardsError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        sys.exit(1)


def cmd_serve(args, settings: Settings):
    """Run the API with uvicorn."""
    import uvicorn
    from .api import create_app

    app = create_app(settings=settings)
    uvicorn.run(app, host=args.host, port=args.port or settings.port)


def cmd_catalog(args, settings: Settings):
    """Show packs and card counts."""
    from .catalog import load_catalog

    catalog = load_catalog(args.catalog_file or settings.catalog_path)
    for pack in catalog.packs:
        print(f"{pack.name}: {len(pack.prompts)} prompts, {len(pack.responses)} responses")
    print(f"Total: {catalog.prompt_count} prompts, {catalog.response_count} responses")


def cmd_start(args, settings: Settings):
    """Start a game and print its state."""
    from .api import build_service
    from .api.schemas import StartGameRequest

    if not settings.data_dir:
        print("Warning: PARTYCARDS_DATA_DIR not set, game will not outlive this process",
              file=sys.stderr)

    service = build_service(settings)
    state = service.start_game(StartGameRequest(players=args.players))
    print(f"Game started: {state.game_id}")
    print(f"Prompt: {state.current_black_card.text}")
    for player in state.players:
        print(f"\n{player.player}:")
        for card in player.hand:
            print(f"  - {card.text} [{card.pack}]")


def cmd_state(args, settings: Settings):
    """Print a stored game as JSON."""
    from .api import build_service

    service = build_service(settings)
    state = service.get_game_state(args.game_id)
    print(json.dumps(state.model_dump(by_alias=True, mode="json"), indent=2))


if __name__ == "__main__":
    main()
