"""Command line entry point for Snake Arcade."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snake-arcade",
        description="Snake Arcade game server and utilities.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- serve ---
    serve_p = sub.add_parser("serve", help="Run the HTTP/WebSocket server.")
    serve_p.add_argument("--host", default=os.getenv("HOST", "127.0.0.1"))
    serve_p.add_argument(
        "--port", type=int, default=int(os.getenv("PORT", "8000")),
    )
    serve_p.add_argument("--log-level", default=os.getenv("LOG_LEVEL", "info"))
    serve_p.add_argument(
        "--highscore-file", type=str, default=None,
        help="JSON file for the high score (default: in memory).",
    )
    serve_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON game config used for new games.",
    )
    serve_p.add_argument(
        "--reload", action="store_true", help="Enable auto-reload (dev).",
    )

    # --- highscore ---
    score_p = sub.add_parser("highscore", help="Show or clear the high score.")
    score_p.add_argument("--highscore-file", type=str, default=None)
    score_p.add_argument(
        "--reset", action="store_true", help="Forget the stored high score.",
    )

    # --- config ---
    config_p = sub.add_parser("config", help="Print the default game config.")
    config_p.add_argument(
        "--output", type=str, default=None,
        help="Write the config JSON to this path instead of stdout.",
    )

    return parser


def _highscore_path(args: argparse.Namespace) -> str | None:
    from snake_arcade.server.app import HIGHSCORE_FILE_ENV

    return args.highscore_file or os.getenv(HIGHSCORE_FILE_ENV)


def _run_serve(args: argparse.Namespace) -> int:
    import uvicorn

    from snake_arcade.config import GameConfig
    from snake_arcade.server.app import CONFIG_FILE_ENV, HIGHSCORE_FILE_ENV

    path = _highscore_path(args)
    if path:
        os.environ[HIGHSCORE_FILE_ENV] = path
    if args.config:
        # Surface a bad config file before uvicorn starts.
        GameConfig.load(args.config)
        os.environ[CONFIG_FILE_ENV] = args.config

    uvicorn.run(
        "snake_arcade.server.app:create_app",
        factory=True,
        host=str(args.host),
        port=int(args.port),
        reload=bool(args.reload),
        log_level=str(args.log_level),
    )
    return 0


def _run_highscore(args: argparse.Namespace) -> int:
    from snake_arcade.highscore import JsonFileHighScoreStore

    path = _highscore_path(args)
    if not path:
        logger.error("No high-score file given (--highscore-file).")
        return 1

    store = JsonFileHighScoreStore(path)
    if args.reset:
        store.clear()
    print(store.get_high_score())  # noqa: T201
    return 0


def _run_config(args: argparse.Namespace) -> int:
    from snake_arcade.config import GameConfig

    config = GameConfig()
    if args.output:
        config.save(args.output)
    else:
        print(json.dumps(config.to_dict(), indent=2))  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``snake-arcade`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "serve": _run_serve,
        "highscore": _run_highscore,
        "config": _run_config,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
