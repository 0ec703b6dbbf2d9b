"""Command-line entry point: run the server or benchmark the autopilot."""

from __future__ import annotations

import argparse
import logging
import sys

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snake-arcade",
        description="Snake Arcade game server and autopilot tools.",
    )
    parser.add_argument(
        "--log-level", type=str, default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- serve ---
    serve_p = sub.add_parser("serve", help="Run the HTTP game server.")
    serve_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file; flags override its values.",
    )
    serve_p.add_argument("--host", type=str, default=None)
    serve_p.add_argument("--port", type=int, default=None)
    serve_p.add_argument(
        "--static-dir", type=str, default=None,
        help="Directory with index.html and frontend assets.",
    )
    serve_p.add_argument("--leaderboard-capacity", type=int, default=None)
    serve_p.add_argument("--session-ttl", type=float, default=None)

    # --- autoplay ---
    auto_p = sub.add_parser(
        "autoplay", help="Play headless autopilot games and report scores.",
    )
    auto_p.add_argument("--games", type=int, default=100)
    auto_p.add_argument("--grid-width", type=int, default=20)
    auto_p.add_argument("--grid-height", type=int, default=20)
    auto_p.add_argument("--max-steps", type=int, default=5_000)
    auto_p.add_argument("--seed", type=int, default=42)

    return parser


def _load_server_config(args: argparse.Namespace):
    from snake_arcade.config import ServerConfig

    config = ServerConfig.load(args.config) if args.config else ServerConfig()
    return config.with_overrides(
        host=args.host,
        port=args.port,
        static_dir=args.static_dir,
        leaderboard_capacity=args.leaderboard_capacity,
        session_ttl_seconds=args.session_ttl,
    )


def _run_serve(args: argparse.Namespace) -> int:
    import uvicorn

    from snake_arcade.server.app import create_app

    config = _load_server_config(args)
    logger.info("Starting server on %s:%d", config.host, config.port)
    uvicorn.run(create_app(config), host=config.host, port=config.port)
    return 0


def _run_autoplay(args: argparse.Namespace) -> int:
    from snake_arcade.autoplay import benchmark_autopilot

    result = benchmark_autopilot(
        num_games=args.games,
        grid_width=args.grid_width,
        grid_height=args.grid_height,
        max_steps=args.max_steps,
        seed=args.seed,
    )
    print(result.summary())  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``snake-arcade`` CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "serve": _run_serve,
        "autoplay": _run_autoplay,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
