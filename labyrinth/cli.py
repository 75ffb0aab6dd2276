"""
Labyrinth command line.

    labyrinth daedalus    start the labyrinth server (aliases: deadalus, server)
    labyrinth icarus      start the labyrinth solver (alias: client)

Every flag defaults to the matching LABYRINTH_* environment variable.
"""

import argparse
import logging
import random
import sys
from typing import Optional, Sequence

import uvicorn

from labyrinth import __version__
from labyrinth.client.maze_client import MazeClient, MazeClientError
from labyrinth.config import Settings
from labyrinth.main import configure_logging, create_app
from labyrinth.services.labyrinth_service import LabyrinthService
from labyrinth.solver.navigator import Navigator, run_attempts

logger = logging.getLogger("labyrinth")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="labyrinth",
        description="Daedalus builds labyrinths, Icarus solves them.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--host", help="server address")
    common.add_argument("--port", type=int, help="server port")
    common.add_argument("--seed", type=int, help="seed for the random source")
    common.add_argument("--debug", action="store_true", default=None, help="verbose logging")

    commands = parser.add_subparsers(dest="command", required=True)

    daedalus = commands.add_parser(
        "daedalus",
        aliases=["deadalus", "server"],
        parents=[common],
        help="start the labyrinth creator",
        description=(
            "Daedalus's job is to create a challenging labyrinth for Icarus to "
            "solve. He runs a server that Icarus clients connect to."
        ),
    )
    daedalus.add_argument("--width", type=int, help="maze width in rooms")
    daedalus.add_argument("--height", type=int, help="maze height in rooms")
    daedalus.set_defaults(handler=run_daedalus)

    icarus = commands.add_parser(
        "icarus",
        aliases=["client"],
        parents=[common],
        help="start the labyrinth solver",
        description=(
            "Icarus wakes up in the middle of a labyrinth. He can only see the "
            "walls of his own room, takes one step and looks again."
        ),
    )
    icarus.add_argument("--times", type=int, help="number of labyrinths to solve")
    icarus.add_argument("--max-moves", type=int, help="give up an attempt after this many moves")
    icarus.set_defaults(handler=run_icarus)

    return parser


def settings_from_args(args: argparse.Namespace) -> Settings:
    """Settings from the environment, overridden by any flag given."""
    fields = Settings.model_fields
    overrides = {
        key: value
        for key, value in vars(args).items()
        if key in fields and value is not None
    }
    return Settings(**overrides)


def run_daedalus(settings: Settings) -> int:
    """Serve labyrinths until Icarus calls /done or the process is interrupted."""
    service = LabyrinthService(settings)
    app = create_app(settings, service)

    config = uvicorn.Config(
        app,
        host=settings.host,
        port=settings.port,
        log_level="debug" if settings.debug else "warning",
    )
    server = uvicorn.Server(config)

    def shutdown() -> None:
        server.should_exit = True

    service.set_finish_hook(shutdown)
    server.run()
    return 0


def run_icarus(settings: Settings) -> int:
    """Solve settings.times labyrinths against a running Daedalus."""
    client = MazeClient(settings.base_url, timeout=settings.request_timeout_seconds)
    navigator = Navigator(
        client,
        rng=random.Random(settings.seed),
        max_moves=settings.max_moves,
    )

    try:
        summary = run_attempts(client, settings.times, navigator)
    except MazeClientError as e:
        logger.error(f"Lost contact with Daedalus: {e}")
        return 1
    finally:
        client.close()

    logger.info(summary.message)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = settings_from_args(args)
    except ValueError as e:
        parser.error(str(e))

    configure_logging(settings.debug)
    return args.handler(settings)


if __name__ == "__main__":
    sys.exit(main())
