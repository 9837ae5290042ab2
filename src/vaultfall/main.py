"""
Main entry point for VAULTFALL.

Loads settings from the environment (and .env), applies command line
overrides and launches the desktop simulator.
"""

import argparse
import asyncio
import logging
import sys

from dotenv import load_dotenv

from vaultfall import __version__
from vaultfall.config.settings import Settings, get_settings


def setup_logging(debug: bool = False, log_file: str | None = None) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=handlers,
    )
    # Drawing code is chatty at DEBUG
    logging.getLogger("vaultfall.graphics").setLevel(logging.INFO)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="vaultfall", description="Catch the loot, dodge the trap.")
    parser.add_argument("--debug", action="store_true", help="verbose logging")
    parser.add_argument("--seed", type=int, default=None, help="seed the game RNG")
    parser.add_argument("--width", type=int, default=None, help="viewport width in pixels")
    parser.add_argument("--height", type=int, default=None, help="viewport height in pixels")
    parser.add_argument("--fps", type=int, default=None, help="target frames per second")
    parser.add_argument("--log-file", default=None, help="also write logs to this file")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Return a copy of settings with command line values applied."""
    display = settings.display.model_copy(update={
        key: value
        for key, value in (("width", args.width), ("height", args.height), ("fps", args.fps))
        if value is not None
    })
    update: dict = {"display": display, "debug": settings.debug or args.debug}
    if args.seed is not None:
        update["seed"] = args.seed
    return settings.model_copy(update=update)


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    load_dotenv()

    args = build_parser().parse_args(argv)
    settings = apply_overrides(get_settings(), args)

    setup_logging(settings.debug, args.log_file)
    logger = logging.getLogger(__name__)
    logger.info("VAULTFALL starting...")

    from vaultfall.simulator.window import run_simulator

    try:
        asyncio.run(run_simulator(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("VAULTFALL stopped")


if __name__ == "__main__":
    main()
