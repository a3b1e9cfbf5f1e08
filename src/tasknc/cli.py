"""tasknc command-line interface."""

import argparse
import logging
import os
import sys
from typing import List, Optional

from . import __version__
from .config import load_config
from .errors import ExportError, TaskwarriorError
from .export import VERBOSE, read_export
from .models import AUTHOR, DEFAULT_CONFIG, DEFAULT_LOGFILE, NAME, SHORTNAME
from .taskwarrior import export_lines, task_version

logger = logging.getLogger(__name__)

LOG_LEVELS = {0: logging.WARNING, 1: logging.INFO, 2: logging.DEBUG, 3: VERBOSE}


def set_log_level(loglvl: int) -> None:
    """Map a tasknc log level (0-3) onto the root logger."""
    level = LOG_LEVELS.get(max(0, min(loglvl, 3)))
    logging.getLogger().setLevel(level)


def setup_logging(loglvl: int, path: str = DEFAULT_LOGFILE) -> None:
    """Send log records to path with the given tasknc log level."""
    logging.addLevelName(VERBOSE, "VERBOSE")
    try:
        os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
        logging.basicConfig(
            filename=path,
            format="[%(asctime)s] %(levelname)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    except OSError as exc:
        print(f"log file could not be opened: {exc}", file=sys.stderr)
        logging.basicConfig(handlers=[logging.NullHandler()])
    set_log_level(loglvl)


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    p = argparse.ArgumentParser(prog=SHORTNAME, description=f"{NAME}.")
    p.add_argument("-l", "--loglevel", type=int, default=None, help="Set log level (0-3)")
    p.add_argument(
        "-d", "--debug", action="store_true", help="Debug mode: load tasks, print the count, no curses"
    )
    p.add_argument(
        "-c",
        "--config",
        default=DEFAULT_CONFIG,
        help=f"Path to config file (default: {DEFAULT_CONFIG})",
    )
    p.add_argument("--logfile", default=DEFAULT_LOGFILE, help=f"Log file (default: {DEFAULT_LOGFILE})")
    p.add_argument(
        "-v", "--version", action="version", version=f"{NAME} v{__version__} by {AUTHOR}"
    )
    return p


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point. Loads the config and task list, then runs the TUI."""
    args = build_parser().parse_args(argv)

    config, errors = load_config(args.config)
    if args.loglevel is not None:
        config.loglvl = args.loglevel
        print(f"loglevel: {config.loglvl}")
    setup_logging(config.loglvl, args.logfile)
    logger.debug("%s started", SHORTNAME)
    for err in errors:
        print(err)

    try:
        config.version = task_version()
        tasks = read_export(export_lines(config.version))
    except (ExportError, TaskwarriorError) as exc:
        logger.error("could not load tasks: %s", exc)
        tasks = None

    if not tasks:
        print("it appears that your task list is empty")
        sys.exit(f"please add some tasks for {SHORTNAME} to manage")

    if args.debug:
        print(f"task count: {len(tasks)}")
    else:
        from .tui import main as tui_main

        tui_main(tasks, config)
    logger.debug("exiting")


if __name__ == "__main__":
    main()
