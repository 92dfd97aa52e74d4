"""Command line entry point."""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from dotenv import load_dotenv

from common.config.env import get_env_str
from common.errors import LmrError, is_fatal
from lmr.config import LmrConfig
from lmr.report import run_report

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lmr", description="Run SQL queries and deliver the results as a report"
    )
    parser.add_argument("config", help="Path to the YAML report configuration")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log warnings and errors")
    return parser


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Set the root log level from the flags; LMR_LOG_LEVEL wins when set."""
    level = logging.INFO
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING

    override = get_env_str("LMR_LOG_LEVEL")
    if override:
        level = logging.getLevelName(override.strip().upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)


def main(argv: Optional[List[str]] = None) -> int:
    """Run the lmr CLI and return the process exit status."""
    load_dotenv()
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose, args.quiet)

    try:
        config = LmrConfig.from_yaml(args.config)
        asyncio.run(run_report(config))
    except LmrError as e:
        if is_fatal(e.kind):
            logger.error(f"Report failed ({e.kind.value}): {e}")
        else:
            logger.error(f"Report failed: {e}", exc_info=True)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
