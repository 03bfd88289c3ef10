"""CLI entry point."""

import sys
from pathlib import Path

from pydantic import ValidationError

from common.logging_config import setup_logging
from cli.bench import Bench
from cli.layout import load_layout
from cli.repl import repl_loop
from relay.config import HOST_LAYOUT_PATH, RELAY_DEBUG
from relay.exceptions import MalformedConfigError


def main() -> None:
    """Entry point for the bench CLI: `dashboard-relay [--debug] [layout.json]`."""
    debug = RELAY_DEBUG or '--debug' in sys.argv
    if '--debug' in sys.argv:
        sys.argv.remove('--debug')

    logger = setup_logging('cli', debug=debug)
    setup_logging('relay', debug=debug)

    if debug:
        logger.info("Debug logging enabled")

    layout_path = Path(sys.argv[1] if len(sys.argv) > 1 else HOST_LAYOUT_PATH)

    try:
        layout = load_layout(layout_path)
        bench = Bench(layout)
    except (OSError, ValidationError, MalformedConfigError) as e:
        logger.error(f"Cannot start bench from {layout_path}: {e}")
        sys.exit(1)

    logger.info("Bench starting...")
    try:
        repl_loop(bench)
    except Exception as e:
        logger.error(f"CLI error: {e}", exc_info=True)
        raise
    finally:
        logger.info("Bench exiting")


if __name__ == "__main__":
    main()
