import argparse
import logging
import sys
from typing import Optional, Sequence

from rich.console import Console

from core import settings
from core.log_config import setup_logging
from apps.exchange.application.config import build_config
from apps.exchange.application.session import create_session
from apps.exchange.cli.console import XChangeConsole
from apps.exchange.domain.errors import ConfigurationError
from apps.exchange.infrastructure.persistence.codecs import HISTORY_CODECS
from apps.exchange.infrastructure.providers.registry import PROVIDER_REGISTRY


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xchangeit",
        description="Interactive currency converter with conversion history and favorite pairs",
    )
    parser.add_argument(
        '--offline',
        action='store_true',
        help='Static rates and in-memory history only (no history file, no network)'
    )
    parser.add_argument(
        '--history-file',
        dest='history_file',
        type=str,
        help='History file path (default: XCHANGE_HISTORY_FILE)'
    )
    parser.add_argument(
        '--history-format',
        dest='history_format',
        choices=sorted(HISTORY_CODECS),
        help='History line format (default: XCHANGE_HISTORY_FORMAT)'
    )
    parser.add_argument(
        '--rate-source',
        dest='rate_source',
        choices=sorted(PROVIDER_REGISTRY),
        help='Where exchange rates come from (default: XCHANGE_RATE_SOURCE)'
    )
    parser.add_argument(
        '--log-level',
        dest='log_level',
        type=str,
        help='Logging level (default: LOG_LEVEL)'
    )
    return parser


def main(argv: Optional[Sequence[str]] = None, console: Optional[Console] = None) -> int:
    args = build_parser().parse_args(argv)
    console = console or Console()

    setup_logging(level=args.log_level or settings.LOG_LEVEL, log_file=settings.LOG_FILE)

    try:
        config = build_config(
            offline=args.offline,
            history_file=args.history_file,
            history_format=args.history_format,
            rate_source=args.rate_source,
        )
        session = create_session(config)
    except ConfigurationError as e:
        logger.error("Startup failed: %s", e)
        console.print(f"[red]❌ System error: {e}[/]")
        return 1

    XChangeConsole(session, console=console).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
