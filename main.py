# main.py

"""Entry point for the shop_assistant application (TUI or headless CLI)."""

import argparse
import asyncio
import logging
import sys

from src.config.logging_config import setup_logging
from src.config.settings import Settings
from src.models.errors import CatalogLoadError, ConfigurationError

logger = logging.getLogger("shop_assistant.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="shop_assistant",
        description=(
            "Shopping assistant that searches the product catalog "
            "and converts currencies."
        ),
    )
    parser.add_argument(
        "query",
        nargs="?",
        default=None,
        help="Question for the assistant. Omit to launch the chat TUI.",
    )
    parser.add_argument(
        "-c",
        "--conversation-id",
        default=None,
        dest="conversation_id",
        help="Reuse an existing conversation id.",
    )
    parser.add_argument(
        "--history",
        default=None,
        help="JSON file with prior messages to send before the query.",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "text"],
        default="json",
        dest="output_format",
        help="Output format (default: json).",
    )
    parser.add_argument(
        "--health",
        action="store_true",
        default=False,
        help="Check the oracle, rate provider and catalog.",
    )
    parser.add_argument(
        "--categories",
        action="store_true",
        default=False,
        help="List catalog categories and exit.",
    )
    parser.add_argument(
        "--currencies",
        action="store_true",
        default=False,
        help="List supported currencies and exit.",
    )
    return parser


def _run_tui() -> int:
    """Launch the interactive Textual chat TUI."""
    from src.ui.app import ShopAssistantApp

    try:
        app = ShopAssistantApp()
        app.run()
    except Exception:
        logger.critical("Fatal error during TUI run", exc_info=True)
        raise
    finally:
        logger.info("shop_assistant TUI shutting down")
    return 0


def _dispatch(args: argparse.Namespace) -> int:
    from src.cli import runner

    if args.health:
        return asyncio.run(runner.run_health_check())
    if args.categories:
        return runner.run_list_categories()
    if args.currencies:
        return runner.run_list_currencies()
    if args.query is None:
        return _run_tui()
    return asyncio.run(
        runner.cli_chat(
            query=args.query,
            conversation_id=args.conversation_id,
            history_path=args.history,
            output_format=args.output_format,
        )
    )


def main() -> None:
    """Validate configuration, then route to TUI or a CLI command."""
    log_file = setup_logging()
    logger.info("shop_assistant starting, log file: %s", log_file)

    parser = _build_parser()
    args = parser.parse_args()

    try:
        Settings.validate()
        exit_code = _dispatch(args)
    except ConfigurationError as exc:
        logger.critical("Configuration error: %s", exc)
        print(f"Configuration error: {exc}", file=sys.stderr)
        sys.exit(2)
    except CatalogLoadError as exc:
        logger.critical("Catalog load failed: %s", exc)
        print(f"Catalog load failed: {exc}", file=sys.stderr)
        sys.exit(1)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
