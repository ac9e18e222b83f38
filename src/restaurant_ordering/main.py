"""CLI entry point for the Swad's Delight ordering session.

Usage:
    swads-delight
    python -m restaurant_ordering.main
"""

from loguru import logger

from .config import get_settings
from .graph import run_session
from .logging import setup_logging
from .models import OrderBook
from .prompts import ConsoleDriver


def main() -> None:
    """Run one interactive ordering session."""
    settings = get_settings()

    # Initialize logging first (stderr + optional rotating file)
    setup_logging(level=settings.log_level, log_file=settings.log_file)
    logger.info("Starting ordering CLI")

    order_book = OrderBook.from_menu_file(settings.menu_json_path)
    logger.info("Menu loaded: {} ({} items)", order_book.name, len(order_book.catalog))

    driver = ConsoleDriver()
    try:
        run_session(
            order_book,
            driver,
            intro_pause_seconds=settings.intro_pause_seconds,
            recursion_limit=settings.recursion_limit,
        )
    except (EOFError, KeyboardInterrupt):
        driver.say("\nGoodbye!")
        logger.info("Session interrupted by user")


if __name__ == "__main__":
    main()
