"""
CLI utility functions.

Pure, stateless utility functions used across CLI commands.
"""

import logging


def setup_logging(verbose: bool = False) -> None:
    """
    Set up logging configuration.

    Args:
        verbose: If True, set logging level to DEBUG, otherwise WARNING
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s - %(name)s - %(message)s")


def format_row_count(estimate: float | None) -> str:
    """Render a row-count estimate for display."""
    if estimate is None:
        return "unknown"
    return str(int(estimate))
