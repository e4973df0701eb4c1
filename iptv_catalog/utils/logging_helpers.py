"""
Structured logging helpers for consistent log formatting.

Provides utilities for structured, clean logging without excessive decorative separators.
"""
import logging
from datetime import datetime, timezone


def log_refresh_start(logger: logging.Logger, url: str) -> None:
    """Log scheduled cache refresh start."""
    logger.info(f"Source refresh started at {datetime.now(timezone.utc).isoformat()}: {url}")


def log_catalog_summary(
    logger: logging.Logger,
    groups_count: int,
    channels_count: int
) -> None:
    """
    Log parsed catalog summary.

    Args:
        logger: Logger instance
        groups_count: Number of channel groups
        channels_count: Total channels across all groups
    """
    logger.info(f"Catalog parsed - Groups: {groups_count}, Channels: {channels_count}")
