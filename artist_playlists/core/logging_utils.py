import logging

# Global project logger (can be tuned via logging_config)
logger = logging.getLogger("artist_playlists")


def log_info(message: str) -> None:
    logger.info("%s", message)


def log_step(message: str) -> None:
    """
    Action step / ongoing work.
    """
    logger.info("→ %s", message)


def log_success(message: str) -> None:
    logger.info("✅ %s", message)


def log_warning(message: str) -> None:
    """
    Warning / non-fatal problem (e.g. a skipped album).
    """
    logger.warning("⚠️ %s", message)


def log_error(message: str) -> None:
    logger.error("❌ %s", message)


def log_progress(
    current: int,
    total: int,
    prefix: str = "",
) -> None:
    """
    Simple progress logging.

    Example:
      log_progress(3, 12, prefix="Album tracks")
      -> "Album tracks 3/12 (25.0%)"
    """
    if total <= 0:
        total = 1

    fraction = max(0.0, min(1.0, current / total))
    percent = fraction * 100

    if prefix:
        logger.info("%s %d/%d (%.1f%%)", prefix, current, total, percent)
    else:
        logger.info("%d/%d (%.1f%%)", current, total, percent)
