"""
logging.py — Application-Wide Logging Configuration

Purpose:
- Configure a standardized logging format for the whole org service.
- Keep gateway, transport and API logs consistent.

Goals:
- Simple console logging at INFO level.
- Uniform formatting: timestamp | level | module | message
- Quiet the HTTP client libraries unless DEBUG is requested.
"""

import logging

# -----------------------------------------------------------------------------
# Log Format
# -----------------------------------------------------------------------------

LOG_FORMAT = (
    "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
)

# Chatty transport loggers pulled in by the Supabase client
_NOISY_LOGGERS = ("httpx", "httpcore", "hpack")

# -----------------------------------------------------------------------------
# Root Logger Initialization
# -----------------------------------------------------------------------------

def configure_logging(level: str = "INFO") -> None:
    """
    Configure root logging settings.

    Parameters:
        level (str): "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"

    Behavior:
    - Sets logging format globally.
    - Ensures logs stream to stdout (Uvicorn picks this up).
    - Should be called ONCE, in `main.py` at app startup.
    """
    resolved = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        level=resolved,
        format=LOG_FORMAT
    )

    if resolved > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info("Logging initialized with level %s", level)

# -----------------------------------------------------------------------------
# Logger Access Helper
# -----------------------------------------------------------------------------

def get_logger(name: str) -> logging.Logger:
    """
    Return a logger instance to be used in any module.

    In any module:
        from orgservice.core.logging import get_logger
        logger = get_logger(__name__)
    """
    return logging.getLogger(name)
