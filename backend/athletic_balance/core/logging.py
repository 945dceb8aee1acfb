import logging

from athletic_balance.core.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False


def configure_logging(settings: Settings) -> None:
    global _configured
    if _configured:
        return
    logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT)
    _configured = True


def preview(text: str | None, limit: int = 100) -> str:
    """Shorten user-supplied text before it reaches a log line."""
    if not text:
        return ""
    return text if len(text) <= limit else text[:limit] + "..."
