import logging
from rich.logging import RichHandler

from utils.settings import get_settings

def get_logger(name: str) -> logging.Logger:
    # Safe to call multiple times; basicConfig is a no-op once the root logger has handlers.
    s = get_settings()
    logging.basicConfig(
        level=s.log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=s.log_rich_tracebacks)],
    )
    return logging.getLogger(name)
