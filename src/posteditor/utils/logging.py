"""Structured logging setup for Posteditor.

Every editor event is one JSON line in the log file, so the dirty-state
decisions and upload patches behind a session can be replayed with jq.
"""

import structlog
from pathlib import Path
from typing import Any, Optional
import os

LOG_LEVEL_ENV = "POSTEDIT_LOG_LEVEL"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def resolve_log_level(verbose: bool = False, environ: Optional[dict] = None) -> str:
    """Pick the log level: --verbose wins, then POSTEDIT_LOG_LEVEL, then INFO."""
    if verbose:
        return "DEBUG"
    environ = os.environ if environ is None else environ
    level = environ.get(LOG_LEVEL_ENV, "INFO").upper()
    return level if level in LOG_LEVELS else "INFO"


def default_log_file() -> Path:
    return Path.home() / ".cache" / "posteditor" / "logs" / "posteditor.log"


def configure_logging(verbose: bool = False, log_file: Optional[Path] = None) -> None:
    """
    Send structlog output to a JSON log file.

    What each level shows:
    - DEBUG: why the dirty flag flipped, replacement spans, unattachable anchors
    - INFO: posts loaded and saved, images stored and patched
    - WARNING: requests the editor ignored (unknown save type, no buffer)
    - ERROR: failed saves and uploads

    Args:
        verbose: Log at DEBUG whatever POSTEDIT_LOG_LEVEL says
        log_file: Destination (default ~/.cache/posteditor/logs/posteditor.log)

    Example:
        POSTEDIT_LOG_LEVEL=DEBUG posteditor edit hello-world
        jq 'select(.event == "dirty_state_recomputed")' ~/.cache/posteditor/logs/posteditor.log
    """
    log_file = log_file or default_log_file()
    log_file.parent.mkdir(parents=True, exist_ok=True)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(resolve_log_level(verbose)),
        context_class=dict,
        logger_factory=structlog.WriteLoggerFactory(file=open(log_file, "a")),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:
    """Named structlog logger, e.g. ``get_logger(__name__).info("post_saved", slug=slug)``."""
    return structlog.get_logger(name)
