"""Logging configuration with Rich formatting.

Every package logger lives under the `marketing_agent` namespace; the SDK and
HTTP client loggers are held at WARNING so request chatter stays out of the console.
"""

import logging
from typing import Optional

from rich.logging import RichHandler
from .config import get_settings

ROOT_LOGGER = "marketing_agent"
NOISY_LOGGERS = ("httpx", "httpcore", "anthropic", "openai")

def setup_logging(level: Optional[str] = None):
    """Installs the Rich handler once. `level` overrides LOG_LEVEL (the CLI's --log-level)."""
    logging.basicConfig(
        level=(level or get_settings().LOG_LEVEL).upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

def get_logger(name: str) -> logging.Logger:
    """get_logger("fetch") -> the `marketing_agent.fetch` logger."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
