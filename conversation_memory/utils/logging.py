"""Logging configuration."""

import logging
import sys
from pathlib import Path


def setup_logging(config: dict) -> logging.Logger:
    """Setup logging on stderr, plus server.log unless disabled.

    stdout carries the STDIO protocol, so nothing may log there.
    """
    log_level = getattr(logging, config["logging"]["level"])
    log_format = config["logging"]["format"]

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config["logging"].get("file_enabled", True):
        log_dir = Path(config["logging"]["log_dir"])
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_dir / "server.log"))

    logging.basicConfig(level=log_level, format=log_format, handlers=handlers)

    logger = logging.getLogger("conversation_memory")
    logger.info("Logging initialized")
    return logger
