import logging
import os
import json
from datetime import UTC, datetime
from typing import Optional
from colorama import Fore, Style, init

init(autoreset=True)


class ColoredFormatter(logging.Formatter):
    """Colored formatter for console output"""

    COLORS = {
        "DEBUG": Fore.CYAN,
        "INFO": Fore.BLUE,
        "WARNING": Fore.YELLOW,
        "ERROR": Fore.RED,
        "CRITICAL": Fore.MAGENTA + Style.BRIGHT,
    }

    def format(self, record):
        record.levelname_colored = (
            self.COLORS.get(record.levelname, Fore.WHITE)
            + record.levelname
            + Style.RESET_ALL
        )
        return super().format(record)


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured request logging"""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "event_type": getattr(record, "event_type", "general"),
            "event_data": getattr(record, "event_data", {}),
        }

        # Add exception info if present
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, ensure_ascii=False)


def setup_logger(
    name="storefront",
    level=logging.INFO,
    log_file: Optional[str] = "data/logs/storefront.log",
    console=True,
    structured=False,
):
    """Setup logger with file and console handlers"""

    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Avoid duplicate handlers
    if logger.hasHandlers():
        logger.handlers.clear()

    # File handler
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        if structured:
            file_handler.setFormatter(StructuredFormatter())
        else:
            file_handler.setFormatter(
                logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
            )
        logger.addHandler(file_handler)

    # Console handler
    if console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(
            ColoredFormatter("%(asctime)s - %(levelname_colored)s - %(name)s - %(message)s")
        )
        logger.addHandler(console_handler)

    return logger


def log_storefront_event(
    event_type: str, message: str, event_data: Optional[dict] = None, level: str = "INFO"
):
    """Log a storefront event with structured metadata attached to the record"""
    logger = logging.getLogger("storefront.events")
    logger.log(
        getattr(logging, level.upper(), logging.INFO),
        message,
        extra={"event_type": event_type, "event_data": event_data or {}},
    )


def get_logger(name: str) -> logging.Logger:
    """Get a child logger of the storefront root logger."""
    if name == "storefront" or name.startswith("storefront."):
        return logging.getLogger(name)
    return logging.getLogger(f"storefront.{name}")
