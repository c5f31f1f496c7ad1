"""
logger.py: Logging setup for the fullsend package.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional


class NdjsonFormatter(logging.Formatter):
    """Emit one JSON object per log line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname.lower(),
            "logger": record.name,
            "msg": record.getMessage(),
        }
        data = getattr(record, "data", None)
        if data:
            entry["data"] = data
        return json.dumps(entry, default=str)


class HumanFormatter(logging.Formatter):
    """Compact one-line format for terminal display."""

    COLORS = {
        "DEBUG": "\033[90m",
        "INFO": "\033[36m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[1;31m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, "")
        ts = datetime.now().strftime("%H:%M:%S")
        name = record.name.replace("fullsend.", "")
        suffix = ""
        data = getattr(record, "data", None)
        if data:
            suffix = f"  {json.dumps(data, default=str)}"
        return f"{color}{ts} [{record.levelname[0]}] {name}: {record.getMessage()}{suffix}{self.RESET}"


def setup_logging(level: str = "info", log_file: Optional[str] = None):
    """Configure the fullsend root logger."""
    root = logging.getLogger("fullsend")
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(HumanFormatter())
    root.addHandler(console)

    if log_file:
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setFormatter(NdjsonFormatter())
        root.addHandler(fh)


def get_logger(name: str) -> logging.Logger:
    """Return a child logger under the fullsend namespace."""
    return logging.getLogger(f"fullsend.{name}")
