# Ghost - ghost_logger.py
# Copyright (C) 2026 The Ghost Contributors

import logging
import sys
from datetime import datetime

RESET = "\033[0m"
DIM = "\033[2m"
RED = "\033[91m"
YELLOW = "\033[93m"
BLUE = "\033[94m"
MAGENTA = "\033[95m"
CYAN = "\033[96m"
WHITE = "\033[97m"

# First keyword found in the lowercased message picks the style.
KEYWORD_STYLES = [
    ("error", RED, "✖"),
    ("negation", BLUE, "¬"),
    ("grounding", MAGENTA, "≔"),
    ("say", CYAN, "✓"),
    ("initializing", YELLOW, "⟳"),
    ("starting", YELLOW, "⟳"),
]


class GhostFormatter(logging.Formatter):
    """Console lines as `<12h time> <icon> <message>`, coloured by what the core is doing."""

    def style_for(self, record) -> tuple[str, str]:
        if record.levelno >= logging.ERROR:
            return RED, "✖"
        lower_msg = record.getMessage().lower()
        for keyword, color, icon in KEYWORD_STYLES:
            if keyword in lower_msg:
                return color, icon
        return WHITE, "•"

    def format(self, record):
        timestamp = datetime.fromtimestamp(record.created).strftime("%I:%M:%S%p")
        color, icon = self.style_for(record)
        return f"{DIM}{timestamp}{RESET} {color}{icon} {record.getMessage()}{RESET}"


def setup_logger(level=logging.INFO):
    """Route the root logger through GhostFormatter; safe to call more than once."""
    root = logging.getLogger()
    root.setLevel(level)

    if root.hasHandlers():
        root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(GhostFormatter())
    root.addHandler(handler)

    logging.getLogger("werkzeug").setLevel(logging.ERROR)
