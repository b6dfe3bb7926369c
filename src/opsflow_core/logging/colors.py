"""ANSI color codes for terminal output.

All colors use the 256-color palette.

Usage:
    from opsflow_core.logging.colors import GREEN, RESET

    print(f"{GREEN}Step completed{RESET}")
"""

RESET = "\033[0m"

# Status
GREEN = "\033[38;5;82m"  # Success
RED = "\033[38;5;196m"  # Failure
YELLOW = "\033[38;5;226m"  # Warnings / skips

# Information
LIGHT_BLUE = "\033[38;5;153m"  # Context data
CYAN = "\033[38;5;51m"  # Info
MAGENTA = "\033[38;5;201m"  # Run-level events
ORANGE = "\033[38;5;208m"  # Action-level events

__all__ = [
    "RESET",
    "GREEN",
    "RED",
    "YELLOW",
    "LIGHT_BLUE",
    "CYAN",
    "MAGENTA",
    "ORANGE",
]
