"""Error reporting for failures that happen before or outside logging.

The command line uses these helpers when configuration cannot be loaded (so
no logger exists yet) and when a build fails, so the user always sees a
readable message on stderr.
"""

import sys
from datetime import datetime
from typing import Any

from sundrop.exceptions import SundropError


def handle_startup_error(
    error_type: str, message: str, details: dict[str, Any] | None = None
) -> None:
    """Write a formatted error message to stderr.

    Args:
        error_type: Type of error (e.g., "Configuration Error", "Build Error")
        message: Main error message
        details: Optional dictionary of additional error details
    """
    timestamp = datetime.now().isoformat()

    sys.stderr.write(f"\n[{timestamp}] {error_type}: {message}\n")

    if details:
        sys.stderr.write("Details:\n")
        for key, value in details.items():
            sys.stderr.write(f"  {key}: {value}\n")

    sys.stderr.flush()


def handle_build_error(error: SundropError) -> None:
    """Report a failed build using the error's message and details.

    Args:
        error: The domain error that aborted the build
    """
    handle_startup_error(type(error).__name__, error.message, error.details)


def handle_keyboard_interrupt() -> None:
    """Handle keyboard interrupt gracefully."""
    sys.stderr.write("\n\nBuild interrupted by user (Ctrl+C)\n")
    sys.stderr.flush()


def handle_unexpected_error(error: Exception) -> None:
    """Handle errors that are not part of the sundrop error hierarchy.

    Args:
        error: The unexpected exception
    """
    timestamp = datetime.now().isoformat()
    sys.stderr.write(f"\n[{timestamp}] Unexpected Error: {type(error).__name__}: {error}\n")
    sys.stderr.write("This is likely a bug. Please report it with the full error details.\n")
    sys.stderr.flush()
