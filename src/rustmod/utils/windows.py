"""Windows compatibility utilities."""

import logging
import os
import sys

logger = logging.getLogger(__name__)


def is_windows() -> bool:
    """Check if running on Windows.

    Returns:
        True if running on Windows, False otherwise.
    """
    return sys.platform == "win32"


def configure_console() -> None:
    """Configure console for UTF-8 encoding on Windows.

    Module paths and identifiers are echoed back to the console, so the
    console must accept any character a path can hold.

    On non-Windows platforms, this is a no-op.
    """
    if not is_windows():
        return

    os.environ.setdefault("PYTHONIOENCODING", "utf-8")

    try:
        sys.stdout.reconfigure(encoding="utf-8", errors="replace")
        sys.stderr.reconfigure(encoding="utf-8", errors="replace")
    except (AttributeError, ValueError) as e:
        # Replaced or detached streams (e.g. under a test runner)
        logger.debug(f"Console reconfigure not available: {e}")
