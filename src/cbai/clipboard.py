"""System clipboard write access."""

from __future__ import annotations

import pyperclip


def copy_to_clipboard(text: str) -> None:
    """Place text on the system clipboard.

    Raises:
        RuntimeError: If no clipboard mechanism is available
    """
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        raise RuntimeError(f"Could not copy to clipboard: {e}") from e
