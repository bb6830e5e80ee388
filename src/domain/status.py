"""
Status reporter - the trigger file is the only channel back to the user.

Exactly one outcome per pipeline run: success text written, error text
written, or the trigger deleted. Writes never follow a symlink, so a
trigger swapped for a link mid-run cannot redirect them.
"""

import logging
import os
from pathlib import Path

from .templates import render_error_message

logger = logging.getLogger(__name__)


def overwrite_trigger(trigger: str, text: str) -> None:
    """
    Replace the content of an existing trigger file.

    Raises:
        FileNotFoundError: If the trigger no longer exists
        OSError: If the trigger is a symlink (ELOOP) or not writable
    """
    fd = os.open(trigger, os.O_WRONLY | os.O_TRUNC | os.O_NOFOLLOW)
    with os.fdopen(fd, "w", encoding="utf-8") as f:
        f.write(text)


class StatusReporter:
    """Writes pipeline outcomes into trigger files."""

    def report_success(self, trigger: str, message: str) -> None:
        overwrite_trigger(trigger, message)

    def report_error(self, trigger: str, error: BaseException) -> None:
        """Overwrite the trigger with the error text and leave it for the user."""
        overwrite_trigger(trigger, render_error_message(error))

    def report_removed(self, trigger: str) -> None:
        """Delete the trigger; its absence tells the user the removal succeeded."""
        Path(trigger).unlink(missing_ok=True)
