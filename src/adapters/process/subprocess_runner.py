"""
Subprocess command runner - Implements CommandRunner protocol.

Runs programs synchronously with the standard library subprocess
module, capturing output as text. The daemon blocks until the program
exits. There is no timeout: a hung tool stalls the loop.
"""

import logging
import os
import subprocess
from collections.abc import Mapping, Sequence

from src.domain.ports import CommandResult

logger = logging.getLogger(__name__)


class SubprocessCommandRunner:
    """
    Implements CommandRunner protocol via subprocess.run.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, cwd: str | None = None) -> None:
        """
        Initialize runner.

        Args:
            cwd: Working directory for every program, e.g. where the
                certificate and TLSA scripts live. None keeps the daemon's.
        """
        self._cwd = cwd

    def run(
        self,
        program: str,
        args: Sequence[str],
        env: Mapping[str, str] | None = None,
    ) -> CommandResult:
        """
        Run a program to completion.

        Extra variables in env are layered over the daemon's environment.
        A program that cannot be started is reported like a failed one,
        with exit status 127 and the OS error as stderr.
        """
        merged_env = {**os.environ, **env} if env else None
        try:
            completed = subprocess.run(
                [program, *args],
                capture_output=True,
                text=True,
                env=merged_env,
                cwd=self._cwd,
            )
        except OSError as e:
            logger.error("Could not start %s: %s", program, e)
            return CommandResult(returncode=127, stdout="", stderr=str(e))

        return CommandResult(
            returncode=completed.returncode,
            stdout=completed.stdout,
            stderr=completed.stderr,
        )
