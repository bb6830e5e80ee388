"""
External tool invoker - the single path every pipeline step uses to
run a program.

Wraps a CommandRunner port so the pipelines can be exercised with a
fake runner and no real subprocesses.
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from .exceptions import ExternalCommandFailure
from .ports import CommandResult, CommandRunner

logger = logging.getLogger(__name__)


@dataclass
class ToolInvoker:
    """Runs external tools and enforces the exit status contract."""

    runner: CommandRunner

    def run(
        self,
        program: str,
        args: Sequence[str] = (),
        env: Mapping[str, str] | None = None,
    ) -> CommandResult:
        """Run a program and return its result without judging the exit status."""
        logger.debug("Running %s %s", program, " ".join(args))
        result = self.runner.run(program, list(args), env)
        logger.debug("%s exited with status %s", program, result.returncode)
        return result

    def invoke(
        self,
        description: str,
        program: str,
        args: Sequence[str] = (),
        env: Mapping[str, str] | None = None,
    ) -> str:
        """
        Run a program that must succeed.

        Args:
            description: Human readable failure prefix, e.g. "Failed to restart CoreDNS"
            program: Executable name or path
            args: Program arguments
            env: Extra environment variables

        Returns:
            Standard output, trimmed of surrounding whitespace

        Raises:
            ExternalCommandFailure: If the program exits with a non-zero status
        """
        result = self.run(program, args, env)
        if not result.ok:
            raise ExternalCommandFailure(description, program, result.returncode, result.stderr)
        return result.stdout.strip()
