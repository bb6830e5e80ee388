"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class EventKind(str, Enum):
    """
    Kind of filesystem change reported by an event source.

    Only CREATE drives the pipelines; the other kinds are delivered
    so that adapters need not filter and are ignored by the dispatcher.
    """

    CREATE = "create"
    MODIFY = "modify"
    DELETE = "delete"
    MOVE = "move"
    OTHER = "other"


class TriggerKind(str, Enum):
    """Intent signalled by a trigger file."""

    CREATE = "create"
    REMOVE = "remove"


class OnFailure(Enum):
    """
    Failure policy of a single pipeline step.

    - ABORT: any error stops the pipeline
    - TOLERATE_MISSING: FileNotFoundError counts as success, anything else aborts
    """

    ABORT = "abort"
    TOLERATE_MISSING = "tolerate_missing"


@dataclass(frozen=True)
class FileEvent:
    """A filesystem change affecting one or more paths."""

    kind: EventKind
    paths: tuple[str, ...]


@dataclass(frozen=True)
class CommandResult:
    """Exit status and captured text output of a finished program."""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandRunner(Protocol):
    """Port interface for synchronous external program execution."""

    def run(
        self,
        program: str,
        args: Sequence[str],
        env: Mapping[str, str] | None = None,
    ) -> CommandResult:
        """
        Run a program to completion and capture its output.

        The caller blocks until the program exits. No timeout is applied.

        Args:
            program: Executable name or path
            args: Arguments passed after the program name
            env: Variables added on top of the daemon's own environment

        Returns:
            CommandResult with exit status, stdout and stderr as text
        """
        ...


class EventSource(Protocol):
    """Port interface for the filesystem event stream."""

    def __iter__(self) -> Iterator[FileEvent]:
        """
        Yield filesystem events in delivery order, forever.

        Events are consumed on the caller's thread only, so handling one
        event completes before the next one is read.
        """
        ...
