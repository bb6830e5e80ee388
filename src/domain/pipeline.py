"""
Ordered pipeline steps with a per-step failure policy.

Both pipelines are plain lists of Step values executed front to back.
Keeping the order and the abort/tolerate policy as data lets the
policy be read and tested without running any external program.

    ABORT             any exception stops the run and propagates
    TOLERATE_MISSING  FileNotFoundError is treated as success,
                      any other exception stops the run and propagates

Completed steps are never rolled back.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from .ports import OnFailure

logger = logging.getLogger(__name__)

ContextT = TypeVar("ContextT")


@dataclass(frozen=True)
class Step(Generic[ContextT]):
    """A named action over a shared run context."""

    name: str
    action: Callable[[ContextT], None]
    on_failure: OnFailure = OnFailure.ABORT


def run_steps(steps: Sequence[Step[ContextT]], context: ContextT, label: str) -> list[str]:
    """
    Execute steps in order, stopping at the first non-tolerated error.

    Args:
        steps: Statically ordered steps
        context: Object passed to every step action
        label: Prefix for log lines, usually the domain name

    Returns:
        Names of the steps that completed, in order

    Raises:
        Exception: Whatever the failing step raised
    """
    completed: list[str] = []
    for step in steps:
        logger.info("[%s] %s", label, step.name)
        try:
            step.action(context)
        except FileNotFoundError as e:
            if step.on_failure is not OnFailure.TOLERATE_MISSING:
                raise
            logger.debug("[%s] %s: nothing to remove (%s)", label, step.name, e.filename)
        completed.append(step.name)
    return completed
