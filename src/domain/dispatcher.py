"""
Trigger dispatcher - the per-event control flow of the daemon.

    event -> classify -> ownership guard -> pipeline -> status report

Events are handled one at a time and each path of an event is handled
to completion before the next. This serialization is what keeps two
pipeline runs from writing shared configuration directories or
reloading services concurrently.
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from .decommission import DecommissionPipeline
from .ports import EventKind, FileEvent, TriggerKind
from .provisioning import ProvisioningPipeline
from .status import StatusReporter
from .triggers import Trigger, inspect_trigger

logger = logging.getLogger(__name__)


@dataclass
class TriggerDispatcher:
    """Routes trigger files to the provisioning and decommission pipelines."""

    watch_root: str
    provisioning: ProvisioningPipeline
    decommission: DecommissionPipeline
    reporter: StatusReporter

    def serve(self, events: Iterable[FileEvent]) -> None:
        """Process events forever, in delivery order."""
        for event in events:
            self.handle_event(event)

    def handle_event(self, event: FileEvent) -> list[Trigger]:
        """
        Handle every path of one event.

        Returns:
            Triggers that were dispatched to a pipeline
        """
        if event.kind is not EventKind.CREATE:
            return []

        dispatched = []
        for path in event.paths:
            trigger = inspect_trigger(self.watch_root, path)
            if trigger is None:
                continue
            self.dispatch(trigger)
            dispatched.append(trigger)
        return dispatched

    def dispatch(self, trigger: Trigger) -> None:
        """
        Run the pipeline for a trigger and report its outcome.

        Never raises: a failing run is reported into the trigger file so
        the driving loop keeps serving other users.
        """
        logger.info("Accepted %s trigger for %s (uid %s)", trigger.kind.value, trigger.domain, trigger.owner_uid)
        try:
            if trigger.kind is TriggerKind.CREATE:
                message = self.provisioning.provision(trigger.domain)
            else:
                self.decommission.decommission(trigger.domain)
        except Exception as e:
            logger.error("Failed to %s domain %s: %s", trigger.kind.value, trigger.domain, e)
            self._report(self.reporter.report_error, trigger.path, e)
            return

        if trigger.kind is TriggerKind.CREATE:
            self._report(self.reporter.report_success, trigger.path, message)
        else:
            self._report(self.reporter.report_removed, trigger.path)

    def _report(self, report: Callable[..., None], path: str, *args: object) -> None:
        try:
            report(path, *args)
        except OSError as e:
            logger.error("Could not update trigger %s: %s", path, e)
