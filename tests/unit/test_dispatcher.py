"""
Unit tests for TriggerDispatcher.

Tests use mocked pipelines to verify:
- Only create events for trigger paths reach a pipeline
- Root-owned triggers are never processed, modified or deleted
- Exactly one status outcome per run
- Failures are reported into the trigger and never escape
"""

from pathlib import Path
from unittest.mock import Mock

import pytest

from src.domain import triggers
from src.domain.dispatcher import TriggerDispatcher
from src.domain.exceptions import ExternalCommandFailure
from src.domain.ports import EventKind, FileEvent, TriggerKind
from src.domain.status import StatusReporter


@pytest.fixture
def home(tmp_path: Path) -> Path:
    for user in ("alice", "bob"):
        (tmp_path / user).mkdir()
    return tmp_path


@pytest.fixture
def user_owned(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(triggers, "owner_uid", lambda path: 1000)


@pytest.fixture
def dispatcher(home: Path) -> TriggerDispatcher:
    provisioning = Mock()
    provisioning.provision.return_value = "Domain alice added successfully!"
    return TriggerDispatcher(
        watch_root=str(home),
        provisioning=provisioning,
        decommission=Mock(),
        reporter=StatusReporter(),
    )


def created(*paths: Path) -> FileEvent:
    return FileEvent(kind=EventKind.CREATE, paths=tuple(str(p) for p in paths))


@pytest.mark.usefixtures("user_owned")
class TestDispatch:
    """Tests for routing user-owned triggers."""

    def test_create_trigger_provisions(self, dispatcher: TriggerDispatcher, home: Path) -> None:
        """.domain runs provisioning and stores the success message."""
        trigger = home / "alice" / ".domain"
        trigger.touch()

        dispatched = dispatcher.handle_event(created(trigger))

        dispatcher.provisioning.provision.assert_called_once_with("alice")
        dispatcher.decommission.decommission.assert_not_called()
        assert trigger.read_text() == "Domain alice added successfully!"
        assert [t.kind for t in dispatched] == [TriggerKind.CREATE]

    def test_remove_trigger_decommissions(self, dispatcher: TriggerDispatcher, home: Path) -> None:
        """.remove-domain runs decommission and deletes the trigger."""
        trigger = home / "bob" / ".remove-domain"
        trigger.touch()

        dispatcher.handle_event(created(trigger))

        dispatcher.decommission.decommission.assert_called_once_with("bob")
        assert not trigger.exists()

    def test_provision_failure_written(self, dispatcher: TriggerDispatcher, home: Path) -> None:
        """A failed provisioning run leaves the error in the trigger."""
        trigger = home / "alice" / ".domain"
        trigger.touch()
        dispatcher.provisioning.provision.side_effect = ExternalCommandFailure(
            "Failed to generate certificates", "bash", 1, "rate limited"
        )

        dispatcher.handle_event(created(trigger))

        assert trigger.read_text() == "Error: Failed to generate certificates: rate limited"

    def test_decommission_failure_keeps_trigger(self, dispatcher: TriggerDispatcher, home: Path) -> None:
        """A failed removal overwrites the trigger with the error instead of deleting it."""
        trigger = home / "bob" / ".remove-domain"
        trigger.touch()
        dispatcher.decommission.decommission.side_effect = PermissionError(13, "Permission denied")

        dispatcher.handle_event(created(trigger))

        assert trigger.read_text() == "Error: [Errno 13] Permission denied"

    def test_unexpected_error_does_not_escape(self, dispatcher: TriggerDispatcher, home: Path) -> None:
        """Any exception from a run is reported, not raised."""
        trigger = home / "alice" / ".domain"
        trigger.touch()
        dispatcher.provisioning.provision.side_effect = RuntimeError("unexpected")

        dispatcher.handle_event(created(trigger))

        assert trigger.read_text() == "Error: unexpected"

    def test_multiple_paths_in_order(self, dispatcher: TriggerDispatcher, home: Path) -> None:
        """Each path of one event is handled, in delivery order."""
        first = home / "alice" / ".domain"
        second = home / "bob" / ".remove-domain"
        first.touch()
        second.touch()

        dispatched = dispatcher.handle_event(created(first, second))

        assert [t.domain for t in dispatched] == ["alice", "bob"]

    def test_non_create_events_ignored(self, dispatcher: TriggerDispatcher, home: Path) -> None:
        """Modify and delete events never start a pipeline."""
        trigger = home / "alice" / ".domain"
        trigger.touch()

        for kind in (EventKind.MODIFY, EventKind.DELETE, EventKind.MOVE, EventKind.OTHER):
            assert dispatcher.handle_event(FileEvent(kind=kind, paths=(str(trigger),))) == []

        dispatcher.provisioning.provision.assert_not_called()

    def test_non_trigger_paths_ignored(self, dispatcher: TriggerDispatcher, home: Path) -> None:
        """Other created files are ignored."""
        other = home / "alice" / "notes.txt"
        other.touch()

        assert dispatcher.handle_event(created(other)) == []

    def test_serve_consumes_all_events(self, dispatcher: TriggerDispatcher, home: Path) -> None:
        """serve handles events until the source is exhausted."""
        first = home / "alice" / ".domain"
        second = home / "bob" / ".domain"
        first.touch()
        second.touch()

        dispatcher.serve([created(first), created(second)])

        assert dispatcher.provisioning.provision.call_count == 2

    def test_vanished_trigger_on_report(self, dispatcher: TriggerDispatcher, home: Path) -> None:
        """A trigger deleted mid-run does not break the loop."""
        trigger = home / "alice" / ".domain"
        trigger.touch()

        def remove_home(domain: str) -> str:
            trigger.unlink()
            trigger.parent.rmdir()
            return "ok"

        dispatcher.provisioning.provision.side_effect = remove_home

        dispatcher.handle_event(created(trigger))

        assert not trigger.exists()


class TestRootOwnedTriggers:
    """Tests for the ownership guard inside dispatch."""

    @pytest.mark.parametrize("name", [".domain", ".remove-domain"])
    def test_root_owned_ignored(
        self, dispatcher: TriggerDispatcher, home: Path, monkeypatch: pytest.MonkeyPatch, name: str
    ) -> None:
        """Root-owned triggers are neither processed, modified nor deleted."""
        monkeypatch.setattr(triggers, "owner_uid", lambda path: 0)
        trigger = home / "alice" / name
        trigger.write_text("from root")

        assert dispatcher.handle_event(created(trigger)) == []

        dispatcher.provisioning.provision.assert_not_called()
        dispatcher.decommission.decommission.assert_not_called()
        assert trigger.read_text() == "from root"


@pytest.mark.usefixtures("user_owned")
class TestSymlinkTriggers:
    """Tests for triggers pointing at other users' files."""

    @pytest.mark.parametrize("name", [".domain", ".remove-domain"])
    def test_symlink_target_untouched(self, dispatcher: TriggerDispatcher, home: Path, name: str) -> None:
        """A symlinked trigger is not processed and its target is not written or deleted."""
        victim = home / "bob" / ".bashrc"
        victim.write_text("bob's precious file")
        link = home / "alice" / name
        link.symlink_to(victim)

        assert dispatcher.handle_event(created(link)) == []

        dispatcher.provisioning.provision.assert_not_called()
        dispatcher.decommission.decommission.assert_not_called()
        assert victim.read_text() == "bob's precious file"
        assert link.is_symlink()
