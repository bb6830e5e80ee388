"""
Trigger classification and ownership checks.

A trigger is a marker file created directly inside a user's home
directory under the watched root:

    <root>/<user>/.domain          -> provision <user>
    <root>/<user>/.remove-domain   -> decommission <user>

The domain name is the <user> segment, used verbatim. Any other path,
including the same file names deeper in the tree, is not a trigger.
"""

import logging
import os
import stat
from dataclasses import dataclass
from pathlib import PurePosixPath

from .ports import TriggerKind

logger = logging.getLogger(__name__)

SUPERUSER_UID = 0

TRIGGER_FILENAMES = {
    ".domain": TriggerKind.CREATE,
    ".remove-domain": TriggerKind.REMOVE,
}


@dataclass(frozen=True)
class Trigger:
    """A classified trigger file together with its owner."""

    path: str
    kind: TriggerKind
    domain: str
    owner_uid: int


def classify_path(root: str, path: str) -> tuple[TriggerKind, str] | None:
    """
    Match a created path against the two trigger shapes.

    Args:
        root: Watched root directory
        path: Path reported by the event source

    Returns:
        (kind, domain) on a match, None for any other path
    """
    try:
        relative = PurePosixPath(os.path.normpath(path)).relative_to(os.path.normpath(root))
    except ValueError:
        return None

    parts = relative.parts
    if len(parts) != 2:
        return None

    domain, filename = parts
    kind = TRIGGER_FILENAMES.get(filename)
    if kind is None or not domain:
        return None
    return kind, domain


def owner_uid(path: str) -> int:
    """Owner of the trigger itself; a symlink is not followed."""
    return os.lstat(path).st_uid


def is_regular_file(path: str) -> bool:
    return stat.S_ISREG(os.lstat(path).st_mode)


def is_trusted_owner(uid: int) -> bool:
    """Only unprivileged users may request a domain."""
    return uid != SUPERUSER_UID


def inspect_trigger(root: str, path: str) -> Trigger | None:
    """
    Classify a path and apply the ownership guard.

    Root-owned triggers are ignored without touching the file, so a
    privileged process cannot impersonate a user request. Symlinks and
    other non-regular files are ignored as well: the daemon writes the
    outcome into the trigger, and must never write through a link.

    Returns:
        Trigger ready for dispatch, or None when the path must be ignored
    """
    match = classify_path(root, path)
    if match is None:
        return None
    kind, domain = match

    try:
        if not is_regular_file(path):
            logger.debug("Ignoring %s trigger %s: not a regular file", kind.value, path)
            return None
        uid = owner_uid(path)
    except FileNotFoundError:
        logger.debug("Trigger %s vanished before it could be inspected", path)
        return None

    if not is_trusted_owner(uid):
        logger.debug("Ignoring %s trigger %s: owned by uid %s", kind.value, path, uid)
        return None

    return Trigger(path=path, kind=kind, domain=domain, owner_uid=uid)
