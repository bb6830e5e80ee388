"""Watcher adapters - Filesystem event sources."""

from .watchdog_source import WatchdogEventSource

__all__ = ["WatchdogEventSource"]
