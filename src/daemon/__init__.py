"""Daemon entry point - wiring and the driving loop."""
