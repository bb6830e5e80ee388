"""Process adapters - External program execution."""

from .subprocess_runner import SubprocessCommandRunner

__all__ = ["SubprocessCommandRunner"]
