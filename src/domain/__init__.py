"""
Domain layer - Pure orchestration logic with zero framework imports.

This package contains the trigger handling and the provisioning and
decommission pipelines for user domains. It defines its own port
interfaces for infrastructure abstraction, so the pipelines run the
same against real subprocesses or a fake runner.
"""

from .decommission import DecommissionPipeline
from .dispatcher import TriggerDispatcher
from .exceptions import ExternalCommandFailure, PipelineError, ValidationFailure
from .invoker import ToolInvoker
from .layout import ArtifactLayout
from .ports import (
    CommandResult,
    CommandRunner,
    EventKind,
    EventSource,
    FileEvent,
    OnFailure,
    TriggerKind,
)
from .provisioning import ProvisioningPipeline, ZoneRecords
from .status import StatusReporter
from .toolchain import Toolchain
from .triggers import Trigger

__all__ = [
    "ArtifactLayout",
    "CommandResult",
    "CommandRunner",
    "DecommissionPipeline",
    "EventKind",
    "EventSource",
    "ExternalCommandFailure",
    "FileEvent",
    "OnFailure",
    "PipelineError",
    "ProvisioningPipeline",
    "StatusReporter",
    "ToolInvoker",
    "Toolchain",
    "Trigger",
    "TriggerDispatcher",
    "TriggerKind",
    "ValidationFailure",
    "ZoneRecords",
]
