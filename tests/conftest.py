"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- A scripted fake CommandRunner recording every invocation
- Artifact layouts rooted in a temporary directory
- Settings built without reading the real environment file
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from src.config.settings import Settings
from src.domain.invoker import ToolInvoker
from src.domain.layout import ArtifactLayout
from src.domain.ports import CommandResult
from src.domain.toolchain import Toolchain

TLSA = "3 1 1 ABCDEF"
KEY_NAME = "Kalice.example.+013+12345"
DS_OUTPUT = "alice.example. IN DS 12345 13 2 ABCDEF0123\n"


@dataclass
class Invocation:
    program: str
    args: list[str]
    env: dict[str, str] | None

    @property
    def command_line(self) -> str:
        return " ".join([self.program, *self.args])


@dataclass
class FakeCommandRunner:
    """
    CommandRunner double.

    responses maps a substring of the command line to the result
    returned when it matches; the first match wins and anything
    unmatched succeeds with empty output.
    """

    responses: dict[str, CommandResult] = field(default_factory=dict)
    calls: list[Invocation] = field(default_factory=list)

    def run(
        self,
        program: str,
        args: Sequence[str],
        env: Mapping[str, str] | None = None,
    ) -> CommandResult:
        invocation = Invocation(program, list(args), dict(env) if env is not None else None)
        self.calls.append(invocation)
        for fragment, result in self.responses.items():
            if fragment in invocation.command_line:
                return result
        return CommandResult(returncode=0)

    @property
    def command_lines(self) -> list[str]:
        return [call.command_line for call in self.calls]

    def fail(self, fragment: str, stderr: str = "boom", returncode: int = 1) -> None:
        others = {key: value for key, value in self.responses.items() if key != fragment}
        self.responses = {fragment: CommandResult(returncode, "", stderr), **others}


def happy_path_responses() -> dict[str, CommandResult]:
    return {
        "tlsa.sh": CommandResult(0, f"{TLSA}\n"),
        "dnssec-keygen": CommandResult(0, f"{KEY_NAME}\n"),
        "dnssec-dsfromkey": CommandResult(0, DS_OUTPUT),
    }


@pytest.fixture
def runner() -> FakeCommandRunner:
    """Fake runner that answers the provisioning tools like the real ones."""
    return FakeCommandRunner(responses=happy_path_responses())


@pytest.fixture
def invoker(runner: FakeCommandRunner) -> ToolInvoker:
    return ToolInvoker(runner)


@pytest.fixture
def toolchain() -> Toolchain:
    return Toolchain()


@pytest.fixture
def layout(tmp_path: Path) -> ArtifactLayout:
    """Artifact layout with every directory under tmp_path."""
    return ArtifactLayout(
        watch_root=tmp_path / "home",
        coredns_dir=tmp_path / "coredns",
        caddy_dir=tmp_path / "caddy",
        certificate_dir=tmp_path / "certs",
    )


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing every location into tmp_path."""
    return Settings(
        _env_file=None,
        ns="ns1.pubnix.",
        a="192.0.2.10",
        aaaa="2001:db8::10",
        watch_root=tmp_path / "home",
        coredns_dir=tmp_path / "coredns",
        caddy_dir=tmp_path / "caddy",
        certificate_dir=tmp_path / "certs",
    )
