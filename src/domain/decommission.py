"""
Decommission pipeline - removes every artifact of a domain.

Runs the reverse of provisioning in a fixed order. Each removal treats
a missing file as already removed, so running it twice, or on a domain
that was never provisioned, succeeds. Any other filesystem error
(e.g. permission denied) aborts the run.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from . import toolchain as tools
from .invoker import ToolInvoker
from .layout import ArtifactLayout
from .pipeline import Step, run_steps
from .ports import OnFailure
from .toolchain import Toolchain

logger = logging.getLogger(__name__)

TOLERATE = OnFailure.TOLERATE_MISSING


def remove_files(paths: Iterable[Path]) -> None:
    """
    Unlink every path, then report the first one that was missing.

    Missing files do not stop the remaining removals.

    Raises:
        FileNotFoundError: If any path did not exist
        OSError: On any other failure, immediately
    """
    missing: FileNotFoundError | None = None
    for path in paths:
        try:
            path.unlink()
        except FileNotFoundError as e:
            missing = missing or e
    if missing is not None:
        raise missing


@dataclass
class DecommissionPipeline:
    """Domain service removing every artifact for a domain."""

    invoker: ToolInvoker
    layout: ArtifactLayout
    toolchain: Toolchain

    @property
    def steps(self) -> list[Step[str]]:
        return [
            Step("Removing certificates", self._remove_certificates, TOLERATE),
            Step("Removing zone file", self._remove_zone_file, TOLERATE),
            Step("Removing DNSSEC keys", self._remove_dnssec_keys, TOLERATE),
            Step("Removing Corefile", self._remove_corefile, TOLERATE),
            Step("Removing reverse proxy config", self._remove_proxy_config, TOLERATE),
            Step("Restarting name server", self._restart_nameserver),
            Step("Reloading reverse proxy", self._reload_proxy),
        ]

    def decommission(self, domain: str) -> None:
        """
        Decommission a domain.

        Raises:
            PipelineError: If a service reload fails
            OSError: If an artifact exists but cannot be removed
        """
        logger.info("Removing domain %s", domain)
        run_steps(self.steps, domain, domain)
        logger.info("Domain %s removed", domain)

    def _remove_certificates(self, domain: str) -> None:
        remove_files([self.layout.certificate(domain), self.layout.private_key(domain)])

    def _remove_zone_file(self, domain: str) -> None:
        remove_files([self.layout.zone_file(domain)])

    def _remove_dnssec_keys(self, domain: str) -> None:
        keys = self.layout.dnssec_keys(domain, self.toolchain.dnssec_algorithm)
        logger.debug("[%s] Found %d DNSSEC key files", domain, len(keys))
        remove_files(keys)

    def _remove_corefile(self, domain: str) -> None:
        remove_files([self.layout.corefile(domain)])

    def _remove_proxy_config(self, domain: str) -> None:
        remove_files([self.layout.proxy_config(domain)])

    def _restart_nameserver(self, domain: str) -> None:
        tools.restart_nameserver(self.invoker, self.toolchain)

    def _reload_proxy(self, domain: str) -> None:
        tools.reload_proxy(self.invoker, self.toolchain)
