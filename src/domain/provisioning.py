"""
Provisioning pipeline - brings a user's domain online.

Step order (linear, no branching):

    1. certificates       external: certificate script
    2. TLSA record        external: TLSA script, stdout is the record value
    3. zone file          template
    4. DNSSEC key         external: key generator, stdout is the key base name
    5. Corefile           template
    6. DS record          external: DS derivation, "<domain>. IN DS " stripped
    7. reverse proxy      template + external validation (deleted if invalid)
    8. restart name server
    9. reload reverse proxy
   10. result message     template

The first failing step aborts the run. Artifacts from earlier steps are
left on disk so the user can see how far the run got.
"""

import logging
from dataclasses import dataclass

from . import toolchain as tools
from .invoker import ToolInvoker
from .layout import ArtifactLayout, write_artifact
from .pipeline import Step, run_steps
from .templates import (
    render_caddyfile,
    render_corefile,
    render_success_message,
    render_zone,
)
from .toolchain import Toolchain

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ZoneRecords:
    """Static records published for every domain (NS, A and AAAA)."""

    ns: str
    a: str
    aaaa: str


@dataclass
class ProvisioningRun:
    """Values produced by earlier steps and consumed by later ones."""

    domain: str
    tlsa_record: str = ""
    key_name: str = ""
    ds_record: str = ""
    message: str = ""


@dataclass
class ProvisioningPipeline:
    """
    Domain service creating every artifact for a domain.

    Orchestrates external tools and templates in a fixed order;
    all program execution goes through the injected ToolInvoker.
    """

    invoker: ToolInvoker
    layout: ArtifactLayout
    records: ZoneRecords
    toolchain: Toolchain

    @property
    def steps(self) -> list[Step[ProvisioningRun]]:
        return [
            Step("Generating certificates", self._generate_certificates),
            Step("Generating TLSA record", self._generate_tlsa_record),
            Step("Creating zone file", self._create_zone_file),
            Step("Generating DNSSEC key", self._generate_dnssec_key),
            Step("Generating Corefile", self._generate_corefile),
            Step("Generating DS record", self._generate_ds_record),
            Step("Generating reverse proxy config", self._generate_proxy_config),
            Step("Restarting name server", self._restart_nameserver),
            Step("Reloading reverse proxy", self._reload_proxy),
            Step("Composing result message", self._compose_message),
        ]

    def provision(self, domain: str) -> str:
        """
        Provision a domain.

        Args:
            domain: Domain name, taken verbatim from the home directory name

        Returns:
            Success message to show the user

        Raises:
            PipelineError: If an external tool fails or the proxy config is invalid
            OSError: If an artifact cannot be written
        """
        logger.info("Creating domain %s", domain)
        run = ProvisioningRun(domain=domain)
        run_steps(self.steps, run, domain)
        logger.info("Domain %s created", domain)
        return run.message

    def _generate_certificates(self, run: ProvisioningRun) -> None:
        tools.generate_certificates(self.invoker, self.toolchain, run.domain)

    def _generate_tlsa_record(self, run: ProvisioningRun) -> None:
        run.tlsa_record = tools.generate_tlsa_record(self.invoker, self.toolchain, run.domain)

    def _create_zone_file(self, run: ProvisioningRun) -> None:
        zone = render_zone(
            run.domain,
            run.tlsa_record,
            ns=self.records.ns,
            a=self.records.a,
            aaaa=self.records.aaaa,
        )
        write_artifact(self.layout.zone_file(run.domain), zone)

    def _generate_dnssec_key(self, run: ProvisioningRun) -> None:
        run.key_name = tools.generate_dnssec_key(
            self.invoker, self.toolchain, self.layout.keys_dir, run.domain
        )

    def _generate_corefile(self, run: ProvisioningRun) -> None:
        corefile = render_corefile(
            run.domain,
            zone_file=self.layout.zone_file(run.domain),
            key_file=self.layout.keys_dir / run.key_name,
        )
        write_artifact(self.layout.corefile(run.domain), corefile)

    def _generate_ds_record(self, run: ProvisioningRun) -> None:
        run.ds_record = tools.generate_ds_record(
            self.invoker, self.toolchain, run.domain, self.layout.key_file(run.key_name)
        )

    def _generate_proxy_config(self, run: ProvisioningRun) -> None:
        path = self.layout.proxy_config(run.domain)
        caddyfile = render_caddyfile(
            run.domain,
            document_root=self.layout.document_root(run.domain),
            certificate=self.layout.certificate(run.domain),
            private_key=self.layout.private_key(run.domain),
        )
        write_artifact(path, caddyfile)
        tools.validate_proxy_config(self.invoker, self.toolchain, path)

    def _restart_nameserver(self, run: ProvisioningRun) -> None:
        tools.restart_nameserver(self.invoker, self.toolchain)

    def _reload_proxy(self, run: ProvisioningRun) -> None:
        tools.reload_proxy(self.invoker, self.toolchain)

    def _compose_message(self, run: ProvisioningRun) -> None:
        run.message = render_success_message(
            run.domain,
            ns=self.records.ns,
            ds=run.ds_record,
            a=self.records.a,
            aaaa=self.records.aaaa,
            tlsa=run.tlsa_record,
        )
