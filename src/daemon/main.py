"""
Daemon entry point and dependency wiring.

Builds the adapters from settings, then hands the watchdog event
stream to the dispatcher. Runs until the process is stopped.
"""

import logging

from src.adapters.process import SubprocessCommandRunner
from src.adapters.watcher import WatchdogEventSource
from src.config.settings import Settings, get_settings
from src.domain.decommission import DecommissionPipeline
from src.domain.dispatcher import TriggerDispatcher
from src.domain.invoker import ToolInvoker
from src.domain.layout import ArtifactLayout
from src.domain.ports import CommandRunner
from src.domain.provisioning import ProvisioningPipeline, ZoneRecords
from src.domain.status import StatusReporter
from src.domain.toolchain import Toolchain

logger = logging.getLogger(__name__)


def build_layout(settings: Settings) -> ArtifactLayout:
    return ArtifactLayout(
        watch_root=settings.watch_root,
        coredns_dir=settings.coredns_dir,
        caddy_dir=settings.caddy_dir,
        certificate_dir=settings.certificate_dir,
        document_root_name=settings.document_root_name,
    )


def build_toolchain(settings: Settings) -> Toolchain:
    return Toolchain(
        shell=settings.script_shell,
        certificate_script=settings.certificate_script,
        tlsa_script=settings.tlsa_script,
        dnssec_algorithm=settings.dnssec_algorithm,
        ds_digest=settings.ds_digest,
        nameserver_service=settings.nameserver_service,
        proxy_service=settings.proxy_service,
    )


def build_dispatcher(settings: Settings, runner: CommandRunner) -> TriggerDispatcher:
    """
    Wire the pipelines to a command runner.

    Tests pass a fake runner here; the daemon passes SubprocessCommandRunner.
    """
    invoker = ToolInvoker(runner)
    layout = build_layout(settings)
    toolchain = build_toolchain(settings)
    records = ZoneRecords(ns=settings.ns, a=settings.a, aaaa=settings.aaaa)

    return TriggerDispatcher(
        watch_root=str(settings.watch_root),
        provisioning=ProvisioningPipeline(invoker, layout, records, toolchain),
        decommission=DecommissionPipeline(invoker, layout, toolchain),
        reporter=StatusReporter(),
    )


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    """Start the daemon."""
    settings = get_settings()
    configure_logging(settings.log_level)

    logger.info("Starting domain daemon...")
    scripts_dir = str(settings.scripts_dir) if settings.scripts_dir else None
    dispatcher = build_dispatcher(settings, SubprocessCommandRunner(cwd=scripts_dir))
    source = WatchdogEventSource(str(settings.watch_root))

    try:
        dispatcher.serve(source)
    except KeyboardInterrupt:
        logger.info("Shutting down domain daemon...")
    finally:
        source.stop()


if __name__ == "__main__":
    main()
