"""
Contracts of the external programs driven by the pipelines.

Every external call made by the daemon is defined here, together with
how its output is interpreted. All of them go through ToolInvoker.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from .exceptions import ValidationFailure
from .invoker import ToolInvoker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Toolchain:
    """Program names and fixed arguments for the external tools."""

    shell: str = "bash"
    certificate_script: str = "certificates.sh"
    tlsa_script: str = "tlsa.sh"
    keygen_program: str = "dnssec-keygen"
    dsfromkey_program: str = "dnssec-dsfromkey"
    dnssec_algorithm: str = "ECDSAP256SHA256"
    ds_digest: str = "SHA-256"
    proxy_program: str = "caddy"
    service_program: str = "systemctl"
    nameserver_service: str = "coredns"
    proxy_service: str = "caddy"


def generate_certificates(invoker: ToolInvoker, toolchain: Toolchain, domain: str) -> None:
    """Issue the certificate and private key; the script writes them in place."""
    invoker.invoke(
        "Failed to generate certificates",
        toolchain.shell,
        [toolchain.certificate_script],
        env={"DOMAIN": domain},
    )


def generate_tlsa_record(invoker: ToolInvoker, toolchain: Toolchain, domain: str) -> str:
    """Return the TLSA record value (e.g. "3 1 1 ABCDEF...") for the domain's key."""
    return invoker.invoke(
        "Failed to generate TLSA record",
        toolchain.shell,
        [toolchain.tlsa_script],
        env={"DOMAIN": domain},
    )


def generate_dnssec_key(invoker: ToolInvoker, toolchain: Toolchain, keys_dir: Path, domain: str) -> str:
    """Create a key pair under keys_dir and return its base name, e.g. Kexample.+013+12345."""
    keys_dir.mkdir(parents=True, exist_ok=True)
    key_name = invoker.invoke(
        "Failed to generate DNSSEC key",
        toolchain.keygen_program,
        ["-a", toolchain.dnssec_algorithm, "-K", str(keys_dir), domain],
    )
    logger.info("[%s] Generated DNSSEC key %s", domain, key_name)
    return key_name


def strip_ds_prefix(domain: str, output: str) -> str:
    """
    Remove the owner/class/type columns from a DS line.

    "alice. IN DS 12345 13 2 ABCD" becomes "12345 13 2 ABCD". Output
    without the exact prefix is returned trimmed but otherwise untouched.
    """
    record = output.strip()
    prefix = f"{domain}. IN DS "
    if record.startswith(prefix):
        record = record[len(prefix):]
    return record.strip()


def generate_ds_record(invoker: ToolInvoker, toolchain: Toolchain, domain: str, key_file: Path) -> str:
    output = invoker.invoke(
        "Failed to generate DS record",
        toolchain.dsfromkey_program,
        ["-a", toolchain.ds_digest, str(key_file)],
    )
    return strip_ds_prefix(domain, output)


def validate_proxy_config(invoker: ToolInvoker, toolchain: Toolchain, config: Path) -> None:
    """
    Validate a reverse proxy fragment, deleting it when invalid.

    Raises:
        ValidationFailure: If the validator rejects the fragment
    """
    result = invoker.run(
        toolchain.proxy_program,
        ["validate", "--config", str(config), "--adapter", "caddyfile"],
    )
    if result.ok:
        return

    logger.warning("Removing invalid reverse proxy config %s", config)
    config.unlink(missing_ok=True)
    raise ValidationFailure(str(config), result.stderr)


def restart_nameserver(invoker: ToolInvoker, toolchain: Toolchain) -> None:
    invoker.invoke(
        "Failed to restart CoreDNS",
        toolchain.service_program,
        ["restart", toolchain.nameserver_service],
    )


def reload_proxy(invoker: ToolInvoker, toolchain: Toolchain) -> None:
    invoker.invoke(
        "Failed to reload Caddy",
        toolchain.service_program,
        ["reload", toolchain.proxy_service],
    )
