"""
Text renderers for generated configuration and user-facing messages.

Pure functions, no I/O. The callers own where the text is written.
"""

from datetime import date
from pathlib import Path

ZONE_TEMPLATE = """\
$TTL 3600
@ IN SOA {ns} hostmaster.{domain}. (
      {serial} ; serial
      3600       ; refresh (1 hour)
      1800       ; retry (30 minutes)
      604800     ; expire (1 week)
      3600       ; minimum (1 hour)
      )
  IN NS   {ns}
  IN A    {a}
  IN AAAA {aaaa}

_443._tcp IN TLSA {tlsa}
"""

COREFILE_TEMPLATE = """\
{domain} {{
    file {zone_file}
    dnssec {{
        key file {key_file}
    }}
}}
"""

CADDYFILE_TEMPLATE = """\
{domain} {{
    root * {document_root}
    file_server
    tls {certificate} {private_key}
}}
"""

SUCCESS_TEMPLATE = """\
Domain {domain} added successfully!

Configure your domain to use this pubnix as the nameserver (Bob Wallet, Shakestation, Namebase):
NS: {ns}
DS: {ds}

or, using your own nameservers configure the following records (Varo, Namebase):
A: {domain}. {a}
AAAA: {domain}. {aaaa}
TLSA: _443._tcp.{domain}. {tlsa}

To remove this domain, create a file named .remove-domain in your home directory.
"""


def zone_serial(today: date | None = None) -> str:
    """Date based SOA serial, YYYYMMDDnn with nn fixed at 01."""
    return f"{(today or date.today()):%Y%m%d}01"


def render_zone(
    domain: str,
    tlsa: str,
    ns: str,
    a: str,
    aaaa: str,
    serial: str | None = None,
) -> str:
    return ZONE_TEMPLATE.format(
        domain=domain,
        tlsa=tlsa,
        ns=ns,
        a=a,
        aaaa=aaaa,
        serial=serial or zone_serial(),
    )


def render_corefile(domain: str, zone_file: Path, key_file: Path) -> str:
    """
    Render the name server fragment serving and signing one zone.

    key_file is the key pair base path without extension; the DNS
    server locates the .key and .private halves itself.
    """
    return COREFILE_TEMPLATE.format(domain=domain, zone_file=zone_file, key_file=key_file)


def render_caddyfile(domain: str, document_root: Path, certificate: Path, private_key: Path) -> str:
    return CADDYFILE_TEMPLATE.format(
        domain=domain,
        document_root=document_root,
        certificate=certificate,
        private_key=private_key,
    )


def render_success_message(domain: str, ns: str, ds: str, a: str, aaaa: str, tlsa: str) -> str:
    return SUCCESS_TEMPLATE.format(domain=domain, ns=ns, ds=ds, a=a, aaaa=aaaa, tlsa=tlsa)


def render_error_message(error: BaseException) -> str:
    return f"Error: {error}"
