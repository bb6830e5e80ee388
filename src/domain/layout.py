"""
Fixed artifact locations for a domain.

Each domain owns exactly one of each artifact, keyed by domain name:
certificate, private key, zone file, Corefile fragment, reverse proxy
fragment, and one or more DNSSEC key pairs. Key pairs carry a random
key tag assigned by the key generator, so they are found by glob.
"""

import glob
from dataclasses import dataclass
from pathlib import Path

# BIND/dnssec-keygen algorithm mnemonics and their numeric identifiers,
# which appear in generated key file names as K<domain>.+<NNN>+<tag>
DNSSEC_ALGORITHM_NUMBERS = {
    "RSASHA256": 8,
    "RSASHA512": 10,
    "ECDSAP256SHA256": 13,
    "ECDSAP384SHA384": 14,
    "ED25519": 15,
    "ED448": 16,
}


@dataclass(frozen=True)
class ArtifactLayout:
    """Filesystem locations of every generated artifact."""

    watch_root: Path
    coredns_dir: Path
    caddy_dir: Path
    certificate_dir: Path
    document_root_name: str = "public_html"

    @property
    def zones_dir(self) -> Path:
        return self.coredns_dir / "zones"

    @property
    def keys_dir(self) -> Path:
        return self.coredns_dir / "keys"

    @property
    def corefiles_dir(self) -> Path:
        return self.coredns_dir / "corefiles"

    def certificate(self, domain: str) -> Path:
        return self.certificate_dir / f"{domain}.crt"

    def private_key(self, domain: str) -> Path:
        return self.certificate_dir / f"{domain}.key"

    def zone_file(self, domain: str) -> Path:
        return self.zones_dir / f"db.{domain}"

    def corefile(self, domain: str) -> Path:
        return self.corefiles_dir / f"{domain}.Corefile"

    def proxy_config(self, domain: str) -> Path:
        return self.caddy_dir / f"{domain}.Caddyfile"

    def document_root(self, domain: str) -> Path:
        return self.watch_root / domain / self.document_root_name

    def key_file(self, key_name: str) -> Path:
        """Public half of a key pair, from the base name printed by the key generator."""
        return self.keys_dir / f"{key_name}.key"

    def dnssec_key_pattern(self, domain: str, algorithm: str) -> str:
        """
        Glob matching every key pair generated for a domain.

        Matches both the .key and .private halves regardless of how many
        pairs exist or which random key tag they carry.
        """
        number = DNSSEC_ALGORITHM_NUMBERS[algorithm.upper()]
        return f"K{glob.escape(domain)}.+{number:03d}+*"

    def dnssec_keys(self, domain: str, algorithm: str) -> list[Path]:
        return sorted(self.keys_dir.glob(self.dnssec_key_pattern(domain, algorithm)))


def write_artifact(path: Path, content: str) -> None:
    """Write a generated artifact, creating its directory if needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
