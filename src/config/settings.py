"""
Application settings - pydantic-settings configuration.

This module defines daemon configuration using pydantic-settings.
Values come from environment variables and the flat key/value .env
file next to the daemon (NS=..., A=..., AAAA=...).
"""

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.domain.layout import DNSSEC_ALGORITHM_NUMBERS


class Settings(BaseSettings):
    """Daemon settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Published records, required
    ns: str  # Nameserver host, e.g. ns1.pubnix.
    a: str  # IPv4 address of the web host
    aaaa: str  # IPv6 address of the web host

    # Filesystem locations
    watch_root: Path = Path("/home")
    coredns_dir: Path = Path("/etc/coredns")
    caddy_dir: Path = Path("/etc/caddy/sites")
    certificate_dir: Path = Path("/etc/pubnix/certs")
    document_root_name: str = "public_html"

    # External tools
    scripts_dir: Path | None = None  # Working directory for the certificate/TLSA scripts
    script_shell: str = "bash"  # Interpreter for the certificate/TLSA scripts
    certificate_script: str = "certificates.sh"
    tlsa_script: str = "tlsa.sh"
    dnssec_algorithm: str = "ECDSAP256SHA256"
    ds_digest: str = "SHA-256"
    nameserver_service: str = "coredns"
    proxy_service: str = "caddy"

    log_level: str = "INFO"

    @field_validator("dnssec_algorithm")
    @classmethod
    def known_dnssec_algorithm(cls, value: str) -> str:
        """Reject algorithms whose key file tag is unknown, at startup."""
        algorithm = value.upper()
        if algorithm not in DNSSEC_ALGORITHM_NUMBERS:
            supported = ", ".join(sorted(DNSSEC_ALGORITHM_NUMBERS))
            raise ValueError(f"unsupported DNSSEC algorithm {value!r}, expected one of: {supported}")
        return algorithm


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
