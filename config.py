"""Configuration management for Varnish Exporter"""
from pathlib import Path
from typing import List, Optional, Literal, Tuple
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_BIND = ":9131"


class Config(BaseSettings):
    """Configuration class with Pydantic validation and environment-based settings"""

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=False)

    # Server settings
    metrics_host: str = Field(default="0.0.0.0", description="Metrics server host")
    metrics_port: int = Field(default=9131, ge=1, le=65535, description="Metrics server port")

    # Varnish settings
    no_admin: bool = Field(default=False, description="Do not call varnishadm; expose all VCLs as seen")
    varnish_instance: Optional[str] = Field(default=None, description="Varnish instance name (-n)")
    varnishstat_path: str = Field(default="varnishstat", description="varnishstat executable")
    varnishadm_path: str = Field(default="varnishadm", description="varnishadm executable")
    command_timeout: float = Field(default=10.0, ge=0.1, description="Timeout for external commands in seconds")
    vcl_list_header_entries: int = Field(default=3, ge=0, description="Leading non-record entries in vcl.list -j")

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO", description="Log level")
    log_file: Optional[Path] = Field(default=None, description="Optional log file path")
    enable_request_logging: bool = Field(default=True, description="Enable HTTP request logging")

    # Service settings
    service_name: str = Field(default="varnish-exporter", description="Service name")
    service_version: str = Field(default="1.0.0", description="Service version")

    @field_validator('log_level', mode='before')
    @classmethod
    def normalize_log_level(cls, v):
        """Accept log levels in any case"""
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator('log_file')
    @classmethod
    def ensure_parent_directories(cls, v):
        """Ensure parent directories exist for file paths"""
        if isinstance(v, Path):
            v.parent.mkdir(parents=True, exist_ok=True)
        return v

    @field_validator('varnish_instance', mode='before')
    @classmethod
    def empty_instance_is_default(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def instance_args(self) -> List[str]:
        """Arguments selecting the configured varnish instance"""
        if self.varnish_instance:
            return ["-n", self.varnish_instance]
        return []

    def varnishstat_command(self) -> List[str]:
        return [self.varnishstat_path, "-j", "-t", "0", *self.instance_args()]

    def varnishadm_command(self) -> List[str]:
        return [self.varnishadm_path, *self.instance_args(), "vcl.list", "-j"]


def parse_bind_address(bind: str) -> Tuple[str, int]:
    """Split ``host:port`` into its parts; an empty host listens on all interfaces"""
    host, sep, port = bind.strip().rpartition(":")
    if not sep:
        raise ValueError(f"Invalid bind address {bind!r}, expected host:port")

    # [::1]:9131
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]

    try:
        port_number = int(port)
    except ValueError:
        raise ValueError(f"Invalid port in bind address {bind!r}") from None
    if not 1 <= port_number <= 65535:
        raise ValueError(f"Port out of range in bind address {bind!r}")

    return host or "0.0.0.0", port_number
