"""Typed settings for the S3 blob backend.

Variable names follow the usual S3/AWS conventions so the same environment
works for other S3 tooling:

    S3_ENDPOINT            Object store endpoint URL (required)
    S3_BUCKET              Bucket name (required)
    AWS_ACCESS_KEY_ID      Access key (required)
    AWS_SECRET_ACCESS_KEY  Secret key (required)
    S3_REGION              Region (default: auto)
    S3_PUBLIC_URL          Public/CDN base URL; enables redirect mode
    SERVICE_URL            This service's base URL, used for blob URLs otherwise
    S3_CONNECT_TIMEOUT     Connect timeout in seconds (default: 10)
    S3_READ_TIMEOUT        Read timeout in seconds (default: 60)
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Union
from urllib.parse import urlparse

from blossom_store.config.env_loader import EnvLoader
from blossom_store.exceptions import ConfigurationError

DEFAULT_REGION = "auto"
DEFAULT_CONNECT_TIMEOUT = 10.0
DEFAULT_READ_TIMEOUT = 60.0

_REQUIRED_VARS = ("S3_ENDPOINT", "S3_BUCKET", "AWS_ACCESS_KEY_ID", "AWS_SECRET_ACCESS_KEY")
_OPTIONAL_VARS = ("S3_REGION", "S3_PUBLIC_URL", "SERVICE_URL", "S3_CONNECT_TIMEOUT", "S3_READ_TIMEOUT")


def _parse_timeout(value: Optional[str], name: str, default: float) -> float:
    """Convert an optional string to a positive number of seconds."""
    if value is None or value == "":
        return default
    try:
        seconds = float(value)
    except ValueError as exc:
        raise ConfigurationError(
            "INVALID_TIMEOUT",
            f"{name} must be a number of seconds, got {value!r}",
            {"variable": name},
        ) from exc
    if seconds <= 0:
        raise ConfigurationError(
            "INVALID_TIMEOUT",
            f"{name} must be positive, got {value!r}",
            {"variable": name},
        )
    return seconds


def validate_base_url(value: str, name: str) -> str:
    """Check that a base URL has a scheme and host; return it without trailing '/'.

    Raises:
        ConfigurationError: If the URL cannot be used as a base URL
    """
    parsed = urlparse(value)
    if not parsed.scheme or not parsed.netloc:
        raise ConfigurationError(
            "INVALID_URL",
            f"{name} must be an absolute URL with scheme and host, got {value!r}",
            {"setting": name},
        )
    return value.rstrip("/")


@dataclass
class S3Settings:
    """Connection settings for an S3-compatible object store

    Attributes:
        endpoint: Object store endpoint URL
        bucket: Bucket holding the blobs
        access_key_id: Access key ID
        secret_access_key: Secret access key (masked in repr)
        region: Region name; "auto" suits Tigris/R2 style endpoints
        public_url: Optional public base URL; when set, loads redirect there
        service_url: Base URL of this service, used for blob URLs without public_url
        connect_timeout: Seconds to wait for a connection
        read_timeout: Seconds to wait for a response
    """

    endpoint: str
    bucket: str
    access_key_id: str
    secret_access_key: str
    region: str = DEFAULT_REGION
    public_url: Optional[str] = None
    service_url: str = ""
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    read_timeout: float = DEFAULT_READ_TIMEOUT

    def __post_init__(self) -> None:
        self.endpoint = validate_base_url(self.endpoint, "S3_ENDPOINT")
        if not self.bucket:
            raise ConfigurationError("MISSING_BUCKET", "S3 bucket name must not be empty")
        if self.public_url:
            self.public_url = validate_base_url(self.public_url, "S3_PUBLIC_URL")
        else:
            self.public_url = None
        self.service_url = self.service_url.rstrip("/")
        if not self.region:
            self.region = DEFAULT_REGION

    def __repr__(self) -> str:
        return (
            f"S3Settings(endpoint={self.endpoint!r}, bucket={self.bucket!r}, "
            f"region={self.region!r}, access_key_id={self.access_key_id!r}, "
            f"secret_access_key='***', public_url={self.public_url!r}, "
            f"service_url={self.service_url!r})"
        )

    @property
    def redirect_enabled(self) -> bool:
        """True when loads are answered with a redirect to public_url."""
        return self.public_url is not None

    @classmethod
    def from_env(
        cls,
        env_file: Optional[Union[Path, str]] = None,
        overrides: Optional[Mapping[str, str]] = None,
    ) -> Optional["S3Settings"]:
        """Load S3 settings from .env file and environment

        Args:
            env_file: Optional .env file path (defaults to ./.env when present)
            overrides: Values taking precedence over the environment

        Returns:
            S3Settings, or None when any required variable is missing,
            which means S3 storage is not configured

        Raises:
            ConfigurationError: If a variable is present but malformed
        """
        env = EnvLoader(env_file).select(_REQUIRED_VARS + _OPTIONAL_VARS, overrides)

        if EnvLoader.missing(env, _REQUIRED_VARS):
            return None

        return cls(
            endpoint=env["S3_ENDPOINT"],
            bucket=env["S3_BUCKET"],
            access_key_id=env["AWS_ACCESS_KEY_ID"],
            secret_access_key=env["AWS_SECRET_ACCESS_KEY"],
            region=env.get("S3_REGION") or DEFAULT_REGION,
            public_url=env.get("S3_PUBLIC_URL") or None,
            service_url=env.get("SERVICE_URL", ""),
            connect_timeout=_parse_timeout(
                env.get("S3_CONNECT_TIMEOUT"), "S3_CONNECT_TIMEOUT", DEFAULT_CONNECT_TIMEOUT
            ),
            read_timeout=_parse_timeout(
                env.get("S3_READ_TIMEOUT"), "S3_READ_TIMEOUT", DEFAULT_READ_TIMEOUT
            ),
        )
