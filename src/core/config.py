"""Runtime configuration model for booklake.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    DEFAULT_ARCHIVE_BASE_URL,
    DEFAULT_BACKEND,
    DEFAULT_CONNECT_TIMEOUT_SECONDS,
    DEFAULT_DATALAKE_PREFIX,
    DEFAULT_LOCAL_ROOT,
    DEFAULT_MAX_RETRIES,
    DEFAULT_PORT,
    DEFAULT_READ_TIMEOUT_SECONDS,
    DEFAULT_S3_BUCKET,
    DEFAULT_STAGING_PATH,
    DEFAULT_TOTAL_BOOKS,
    DEFAULT_USER_AGENT,
    SUPPORTED_BACKENDS,
)
from core.errors import BooklakeConfigError


@dataclass(frozen=True)
class BooklakeConfig:
    """Validated runtime configuration.

    Attributes:
        staging_dir: Local directory holding staged header/body pairs.
        backend: Datalake adapter name, ``s3`` or ``local``.
        s3_bucket: Destination bucket for the S3 adapter.
        datalake_prefix: Key prefix under which partitions are written.
        s3_region: Optional AWS region for boto3 session initialization.
        s3_profile: Optional AWS profile for boto3 session initialization.
        s3_endpoint_url: Optional endpoint override, e.g. LocalStack.
        local_root: Root directory for the local filesystem adapter.
        total_books: Upper bound of the id range used for random sampling.
        max_retries: Draw budget for random next-unseen ingestion.
        random_seed: Optional seed for reproducible sampling.
        archive_base_url: Base URL of the remote text archive.
        user_agent: Client identifier sent with archive requests.
        connect_timeout: Connect timeout for archive requests in seconds.
        read_timeout: Read timeout for archive requests in seconds.
        port: HTTP port for the control surface.
    """

    staging_dir: Path
    backend: str
    s3_bucket: str
    datalake_prefix: str
    s3_region: str | None
    s3_profile: str | None
    s3_endpoint_url: str | None
    local_root: Path
    total_books: int
    max_retries: int
    random_seed: int | None
    archive_base_url: str
    user_agent: str
    connect_timeout: float
    read_timeout: float
    port: int

    @classmethod
    def from_env(cls) -> "BooklakeConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            BooklakeConfigError: If environment values are invalid.
        """
        seed_value = _read_env("BOOKLAKE_RANDOM_SEED")
        return cls(
            staging_dir=_resolve_path(
                _read_env("BOOKLAKE_STAGING_PATH") or str(DEFAULT_STAGING_PATH)
            ),
            backend=_parse_backend(_read_env("BOOKLAKE_BACKEND") or DEFAULT_BACKEND),
            s3_bucket=_read_env("BOOKLAKE_S3_BUCKET") or DEFAULT_S3_BUCKET,
            datalake_prefix=_read_env("BOOKLAKE_S3_PREFIX") or DEFAULT_DATALAKE_PREFIX,
            s3_region=_read_env("BOOKLAKE_S3_REGION"),
            s3_profile=_read_env("BOOKLAKE_S3_PROFILE"),
            s3_endpoint_url=_read_env("BOOKLAKE_S3_ENDPOINT_URL"),
            local_root=_resolve_path(_read_env("BOOKLAKE_LOCAL_ROOT") or str(DEFAULT_LOCAL_ROOT)),
            total_books=_parse_positive_int("BOOKLAKE_TOTAL_BOOKS", DEFAULT_TOTAL_BOOKS),
            max_retries=_parse_positive_int("BOOKLAKE_MAX_RETRIES", DEFAULT_MAX_RETRIES),
            random_seed=_parse_seed(seed_value) if seed_value is not None else None,
            archive_base_url=(
                _read_env("BOOKLAKE_ARCHIVE_BASE_URL") or DEFAULT_ARCHIVE_BASE_URL
            ).rstrip("/"),
            user_agent=_read_env("BOOKLAKE_USER_AGENT") or DEFAULT_USER_AGENT,
            connect_timeout=_parse_timeout(
                "BOOKLAKE_CONNECT_TIMEOUT", DEFAULT_CONNECT_TIMEOUT_SECONDS
            ),
            read_timeout=_parse_timeout("BOOKLAKE_READ_TIMEOUT", DEFAULT_READ_TIMEOUT_SECONDS),
            port=_parse_positive_int("BOOKLAKE_PORT", DEFAULT_PORT),
        )


def _read_env(name: str) -> str | None:
    """Return a stripped environment value, treating blanks as unset."""
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _resolve_path(raw_value: str) -> Path:
    return Path(raw_value).expanduser().resolve()


def _parse_backend(raw_value: str) -> str:
    """Validate the datalake backend name.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Lower-cased backend name.

    Raises:
        BooklakeConfigError: If backend is not supported.
    """
    backend = raw_value.lower()
    if backend not in SUPPORTED_BACKENDS:
        raise BooklakeConfigError(
            f"Invalid BOOKLAKE_BACKEND value '{raw_value}'. "
            f"Supported backends: {', '.join(SUPPORTED_BACKENDS)}."
        )
    return backend


def _parse_positive_int(name: str, default: int) -> int:
    """Parse a positive integer environment value.

    Args:
        name: Environment variable name.
        default: Value used when variable is unset.

    Returns:
        Parsed integer.

    Raises:
        BooklakeConfigError: If value is not a positive integer.
    """
    raw_value = _read_env(name)
    if raw_value is None:
        return default
    try:
        parsed_value = int(raw_value)
    except ValueError as error:
        raise BooklakeConfigError(
            f"Invalid {name} value: expected integer, got '{raw_value}'. "
            f"Set {name} to a positive number."
        ) from error
    if parsed_value <= 0:
        raise BooklakeConfigError(
            f"Invalid {name} value: expected positive integer, got {parsed_value}."
        )
    return parsed_value


def _parse_timeout(name: str, default: float) -> float:
    """Parse a positive timeout in seconds."""
    raw_value = _read_env(name)
    if raw_value is None:
        return default
    try:
        parsed_value = float(raw_value)
    except ValueError as error:
        raise BooklakeConfigError(
            f"Invalid {name} value: expected seconds, got '{raw_value}'."
        ) from error
    if parsed_value <= 0:
        raise BooklakeConfigError(f"Invalid {name} value: timeout must be positive.")
    return parsed_value


def _parse_seed(raw_value: str) -> int:
    """Parse the random seed environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Parsed integer seed.

    Raises:
        BooklakeConfigError: If value cannot be parsed into int.
    """
    try:
        return int(raw_value)
    except ValueError as error:
        raise BooklakeConfigError(
            "Invalid BOOKLAKE_RANDOM_SEED value: "
            f"expected integer, got '{raw_value}'. "
            "Set BOOKLAKE_RANDOM_SEED to a numeric value."
        ) from error
