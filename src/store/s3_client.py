"""S3 client helpers for the datalake adapter.

This module encapsulates boto3 client creation and bucket bootstrap.
"""

from __future__ import annotations

from typing import Any

from core.config import BooklakeConfig
from core.errors import BooklakeDependencyError, BooklakeStoreError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)
_BUCKET_PRESENT_CODES = ("BucketAlreadyOwnedByYou", "BucketAlreadyExists")


def create_s3_client(config: BooklakeConfig) -> Any:
    """Create boto3 S3 client for the datalake.

    Args:
        config: Runtime config with optional session and endpoint settings.

    Returns:
        Boto3 S3 client.

    Raises:
        BooklakeDependencyError: If boto3 is missing.
    """
    try:
        import boto3
        from botocore.config import Config
    except ImportError as error:
        raise BooklakeDependencyError(
            "The S3 datalake backend requires boto3, but it is not installed. "
            "Install boto3 or set BOOKLAKE_BACKEND=local."
        ) from error
    session_kwargs: dict[str, str] = {}
    if config.s3_profile:
        session_kwargs["profile_name"] = config.s3_profile
    if config.s3_region:
        session_kwargs["region_name"] = config.s3_region
    session = boto3.session.Session(**session_kwargs)
    client_kwargs: dict[str, Any] = {}
    if config.s3_endpoint_url:
        client_kwargs["endpoint_url"] = config.s3_endpoint_url
        client_kwargs["config"] = Config(s3={"addressing_style": "path"})
    return session.client("s3", **client_kwargs)


def ensure_bucket(s3_client: Any, bucket: str) -> None:
    """Create the bucket when it does not exist yet.

    Args:
        s3_client: Boto3 S3 client.
        bucket: Bucket name.

    Raises:
        BooklakeStoreError: If the bucket can be neither found nor created.
    """
    from botocore.exceptions import BotoCoreError, ClientError

    if _bucket_exists(s3_client, bucket):
        return
    try:
        s3_client.create_bucket(Bucket=bucket)
    except ClientError as error:
        if error.response.get("Error", {}).get("Code") in _BUCKET_PRESENT_CODES:
            return
        raise BooklakeStoreError(
            f"Failed to create bucket {bucket}: {error}. "
            "Check AWS credentials or create the bucket manually."
        ) from error
    except BotoCoreError as error:
        raise BooklakeStoreError(f"Failed to create bucket {bucket}: {error}.") from error
    _LOGGER.info("bucket_created", bucket=bucket)


def _bucket_exists(s3_client: Any, bucket: str) -> bool:
    """Return whether ``head_bucket`` succeeds for the bucket."""
    from botocore.exceptions import BotoCoreError, ClientError

    try:
        s3_client.head_bucket(Bucket=bucket)
    except (BotoCoreError, ClientError):
        return False
    return True
