"""Datalake adapter selection.

This module maps the configured backend name onto a storage adapter.
"""

from __future__ import annotations

from core.config import BooklakeConfig
from core.errors import BooklakeConfigError
from store.datalake_port import DatalakeStorage
from store.local_datalake import LocalDatalakeStorage


def create_datalake_storage(config: BooklakeConfig) -> DatalakeStorage:
    """Build the datalake adapter selected by ``config.backend``.

    Args:
        config: Runtime configuration.

    Returns:
        Storage adapter implementing the datalake contract.

    Raises:
        BooklakeConfigError: If backend is unknown.
        BooklakeDependencyError: If the S3 backend is selected without boto3.
    """
    if config.backend == "local":
        return LocalDatalakeStorage(config.local_root, config.datalake_prefix)
    if config.backend == "s3":
        from store.s3_client import create_s3_client, ensure_bucket
        from store.s3_datalake import S3DatalakeStorage

        s3_client = create_s3_client(config)
        ensure_bucket(s3_client, config.s3_bucket)
        return S3DatalakeStorage(s3_client, config.s3_bucket, config.datalake_prefix)
    raise BooklakeConfigError(
        f"Unsupported datalake backend '{config.backend}'. Use 's3' or 'local'."
    )
