"""
component_builder.publish — Upload a built component archive to S3.

Object key: components/{component_name}/{environment or "default"}/{archive file name}
The archive's SHA256 is stored as object metadata so deploy tooling can
verify what it pulls.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import boto3
from aws_lambda_powertools import Logger
from botocore.exceptions import BotoCoreError, ClientError

from component_builder.archive import sha256_file
from component_builder.exceptions import ConfigurationError, PublishError

logger = Logger(service="component-builder")

KEY_PREFIX = "components"
DEFAULT_ENVIRONMENT_SEGMENT = "default"


@dataclass(frozen=True)
class PublishedArchive:
    bucket: str
    key: str
    sha256: str


def archive_key(component_name: str, environment: str | None, archive_name: str) -> str:
    segment = environment or DEFAULT_ENVIRONMENT_SEGMENT
    return f"{KEY_PREFIX}/{component_name}/{segment}/{archive_name}"


def require_aws_region() -> str:
    """Read AWS_REGION from environment and fail fast if missing."""
    region = os.environ.get("AWS_REGION", "").strip()
    if not region:
        raise ConfigurationError("AWS_REGION must be set to publish archives")
    return region


def publish_archive(
    archive_path: Path | str,
    *,
    bucket: str,
    component_name: str,
    environment: str | None = None,
    s3_client: Any = None,
    region: str | None = None,
) -> PublishedArchive:
    """Upload archive_path to bucket and return where it landed."""
    path = Path(archive_path)
    if not path.is_file():
        raise PublishError(f"Archive not found: {path}")
    client: Any = s3_client or boto3.client("s3", region_name=region or require_aws_region())
    key = archive_key(component_name, environment, path.name)
    digest = sha256_file(path)

    try:
        with path.open("rb") as body:
            client.put_object(
                Bucket=bucket,
                Key=key,
                Body=body,
                ContentType="application/zip",
                Metadata={"sha256": digest, "component": component_name},
            )
    except (ClientError, BotoCoreError) as exc:
        raise PublishError(f"Unable to upload {path} to s3://{bucket}/{key}") from exc

    logger.info("Component archive published", bucket=bucket, key=key, sha256=digest)
    return PublishedArchive(bucket=bucket, key=key, sha256=digest)
