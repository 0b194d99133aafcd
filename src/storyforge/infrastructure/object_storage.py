"""S3-compatible object store client setup."""

import logging

import boto3
from botocore.client import BaseClient, Config
from botocore.exceptions import ClientError

from storyforge.config import Settings

logger = logging.getLogger(__name__)


def create_s3_client(settings: Settings) -> BaseClient:
    """Create an S3 client against the service endpoint.

    Path-style addressing keeps the bucket in the URL path, so the
    public URL can be built as ``{host}/{bucket}/{key}``.
    """
    return boto3.client(
        "s3",
        region_name=settings.aws_region,
        aws_access_key_id=settings.aws_access_key_id,
        aws_secret_access_key=settings.aws_secret_access_key,
        endpoint_url=settings.s3_endpoint,
        config=Config(signature_version="s3v4", s3={"addressing_style": "path"}),
    )


def ensure_bucket(client: BaseClient, bucket: str) -> None:
    """Create the bucket if it does not exist yet."""
    try:
        client.head_bucket(Bucket=bucket)
        return
    except ClientError as e:
        code = e.response.get("Error", {}).get("Code", "")
        if code not in ("404", "NoSuchBucket", "NotFound"):
            raise

    logger.info(f"Creating bucket {bucket}")
    region = client.meta.region_name
    if region and region != "us-east-1":
        client.create_bucket(
            Bucket=bucket,
            CreateBucketConfiguration={"LocationConstraint": region},
        )
    else:
        client.create_bucket(Bucket=bucket)
