"""Presigned upload URLs for segment media."""

import logging
from datetime import UTC, datetime, timedelta

from botocore.client import BaseClient
from botocore.exceptions import BotoCoreError, ClientError

from storyforge.config import Settings
from storyforge.domain.errors import UploadURLError
from storyforge.domain.upload import UploadGrant, audio_object_path, public_object_url

logger = logging.getLogger(__name__)

DEFAULT_UPLOAD_EXPIRY = timedelta(minutes=15)


class MediaUploadCoordinator:
    """Mints write-only presigned URLs for segment audio.

    The write URL and the public URL are built from the same object path,
    so an upload through one is readable through the other. Nothing is
    checked against the story store and nothing is persisted.
    """

    def __init__(
        self,
        s3_client: BaseClient,
        bucket: str,
        endpoint: str,
        public_host: str,
        expiry: timedelta = DEFAULT_UPLOAD_EXPIRY,
    ) -> None:
        """Initialize the coordinator.

        Args:
            s3_client: boto3 S3 client configured for the service endpoint
            bucket: Bucket holding media objects
            endpoint: Service endpoint the client signs against
            public_host: Externally reachable object store host
            expiry: Validity window of upload URLs
        """
        self.s3_client = s3_client
        self.bucket = bucket
        self.endpoint = endpoint.rstrip("/")
        self.public_host = public_host.rstrip("/")
        self.expiry = expiry

    @classmethod
    def from_settings(cls, s3_client: BaseClient, settings: Settings) -> "MediaUploadCoordinator":
        """Build a coordinator from application settings."""
        return cls(
            s3_client=s3_client,
            bucket=settings.s3_bucket,
            endpoint=settings.s3_endpoint,
            public_host=settings.s3_public_url,
            expiry=timedelta(minutes=settings.upload_url_expiry_minutes),
        )

    def _to_public_host(self, url: str) -> str:
        """Rewrite the service endpoint prefix to the public host."""
        if url.startswith(self.endpoint):
            return self.public_host + url[len(self.endpoint):]
        return url

    def issue_audio_upload_url(self, story_id: str, segment_id: str) -> UploadGrant:
        """Issue a PUT URL for a segment's audio and its public read URL.

        Raises:
            UploadURLError: If the URL cannot be signed
        """
        object_path = audio_object_path(story_id, segment_id)
        issued_at = datetime.now(UTC)

        try:
            signed_url = self.s3_client.generate_presigned_url(
                "put_object",
                Params={"Bucket": self.bucket, "Key": object_path},
                ExpiresIn=int(self.expiry.total_seconds()),
                HttpMethod="PUT",
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Failed to presign upload for {object_path}: {e}")
            raise UploadURLError(f"Failed to generate upload URL for {object_path}") from e

        logger.info(f"Issued audio upload URL for {object_path}")
        return UploadGrant(
            upload_url=self._to_public_host(signed_url),
            public_url=public_object_url(self.public_host, self.bucket, object_path),
            object_path=object_path,
            expires_at=issued_at + self.expiry,
        )
