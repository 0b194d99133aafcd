"""Upload grant value types."""

from dataclasses import dataclass
from datetime import datetime
from urllib.parse import quote


def audio_object_path(story_id: str, segment_id: str) -> str:
    """Canonical object key for a segment's audio asset."""
    return f"{story_id}/{segment_id}/audio"


def public_object_url(public_host: str, bucket: str, object_path: str) -> str:
    """Stable read locator for an object in the public bucket.

    The key is percent-encoded the same way botocore encodes it in signed
    URLs, so both URLs resolve to the same object path.
    """
    return f"{public_host.rstrip('/')}/{bucket}/{quote(object_path, safe='/~')}"


@dataclass(frozen=True)
class UploadGrant:
    """A short-lived write URL paired with the object's public URL."""

    upload_url: str
    public_url: str
    object_path: str
    expires_at: datetime
