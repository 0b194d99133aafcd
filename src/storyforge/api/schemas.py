"""Pydantic schemas for API request/response models."""

from datetime import datetime

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, field_validator

from storyforge.domain.story import Audio, Image, Script, Segment


class AudioSchema(BaseModel):
    """Audio asset reference."""

    model_config = ConfigDict(from_attributes=True)

    url: str = ""


class ImageSchema(BaseModel):
    """Image asset reference."""

    model_config = ConfigDict(from_attributes=True)

    url: str = ""


class ScriptSchema(BaseModel):
    """Segment script text."""

    model_config = ConfigDict(from_attributes=True)

    text: str = ""


class SegmentRequest(BaseModel):
    """Segment as sent by clients. An empty or missing id means new."""

    id: str | None = None
    audio: AudioSchema | None = None
    image: ImageSchema | None = None
    script: ScriptSchema | None = None

    @field_validator("id")
    @classmethod
    def _check_id(cls, value: str | None) -> str | None:
        if value and not ObjectId.is_valid(value):
            raise ValueError("segment id must be a 24-character hex string")
        return value or None

    def to_domain(self) -> Segment:
        return Segment(
            id=self.id,
            audio=Audio(url=self.audio.url) if self.audio is not None else None,
            image=Image(url=self.image.url) if self.image is not None else None,
            script=Script(text=self.script.text) if self.script is not None else None,
        )


class StoryRequest(BaseModel):
    """Request body for creating or updating a story.

    Server-owned fields (id, created_at) are ignored if present.
    """

    title: str = ""
    segments: list[SegmentRequest] | None = None
    is_published: bool = False

    def domain_segments(self) -> list[Segment] | None:
        if self.segments is None:
            return None
        return [s.to_domain() for s in self.segments]


class SegmentResponse(BaseModel):
    """Response schema for a segment."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    audio: AudioSchema | None = None
    image: ImageSchema | None = None
    script: ScriptSchema | None = None


class StoryResponse(BaseModel):
    """Response schema for a story."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    segments: list[SegmentResponse]
    created_at: datetime
    is_published: bool


class StoryListResponse(BaseModel):
    """Response schema for paginated story list."""

    stories: list[StoryResponse]
    total: int
    offset: int
    limit: int
    has_more: bool


class UploadURLResponse(BaseModel):
    """Response schema for an audio upload grant."""

    upload_url: str
    public_url: str
