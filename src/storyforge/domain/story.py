"""Story and Segment domain entities."""

from dataclasses import dataclass, field, replace
from datetime import datetime

from bson import ObjectId
from bson.errors import InvalidId

from storyforge.domain.errors import InvalidIdentifierError


def new_id() -> str:
    """Generate a fresh opaque identity as a 24-char hex string."""
    return str(ObjectId())


def parse_id(value: str) -> ObjectId:
    """Parse a hex identity string, raising InvalidIdentifierError on failure."""
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        raise InvalidIdentifierError(value)
    try:
        return ObjectId(value)
    except (InvalidId, TypeError) as e:
        raise InvalidIdentifierError(value) from e


def is_blank_id(value: str | None) -> bool:
    """An identity is unset when missing or empty."""
    return not value


@dataclass(frozen=True)
class Audio:
    """Reference to an uploaded audio asset."""

    url: str


@dataclass(frozen=True)
class Image:
    """Reference to an image asset."""

    url: str


@dataclass(frozen=True)
class Script:
    """Narration text for a segment."""

    text: str


@dataclass(frozen=True)
class Segment:
    """One ordered unit of a story.

    Each optional field is either absent (no asset yet) or present,
    possibly with an empty value.
    """

    id: str | None = None
    audio: Audio | None = None
    image: Image | None = None
    script: Script | None = None


@dataclass
class Story:
    """A persisted story: title plus an ordered list of segments."""

    id: str
    title: str
    created_at: datetime
    segments: list[Segment] = field(default_factory=list)
    is_published: bool = False


@dataclass(frozen=True)
class StoryUpdate:
    """The mutable fields of a story, replaced together on update."""

    title: str
    segments: tuple[Segment, ...]
    is_published: bool

    @classmethod
    def create(
        cls,
        title: str,
        segments: list[Segment] | None = None,
        is_published: bool = False,
    ) -> "StoryUpdate":
        """Build an update, normalizing a missing segment list to empty."""
        return cls(
            title=title,
            segments=tuple(segments or ()),
            is_published=is_published,
        )


def ensure_segment_ids(segments: list[Segment] | tuple[Segment, ...]) -> list[Segment]:
    """Assign identities to segments that lack one, preserving order.

    Segments that already carry an identity are returned unchanged; the
    identity is not checked against any previous version of the story.
    """
    return [
        replace(segment, id=new_id()) if is_blank_id(segment.id) else segment
        for segment in segments
    ]
