"""Mapping between domain entities and stored BSON documents."""

from typing import Any

from bson import ObjectId

from storyforge.domain.story import (
    Audio,
    Image,
    Script,
    Segment,
    Story,
    StoryUpdate,
    parse_id,
)


def segment_to_document(segment: Segment) -> dict[str, Any]:
    """Convert a segment to its stored form; absent assets are omitted."""
    doc: dict[str, Any] = {}
    if segment.id:
        doc["_id"] = parse_id(segment.id)
    if segment.audio is not None:
        doc["audio"] = {"url": segment.audio.url}
    if segment.image is not None:
        doc["image"] = {"url": segment.image.url}
    if segment.script is not None:
        doc["script"] = {"text": segment.script.text}
    return doc


def segment_from_document(doc: dict[str, Any]) -> Segment:
    """Build a segment from its stored form."""
    audio = doc.get("audio")
    image = doc.get("image")
    script = doc.get("script")
    return Segment(
        id=_hex_or_none(doc.get("_id")),
        audio=Audio(url=audio.get("url", "")) if audio is not None else None,
        image=Image(url=image.get("url", "")) if image is not None else None,
        script=Script(text=script.get("text", "")) if script is not None else None,
    )


def story_to_document(story: Story) -> dict[str, Any]:
    """Convert a story to a full document for insertion."""
    return {
        "_id": parse_id(story.id),
        "title": story.title,
        "segments": [segment_to_document(s) for s in story.segments],
        "created_at": story.created_at,
        "is_published": story.is_published,
    }


def story_from_document(doc: dict[str, Any]) -> Story:
    """Build a story from a stored document."""
    return Story(
        id=str(doc["_id"]),
        title=doc.get("title", ""),
        segments=[segment_from_document(s) for s in doc.get("segments") or []],
        created_at=doc["created_at"],
        is_published=bool(doc.get("is_published", False)),
    )


def update_to_document(update: StoryUpdate) -> dict[str, Any]:
    """Build the $set body for the three mutable story fields."""
    return {
        "title": update.title,
        "segments": [segment_to_document(s) for s in update.segments],
        "is_published": update.is_published,
    }


def _hex_or_none(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, ObjectId):
        return str(value)
    return str(value) or None
