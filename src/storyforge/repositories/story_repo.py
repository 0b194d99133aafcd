"""Story repository for document store operations."""

import logging
from datetime import UTC, datetime

from pymongo import DESCENDING
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import PyMongoError

from storyforge.domain.errors import StoryNotFoundError, StoryStoreError
from storyforge.domain.story import (
    Segment,
    Story,
    StoryUpdate,
    ensure_segment_ids,
    new_id,
    parse_id,
)
from storyforge.infrastructure.documents import (
    story_from_document,
    story_to_document,
    update_to_document,
)

logger = logging.getLogger(__name__)


def _now_millis() -> datetime:
    """Current UTC time truncated to the store's millisecond precision."""
    now = datetime.now(UTC)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


class StoryRepository:
    """Repository for Story CRUD operations.

    Each write is a single document operation. There is no locking:
    concurrent updates to one story are last-write-wins.
    """

    def __init__(self, collection: AsyncCollection) -> None:
        """Initialize repository with the stories collection."""
        self.collection = collection

    async def create(
        self,
        title: str,
        segments: list[Segment] | None = None,
        is_published: bool = False,
    ) -> Story:
        """Insert a new story.

        Assigns the story identity, creation timestamp and any missing
        segment identities. A missing segment list is stored as empty.

        Raises:
            StoryStoreError: If the insert fails
        """
        story = Story(
            id=new_id(),
            title=title,
            segments=ensure_segment_ids(segments or []),
            created_at=_now_millis(),
            is_published=is_published,
        )

        try:
            await self.collection.insert_one(story_to_document(story))
        except PyMongoError as e:
            logger.error(f"Failed to insert story: {e}")
            raise StoryStoreError("Failed to create story") from e

        logger.info(f"Created story {story.id} with {len(story.segments)} segments")
        return story

    async def update(self, story_id: str, changes: StoryUpdate) -> Story:
        """Replace title, segments and publication flag of a story.

        Segments without an identity get a fresh one; existing identities
        are kept as sent. The story identity and creation time are never
        touched. Returns the document as re-read after the write.

        Raises:
            InvalidIdentifierError: If story_id is not a valid identity
            StoryNotFoundError: If the story does not exist after the write
            StoryStoreError: If the store fails
        """
        object_id = parse_id(story_id)
        changes = StoryUpdate(
            title=changes.title,
            segments=tuple(ensure_segment_ids(changes.segments)),
            is_published=changes.is_published,
        )

        try:
            await self.collection.update_one(
                {"_id": object_id},
                {"$set": update_to_document(changes)},
            )
            doc = await self.collection.find_one({"_id": object_id})
        except PyMongoError as e:
            logger.error(f"Failed to update story {story_id}: {e}")
            raise StoryStoreError(f"Failed to update story {story_id}") from e

        if doc is None:
            raise StoryNotFoundError(story_id)

        logger.info(f"Updated story {story_id}")
        return story_from_document(doc)

    async def delete(self, story_id: str) -> None:
        """Delete a story. Deleting a missing story is not an error.

        Raises:
            InvalidIdentifierError: If story_id is not a valid identity
            StoryStoreError: If the store fails
        """
        object_id = parse_id(story_id)

        try:
            result = await self.collection.delete_one({"_id": object_id})
        except PyMongoError as e:
            logger.error(f"Failed to delete story {story_id}: {e}")
            raise StoryStoreError(f"Failed to delete story {story_id}") from e

        logger.info(f"Deleted story {story_id} (removed: {result.deleted_count})")

    async def get_by_id(self, story_id: str) -> Story | None:
        """Get a story by its ID."""
        object_id = parse_id(story_id)

        try:
            doc = await self.collection.find_one({"_id": object_id})
        except PyMongoError as e:
            raise StoryStoreError(f"Failed to read story {story_id}") from e

        return story_from_document(doc) if doc is not None else None

    async def list_stories(self, offset: int = 0, limit: int = 30) -> list[Story]:
        """List stories with pagination, newest first."""
        try:
            cursor = (
                self.collection.find({})
                .sort("created_at", DESCENDING)
                .skip(offset)
                .limit(limit)
            )
            docs = await cursor.to_list()
        except PyMongoError as e:
            raise StoryStoreError("Failed to list stories") from e

        return [story_from_document(d) for d in docs]

    async def count(self) -> int:
        """Get total story count."""
        try:
            return await self.collection.count_documents({})
        except PyMongoError as e:
            raise StoryStoreError("Failed to count stories") from e
