"""Domain error taxonomy."""


class StoryForgeError(Exception):
    """Base class for all StoryForge errors."""


class InvalidIdentifierError(StoryForgeError, ValueError):
    """Raised when an identity string is not a valid object id."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Invalid identifier: {value!r}")
        self.value = value


class StoryNotFoundError(StoryForgeError):
    """Raised when a story cannot be read back from the store."""

    def __init__(self, story_id: str) -> None:
        super().__init__(f"Story not found: {story_id}")
        self.story_id = story_id


class StoryStoreError(StoryForgeError):
    """Raised when the document store fails an operation."""


class UploadURLError(StoryForgeError):
    """Raised when a presigned upload URL cannot be generated."""
