"""Pytest configuration and fixtures."""

import copy
from collections.abc import AsyncGenerator
from types import SimpleNamespace
from typing import Any

import boto3
import pytest
from botocore.client import Config
from httpx import ASGITransport, AsyncClient

from storyforge.api.dependencies import get_story_repository, get_upload_coordinator
from storyforge.main import app
from storyforge.repositories.story_repo import StoryRepository
from storyforge.services.media_upload import MediaUploadCoordinator

TEST_S3_ENDPOINT = "http://localstack:4566"
TEST_S3_PUBLIC_URL = "http://localhost:4566"
TEST_BUCKET = "media"


class FakeCursor:
    """Minimal async cursor over a list of documents."""

    def __init__(self, docs: list[dict[str, Any]]) -> None:
        self._docs = docs
        self._skip = 0
        self._limit = 0

    def sort(self, key: str, direction: int) -> "FakeCursor":
        self._docs = sorted(self._docs, key=lambda d: d[key], reverse=direction < 0)
        return self

    def skip(self, count: int) -> "FakeCursor":
        self._skip = count
        return self

    def limit(self, count: int) -> "FakeCursor":
        self._limit = count
        return self

    async def to_list(self, length: int | None = None) -> list[dict[str, Any]]:
        docs = self._docs[self._skip:]
        if self._limit:
            docs = docs[: self._limit]
        return [copy.deepcopy(d) for d in docs]


class FakeStoriesCollection:
    """In-memory stand-in for the async stories collection.

    Supports only the _id filters and $set updates the repository issues.
    """

    def __init__(self) -> None:
        self.docs: dict[Any, dict[str, Any]] = {}

    async def insert_one(self, document: dict[str, Any]) -> SimpleNamespace:
        self.docs[document["_id"]] = copy.deepcopy(document)
        return SimpleNamespace(inserted_id=document["_id"])

    async def find_one(self, filter: dict[str, Any]) -> dict[str, Any] | None:
        doc = self.docs.get(filter["_id"])
        return copy.deepcopy(doc) if doc is not None else None

    async def update_one(self, filter: dict[str, Any], update: dict[str, Any]) -> SimpleNamespace:
        doc = self.docs.get(filter["_id"])
        if doc is None:
            return SimpleNamespace(matched_count=0, modified_count=0)
        doc.update(copy.deepcopy(update["$set"]))
        return SimpleNamespace(matched_count=1, modified_count=1)

    async def delete_one(self, filter: dict[str, Any]) -> SimpleNamespace:
        removed = self.docs.pop(filter["_id"], None)
        return SimpleNamespace(deleted_count=1 if removed is not None else 0)

    def find(self, filter: dict[str, Any]) -> FakeCursor:
        return FakeCursor(list(self.docs.values()))

    async def count_documents(self, filter: dict[str, Any]) -> int:
        return len(self.docs)


@pytest.fixture
def stories_collection() -> FakeStoriesCollection:
    """Empty in-memory stories collection."""
    return FakeStoriesCollection()


@pytest.fixture
def story_repo(stories_collection) -> StoryRepository:
    """Repository backed by the in-memory collection."""
    return StoryRepository(stories_collection)  # type: ignore[arg-type]


@pytest.fixture
def s3_client():
    """Real boto3 client with dummy credentials; presigning needs no network."""
    return boto3.client(
        "s3",
        region_name="us-east-1",
        aws_access_key_id="test",
        aws_secret_access_key="test",
        endpoint_url=TEST_S3_ENDPOINT,
        config=Config(signature_version="s3v4", s3={"addressing_style": "path"}),
    )


@pytest.fixture
def coordinator(s3_client) -> MediaUploadCoordinator:
    """Upload coordinator pointed at the test endpoints."""
    return MediaUploadCoordinator(
        s3_client=s3_client,
        bucket=TEST_BUCKET,
        endpoint=TEST_S3_ENDPOINT,
        public_host=TEST_S3_PUBLIC_URL,
    )


@pytest.fixture
async def client(story_repo, coordinator) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client with service handles overridden."""
    app.dependency_overrides[get_story_repository] = lambda: story_repo
    app.dependency_overrides[get_upload_coordinator] = lambda: coordinator
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
