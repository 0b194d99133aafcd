"""FastAPI dependency injection providers."""

import secrets
from typing import Annotated

from botocore.client import BaseClient
from fastapi import Depends, HTTPException, Request, Security
from fastapi.security import APIKeyHeader
from pymongo.asynchronous.collection import AsyncCollection

from storyforge.config import Settings, get_settings
from storyforge.repositories.story_repo import StoryRepository
from storyforge.services.media_upload import MediaUploadCoordinator

SettingsDep = Annotated[Settings, Depends(get_settings)]

# --- API Key Authentication ---

_api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


async def require_api_key(
    api_key: str | None = Security(_api_key_header),
) -> str:
    """Verify API key for upload grants.

    If API_KEY is not configured (empty), auth is skipped.
    Set API_KEY to require the X-API-Key header.
    """
    settings = get_settings()
    if not settings.api_key:
        return "anonymous"
    if not api_key or not secrets.compare_digest(api_key, settings.api_key):
        raise HTTPException(status_code=403, detail="Invalid or missing API key")
    return api_key


ApiKeyDep = Annotated[str, Depends(require_api_key)]


# --- Service handles created at startup ---


def get_stories_collection(request: Request) -> AsyncCollection:
    """Provide the stories collection opened by the lifespan handler."""
    return request.app.state.stories_collection


def get_s3_client(request: Request) -> BaseClient:
    """Provide the S3 client created by the lifespan handler."""
    return request.app.state.s3_client


def get_story_repository(
    collection: Annotated[AsyncCollection, Depends(get_stories_collection)],
) -> StoryRepository:
    """Provide StoryRepository instance."""
    return StoryRepository(collection)


def get_upload_coordinator(
    s3_client: Annotated[BaseClient, Depends(get_s3_client)],
    settings: SettingsDep,
) -> MediaUploadCoordinator:
    """Provide MediaUploadCoordinator instance."""
    return MediaUploadCoordinator.from_settings(s3_client, settings)


# Type aliases for commonly used dependencies
StoryRepoDep = Annotated[StoryRepository, Depends(get_story_repository)]
UploadCoordinatorDep = Annotated[MediaUploadCoordinator, Depends(get_upload_coordinator)]
