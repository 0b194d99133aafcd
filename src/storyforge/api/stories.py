"""Story API endpoints."""

from fastapi import APIRouter, HTTPException, Query, Response, status

from storyforge.api.dependencies import ApiKeyDep, StoryRepoDep, UploadCoordinatorDep
from storyforge.api.schemas import (
    StoryListResponse,
    StoryRequest,
    StoryResponse,
    UploadURLResponse,
)
from storyforge.domain.errors import (
    InvalidIdentifierError,
    StoryNotFoundError,
    StoryStoreError,
    UploadURLError,
)
from storyforge.domain.story import StoryUpdate


router = APIRouter(prefix="/stories", tags=["stories"])


@router.post("", response_model=StoryResponse, status_code=status.HTTP_201_CREATED)
async def create_story(
    payload: StoryRequest,
    story_repo: StoryRepoDep,
) -> StoryResponse:
    """Create a story. A missing segment list is stored as empty."""
    try:
        story = await story_repo.create(
            title=payload.title,
            segments=payload.domain_segments(),
            is_published=payload.is_published,
        )
    except StoryStoreError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e
    return StoryResponse.model_validate(story)


@router.get("", response_model=StoryListResponse)
async def list_stories(
    story_repo: StoryRepoDep,
    offset: int = Query(0, ge=0),
    limit: int = Query(30, ge=1, le=100),
) -> StoryListResponse:
    """List stories with pagination, newest first."""
    try:
        stories = await story_repo.list_stories(offset=offset, limit=limit)
        total = await story_repo.count()
    except StoryStoreError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e

    return StoryListResponse(
        stories=[StoryResponse.model_validate(s) for s in stories],
        total=total,
        offset=offset,
        limit=limit,
        has_more=offset + len(stories) < total,
    )


@router.get("/{story_id}", response_model=StoryResponse)
async def get_story(
    story_id: str,
    story_repo: StoryRepoDep,
) -> StoryResponse:
    """Get a single story by ID."""
    try:
        story = await story_repo.get_by_id(story_id)
    except InvalidIdentifierError as e:
        raise HTTPException(status_code=400, detail="Invalid story ID") from e
    except StoryStoreError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e

    if not story:
        raise HTTPException(status_code=404, detail="Story not found")
    return StoryResponse.model_validate(story)


@router.put("/{story_id}", response_model=StoryResponse)
async def update_story(
    story_id: str,
    payload: StoryRequest,
    story_repo: StoryRepoDep,
) -> StoryResponse:
    """Replace a story's title, segments and publication flag.

    A story missing after the write is reported as a server error.
    """
    changes = StoryUpdate.create(
        title=payload.title,
        segments=payload.domain_segments(),
        is_published=payload.is_published,
    )
    try:
        story = await story_repo.update(story_id, changes)
    except InvalidIdentifierError as e:
        raise HTTPException(status_code=400, detail="Invalid story ID") from e
    except (StoryNotFoundError, StoryStoreError) as e:
        raise HTTPException(status_code=500, detail=str(e)) from e
    return StoryResponse.model_validate(story)


@router.delete("/{story_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_story(
    story_id: str,
    story_repo: StoryRepoDep,
) -> Response:
    """Delete a story. Deleting a missing story still succeeds."""
    try:
        await story_repo.delete(story_id)
    except InvalidIdentifierError as e:
        raise HTTPException(status_code=400, detail="Invalid story ID") from e
    except StoryStoreError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{story_id}/segments/{segment_id}/audio",
    response_model=UploadURLResponse,
)
def issue_audio_upload_url(
    story_id: str,
    segment_id: str,
    coordinator: UploadCoordinatorDep,
    _auth: ApiKeyDep,
) -> UploadURLResponse:
    """Issue a presigned PUT URL for a segment's audio asset."""
    try:
        grant = coordinator.issue_audio_upload_url(story_id, segment_id)
    except UploadURLError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e
    return UploadURLResponse(upload_url=grant.upload_url, public_url=grant.public_url)
