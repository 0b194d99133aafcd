"""API router aggregator."""

from fastapi import APIRouter

from storyforge.api.stories import router as stories_router

router = APIRouter()
router.include_router(stories_router)
