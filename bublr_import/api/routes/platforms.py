"""Import platform endpoints.

Lists the platforms articles can be imported from and resolves a user's
handle or blog address to the RSS feed the import client should fetch.
"""

import structlog
from fastapi import APIRouter

from bublr_import.api.models import (
    ClientErrorResponse,
    PlatformInfo,
    PlatformListResponse,
    ResolveFeedRequest,
    ResolveFeedResponse,
)
from bublr_import.sources.registry import list_platforms, resolve_feed

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/import", tags=["Platforms"])


@router.get(
    "/platforms",
    response_model=PlatformListResponse,
    summary="List Platforms",
)
async def get_platforms() -> PlatformListResponse:
    """List importable platforms with their display details."""
    return PlatformListResponse(
        platforms=[PlatformInfo(**source.to_dict()) for source in list_platforms()],
    )


@router.post(
    "/resolve",
    response_model=ResolveFeedResponse,
    responses={400: {"model": ClientErrorResponse, "description": "Invalid platform or handle"}},
    summary="Resolve Feed",
    description="Validate a platform handle or blog address and return its RSS feed URLs.",
)
async def resolve(request: ResolveFeedRequest) -> ResolveFeedResponse:
    feed = resolve_feed(request.platform, request.username)
    logger.info("feed_resolved", platform=feed["platform"], username=feed["username"])
    return ResolveFeedResponse(**feed)
