"""Article conversion endpoints.

Converts HTML imported from external blogging platforms into the HTML
subset accepted by the editor:

- POST /api/import/convert - any supported platform
- POST /api/medium/convert - Medium only, kept for older clients
"""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends

from bublr_import.api.models import (
    ClientErrorResponse,
    ConvertRequest,
    ConvertResponse,
    MediumConvertRequest,
)
from bublr_import.config.settings import Settings, get_settings
from bublr_import.core.exceptions import MissingInputError, TransformFailure
from bublr_import.monitoring.metrics import record_rule_rewrites, track_conversion
from bublr_import.normalizer import NormalizationPipeline, Platform, get_pipeline

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Import"])

_ERROR_RESPONSES = {
    400: {"model": ClientErrorResponse, "description": "Content missing"},
    500: {"model": ClientErrorResponse, "description": "Conversion failed"},
}


def convert_article(
    pipeline: NormalizationPipeline,
    content: Optional[str],
    title: Optional[str],
    platform: Platform,
) -> ConvertResponse:
    """Run one conversion and package the response.

    Raises:
        MissingInputError: If content is missing or empty.
        TransformFailure: If normalization failed.
    """
    if not content:
        raise MissingInputError("content", "Content is required")

    try:
        with track_conversion(platform.value):
            result = pipeline.run(content, platform)
    except TransformFailure as e:
        logger.error(
            "conversion_failed",
            platform=platform.value,
            rule=e.rule,
            error=e.message,
        )
        raise

    record_rule_rewrites(platform.value, result.rewrites)
    logger.info(
        "article_converted",
        platform=platform.value,
        input_length=len(content),
        output_length=len(result.html),
        rewrites=result.total_rewrites,
    )
    return ConvertResponse(title=title or "", content=result.html)


@router.post(
    "/import/convert",
    response_model=ConvertResponse,
    responses=_ERROR_RESPONSES,
    summary="Convert Article",
    description="Normalize article HTML from a supported platform into editor-compatible HTML.",
)
def convert(
    request: ConvertRequest,
    pipeline: NormalizationPipeline = Depends(get_pipeline),
    settings: Settings = Depends(get_settings),
) -> ConvertResponse:
    platform_id = request.platform if request.platform is not None else settings.default_platform
    return convert_article(
        pipeline,
        request.content,
        request.title,
        Platform.resolve(platform_id),
    )


@router.post(
    "/medium/convert",
    response_model=ConvertResponse,
    responses=_ERROR_RESPONSES,
    summary="Convert Medium Article",
    description="Normalize Medium article HTML. Equivalent to /import/convert with platform=medium.",
)
def convert_medium(
    request: MediumConvertRequest,
    pipeline: NormalizationPipeline = Depends(get_pipeline),
) -> ConvertResponse:
    return convert_article(pipeline, request.content, request.title, Platform.MEDIUM)
