"""Image generation endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from common.config import PipelineConfig
from news_api.dependencies import get_pipeline_config
from news_api.models.requests import GenerateImageRequest
from news_api.models.responses import GenerateImageResponse
from resolve_images.resolve_image import resolve_image

router = APIRouter(tags=["images"])

QUOTA_MESSAGES = {
    402: "AI credits exhausted",
    429: "Rate limit exceeded. Please try again later.",
}


@router.post("/generate-news-image", response_model=GenerateImageResponse, response_model_by_alias=True)
def generate_news_image(
    body: GenerateImageRequest,
    config: Annotated[PipelineConfig, Depends(get_pipeline_config)],
):
    """Generate a header image, or a placeholder when generation fails.

    Quota and rate-limit signals are returned to the caller instead of being
    hidden behind a placeholder.
    """
    result = resolve_image(
        body.prompt,
        body.article_slug,
        ai_config=config.ai,
        images_config=config.images,
    )
    if result.is_quota_signal:
        return JSONResponse(
            status_code=result.upstream_status,
            content={"error": QUOTA_MESSAGES[result.upstream_status]},
        )
    return GenerateImageResponse(image_url=result.image_url, placeholder=result.placeholder)
