"""Feed preview endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends

from common.config import PipelineConfig
from fetch_news.fetch_news import fetch_news
from news_api.dependencies import get_pipeline_config
from news_api.models.requests import FetchNewsRequest
from news_api.models.responses import FetchNewsResponse, NewsItemResponse

router = APIRouter(tags=["feeds"])


@router.post("/fetch-news", response_model=FetchNewsResponse, response_model_by_alias=True)
def fetch_news_items(
    body: FetchNewsRequest,
    config: Annotated[PipelineConfig, Depends(get_pipeline_config)],
):
    """Ranked, cleaned feed items for a category without publishing anything."""
    items = fetch_news(body.category, focus_regional=body.focus_regional, limit=body.limit, config=config.feeds)
    return FetchNewsResponse(
        news=[
            NewsItemResponse(
                title=item.title,
                description=item.description,
                link=item.link,
                pub_date=item.published_at,
                source=item.source,
                category=item.category,
            )
            for item in items
        ]
    )
