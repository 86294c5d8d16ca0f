"""Article translation endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from common.config import PipelineConfig
from news_api.dependencies import get_pipeline_config
from news_api.models.requests import TranslateArticleRequest
from news_api.models.responses import TranslateArticleResponse
from rewrite_articles.models import RewriteStatus
from rewrite_articles.translate_article import translate_article

router = APIRouter(tags=["translate"])

STATUS_CODES = {
    RewriteStatus.QUOTA_EXHAUSTED: 402,
    RewriteStatus.RATE_LIMITED: 429,
}


@router.post("/translate-article", response_model=TranslateArticleResponse, response_model_by_alias=True)
def translate_article_route(
    body: TranslateArticleRequest,
    config: Annotated[PipelineConfig, Depends(get_pipeline_config)],
):
    if not body.title or not body.content or not body.target_language:
        return JSONResponse(
            status_code=400,
            content={"error": "Missing required fields: title, content, targetLanguage"},
        )

    outcome = translate_article(body.title, body.content, body.target_language, config=config.ai)
    if outcome.status is not RewriteStatus.OK:
        status_code = STATUS_CODES.get(outcome.status, 500)
        return JSONResponse(status_code=status_code, content={"error": outcome.error or "Translation failed"})

    return TranslateArticleResponse(
        translated_title=outcome.title,
        translated_content=outcome.content,
        language=outcome.language,
    )
