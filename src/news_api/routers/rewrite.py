"""Single-article rewrite endpoint."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from common.config import PipelineConfig
from news_api.dependencies import get_credentials, get_db_session, get_pipeline_config
from news_api.models.requests import RewriteArticleRequest
from news_api.models.responses import RewriteArticleResponse
from publish_articles.authorize import EDITOR_CHAIN, authorize
from publish_articles.models import Credentials
from rewrite_articles.models import RewriteStatus
from rewrite_articles.rewrite_article import rewrite_text

logger = logging.getLogger(__name__)

router = APIRouter(tags=["rewrite"])

ERROR_MESSAGES = {
    RewriteStatus.QUOTA_EXHAUSTED: (402, "AI credits exhausted. Please add credits to continue."),
    RewriteStatus.RATE_LIMITED: (429, "Rate limit exceeded. Please try again later."),
}


@router.post("/rewrite-article", response_model=RewriteArticleResponse, response_model_by_alias=True)
def rewrite_article_route(
    body: RewriteArticleRequest,
    credentials: Annotated[Credentials, Depends(get_credentials)],
    session: Annotated[Session, Depends(get_db_session)],
    config: Annotated[PipelineConfig, Depends(get_pipeline_config)],
):
    """Rewrite one item. Requires the service credential or an editor/admin token."""
    authorize(credentials, session, config.auth, checks=EDITOR_CHAIN)

    outcome = rewrite_text(
        title=body.title,
        description=body.description,
        source=body.source,
        language=body.language,
        optimize_seo=body.optimize_seo,
        config=config.ai,
    )

    if outcome.draft is None:
        status_code, message = ERROR_MESSAGES.get(outcome.status, (500, outcome.error or "Rewrite failed"))
        return JSONResponse(status_code=status_code, content={"error": message})

    draft = outcome.draft
    return RewriteArticleResponse(
        title=draft.title,
        content=draft.content,
        excerpt=draft.excerpt,
        image_prompt=draft.image_prompt,
        seo_keywords=list(draft.keywords),
    )
