"""Publication run endpoint."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from common.config import PipelineConfig
from news_api.dependencies import get_credentials, get_db_session, get_pipeline_config
from news_api.models.requests import AutoGenerateRequest
from publish_articles.errors import AuthorizationError
from publish_articles.models import Credentials, PublishRequest
from publish_articles.publish_articles import publish_articles

logger = logging.getLogger(__name__)

router = APIRouter(tags=["publish"])


@router.post("/auto-generate-news")
def auto_generate_news(
    body: AutoGenerateRequest,
    credentials: Annotated[Credentials, Depends(get_credentials)],
    session: Annotated[Session, Depends(get_db_session)],
    config: Annotated[PipelineConfig, Depends(get_pipeline_config)],
):
    """Fetch, rewrite, illustrate and publish breaking articles.

    Authorized by the cron secret, the service credential, or an
    editor/admin bearer token. Individual item failures only reduce the
    number of articles created.
    """
    request = PublishRequest(
        category_ids=body.category_ids,
        category_names=body.category_names,
        count=body.count,
        language=body.language,
        rss_only=body.rss_only,
    )
    try:
        result = publish_articles(request, credentials, session, config)
    except AuthorizationError:
        raise
    except Exception as e:
        logger.exception("Auto-generate news failed")
        return JSONResponse(status_code=500, content={"error": str(e)})

    return result.to_response()
