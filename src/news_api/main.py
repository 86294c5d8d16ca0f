"""FastAPI application entry point."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from common.cli_helpers import setup_logging
from common.config import get_config
from news_api.routers import feeds, generate, health, images, rewrite, translate
from publish_articles.errors import AuthorizationError

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Newsroom API",
    description="Fetch, rewrite, illustrate and publish breaking news articles",
    version="1.0.0",
)

app.include_router(health.router)
app.include_router(generate.router)
app.include_router(feeds.router)
app.include_router(rewrite.router)
app.include_router(images.router)
app.include_router(translate.router)


@app.exception_handler(AuthorizationError)
async def authorization_error_handler(request: Request, exc: AuthorizationError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    fields = sorted({".".join(str(part) for part in error["loc"][1:]) for error in exc.errors()})
    logger.warning("Rejected %s: invalid %s", request.url.path, ", ".join(fields) or "body")
    return JSONResponse(status_code=400, content={"error": f"Invalid request: {', '.join(fields) or 'body'}"})


@app.get("/")
async def root():
    """API root - returns basic info."""
    return {
        "name": "Newsroom API",
        "version": "1.0.0",
        "docs": "/docs",
    }


def main():
    """Run the API server."""
    import uvicorn

    config = get_config()
    uvicorn.run(
        "news_api.main:app",
        host=config.server.host,
        port=config.server.port,
    )


if __name__ == "__main__":
    main()
