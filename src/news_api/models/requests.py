"""Request bodies. Field names follow the camelCase JSON the clients send."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class AutoGenerateRequest(_CamelModel):
    category_ids: list[str] = Field(alias="categoryIds", min_length=1)
    category_names: list[str] = Field(alias="categoryNames", min_length=1)
    count: int = Field(default=1, ge=1, le=20)
    language: str = "en"
    rss_only: bool = Field(default=False, alias="rssOnly")


class FetchNewsRequest(_CamelModel):
    category: str = "world"
    limit: int = Field(default=5, ge=1, le=50)
    focus_regional: bool = Field(default=True, alias="focusRegional")


class RewriteArticleRequest(_CamelModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    source: str = "News"
    language: str = "en"
    optimize_seo: bool = Field(default=True, alias="optimizeSEO")


class GenerateImageRequest(_CamelModel):
    prompt: str = Field(min_length=1)
    article_slug: str = Field(default="article", alias="articleSlug")


class TranslateArticleRequest(_CamelModel):
    # Checked in the route so missing fields answer 400 with the usual error body
    title: Optional[str] = None
    content: Optional[str] = None
    target_language: Optional[str] = Field(default=None, alias="targetLanguage")
