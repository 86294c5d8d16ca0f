"""Response bodies."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class NewsItemResponse(BaseModel):
    title: str
    description: str
    link: str
    pub_date: datetime = Field(serialization_alias="pubDate")
    source: str
    category: str


class FetchNewsResponse(BaseModel):
    news: list[NewsItemResponse]


class RewriteArticleResponse(BaseModel):
    title: str
    content: str
    excerpt: str
    image_prompt: Optional[str] = Field(default=None, serialization_alias="imagePrompt")
    seo_keywords: list[str] = Field(default_factory=list, serialization_alias="seoKeywords")


class GenerateImageResponse(BaseModel):
    image_url: str = Field(serialization_alias="imageUrl")
    placeholder: bool = False


class TranslateArticleResponse(BaseModel):
    translated_title: str = Field(serialization_alias="translatedTitle")
    translated_content: str = Field(serialization_alias="translatedContent")
    language: str
