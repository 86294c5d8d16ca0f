"""Data models for the fetch_news stage."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class FeedEntry:
    """Raw fields extracted from one feed item, before cleaning."""
    title: Optional[str]
    description: Optional[str]
    link: Optional[str]
    published: Optional[str]


@dataclass
class RawNewsItem:
    """Cleaned news item ready for rewriting."""
    title: str
    description: str
    link: str
    published_at: datetime
    source: str
    category: str
    is_preferred: bool = False
