"""Text cleaning shared by the feed fetcher and the fallback rewriter."""

from __future__ import annotations

import html
import re
from typing import Optional

_CDATA_RE = re.compile(r"<!\[CDATA\[(.*?)\]\]>", re.DOTALL)
_CDATA_MARKERS_RE = re.compile(r"<!\[CDATA\[|\]\]>")
_TAG_RE = re.compile(r"<(?:!--.*?--|/?[A-Za-z][^<>]*)>", re.DOTALL)
_WHITESPACE_RE = re.compile(r"\s+")


def unwrap_cdata(text: str) -> str:
    """Replace CDATA sections with their inner text, dropping stray markers."""
    text = _CDATA_RE.sub(lambda match: match.group(1), text)
    return _CDATA_MARKERS_RE.sub("", text)


def clean_text(text: Optional[str], max_chars: int | None = None) -> Optional[str]:
    """Clean feed text: unwrap CDATA, strip tags, decode entities, collapse whitespace.

    Tags are stripped before entity decoding, so an encoded ``&lt;`` survives
    as a literal ``<``. Only letter-led tags and comments count as markup,
    which keeps cleaning already-clean text a no-op.
    """
    if not text:
        return None
    text = unwrap_cdata(text)
    text = _TAG_RE.sub(" ", text)
    text = html.unescape(text)
    # Remove escaped quotes
    text = text.replace('\\"', '"')
    text = _WHITESPACE_RE.sub(" ", text).strip()
    if max_chars is not None and len(text) > max_chars:
        text = text[:max_chars].rstrip()
    return text if text else None


def truncate_words(text: str, max_chars: int, ellipsis: str = "...") -> str:
    """Truncate at the last whole word so the result fits ``max_chars``.

    The ellipsis counts towards the bound and is appended only when something
    was cut, after trailing punctuation (including an existing ellipsis) has
    been trimmed.
    """
    if len(text) <= max_chars:
        return text

    budget = max(max_chars - len(ellipsis), 1)
    cut = text[: budget + 1]
    space = cut.rfind(" ")
    if space > 0:
        cut = cut[:space]
    else:
        cut = text[:budget]

    cut = cut.rstrip(" .,;:!?…-")
    return f"{cut}{ellipsis}"


def word_count(text: Optional[str]) -> int:
    """Count words in text after stripping markup."""
    cleaned = clean_text(text)
    return len(cleaned.split()) if cleaned else 0
