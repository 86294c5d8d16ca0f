"""Allow-list sanitization for AI-written HTML bodies."""

from __future__ import annotations

import html

from lxml import etree
from lxml import html as lxml_html

ALLOWED_TAGS = {
    "p", "h2", "h3", "h4", "ul", "ol", "li", "strong", "em", "b", "i",
    "blockquote", "a", "br", "hr",
}
DROP_WITH_CONTENT = {"script", "style", "iframe", "object", "embed", "form", "noscript"}
SAFE_SCHEMES = ("http://", "https://")


def sanitize_html(fragment: str) -> str:
    """Keep allow-listed tags, drop dangerous ones with their content, strip attributes.

    Links keep only an http(s) ``href``.
    """
    if not fragment or not fragment.strip():
        return ""

    container = lxml_html.fragment_fromstring(fragment, create_parent="div")

    for element in list(container.iter()):
        if element is container or not isinstance(element.tag, str):
            continue
        if element.tag in DROP_WITH_CONTENT:
            element.drop_tree()

    for element in list(container.iter()):
        if element is container:
            continue
        if not isinstance(element.tag, str):
            # Comments and processing instructions
            element.drop_tree()
            continue
        if element.tag not in ALLOWED_TAGS:
            element.drop_tag()
            continue

        href = element.get("href") if element.tag == "a" else None
        for attribute in list(element.attrib):
            del element.attrib[attribute]
        if href and href.strip().lower().startswith(SAFE_SCHEMES):
            element.set("href", href.strip())
            element.set("rel", "noopener nofollow")

    parts = [html.escape(container.text)] if container.text else []
    parts.extend(etree.tostring(child, encoding="unicode", method="html") for child in container)
    return "".join(parts).strip()
