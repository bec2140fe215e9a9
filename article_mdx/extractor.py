"""Extract the main article from a page and convert it to Markdown."""

from __future__ import annotations

import logging
from typing import Optional, Union

from .config import ExtractionConfig
from .loader import load_html
from .markdown import compose_markdown, to_markdown
from .metadata import extract_metadata
from .models import Article
from .sanitizer import sanitize
from .scoring import select_root

logger = logging.getLogger("article_mdx")


def extract_article(
    raw: Union[bytes, str],
    source_url: str,
    encoding: Optional[str] = None,
    config: Optional[ExtractionConfig] = None,
) -> Optional[Article]:
    """Run load, metadata, root selection, sanitizing and conversion.

    Returns ``None`` when no element qualifies as article content.
    """
    config = config or ExtractionConfig()
    soup = load_html(raw, encoding=encoding, url=source_url)
    metadata = extract_metadata(soup)

    root = select_root(soup, config.scoring)
    if root is None:
        logger.warning("No article content found in %s", source_url)
        return None

    sanitize(root, config.sanitizer)
    body = to_markdown(root, config.conversion)
    logger.debug("Converted %s to %d characters of Markdown", source_url, len(body))

    return Article(
        title=metadata.title,
        byline=metadata.byline,
        excerpt=metadata.excerpt,
        body_markdown=body,
        source_url=source_url,
    )


def convert_html(
    raw: Union[bytes, str],
    source_url: str,
    encoding: Optional[str] = None,
    config: Optional[ExtractionConfig] = None,
) -> Optional[str]:
    """Return the assembled Markdown document, or ``None`` if extraction failed."""
    article = extract_article(raw, source_url, encoding=encoding, config=config)
    if article is None:
        return None
    return compose_markdown(article.metadata, article.body_markdown, source_url)
