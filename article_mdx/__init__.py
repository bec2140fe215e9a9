"""Readability-style article extraction and HTML to Markdown conversion."""

from .extractor import convert_html, extract_article
from .markdown import compose_markdown, normalize_whitespace, to_markdown
from .models import Article, PageMetadata

__all__ = [
    "Article",
    "PageMetadata",
    "compose_markdown",
    "convert_html",
    "extract_article",
    "normalize_whitespace",
    "to_markdown",
]
