"""Title, byline and excerpt extraction."""

from __future__ import annotations

import re
from typing import Iterable, Iterator, Optional

from bs4 import BeautifulSoup, Tag

from .models import PageMetadata
from .utils import collapse_whitespace

DEFAULT_TITLE = "Untitled"
MIN_TITLE_CHARS = 5
MIN_BYLINE_CHARS = 3
MAX_BYLINE_CHARS = 100
MIN_EXCERPT_CHARS = 10

# Site-name suffixes such as "Story - Example", "Story | Example", "Story – Example".
TITLE_SUFFIX_PATTERN = re.compile(" [-|–—] .*$", re.DOTALL)


def _meta_content(soup: BeautifulSoup, **attrs: str) -> Optional[str]:
    tag = soup.find("meta", attrs=attrs)
    if tag is None:
        return None
    content = tag.get("content")
    if not content:
        return None
    return collapse_whitespace(content)


def _class_contains(tag: Tag, needle: str) -> bool:
    classes = tag.get("class") or []
    if isinstance(classes, str):
        classes = [classes]
    return needle in " ".join(classes)


def strip_site_suffix(title: str) -> str:
    """Remove everything from the first site-name separator onward."""
    return TITLE_SUFFIX_PATTERN.sub("", title).strip()


def extract_title(soup: BeautifulSoup) -> str:
    title = ""
    if soup.title is not None:
        title = strip_site_suffix(collapse_whitespace(soup.title.get_text()))

    if len(title) < MIN_TITLE_CHARS or "untitled" in title.lower():
        og_title = _meta_content(soup, property="og:title")
        if og_title:
            return og_title
        heading = soup.find("h1")
        if heading is not None:
            heading_text = collapse_whitespace(heading.get_text())
            if heading_text:
                return heading_text

    return title or DEFAULT_TITLE


def _byline_candidates(soup: BeautifulSoup) -> Iterator[Optional[str]]:
    yield _meta_content(soup, name="author")
    yield _meta_content(soup, property="article:author")
    for tag in soup.find_all(
        lambda t: _class_contains(t, "author") and not _class_contains(t, "related")
    ):
        yield collapse_whitespace(tag.get_text(" "))
    for tag in soup.find_all(lambda t: _class_contains(t, "byline")):
        yield collapse_whitespace(tag.get_text(" "))


def _first_fitting(
    candidates: Iterable[Optional[str]], min_chars: int, max_chars: Optional[int] = None
) -> Optional[str]:
    for candidate in candidates:
        if not candidate:
            continue
        if len(candidate) <= min_chars:
            continue
        if max_chars is not None and len(candidate) >= max_chars:
            continue
        return candidate
    return None


def extract_byline(soup: BeautifulSoup) -> Optional[str]:
    return _first_fitting(_byline_candidates(soup), MIN_BYLINE_CHARS, MAX_BYLINE_CHARS)


def extract_excerpt(soup: BeautifulSoup) -> Optional[str]:
    candidates = (
        _meta_content(soup, property="og:description"),
        _meta_content(soup, name="description"),
    )
    return _first_fitting(candidates, MIN_EXCERPT_CHARS)


def extract_metadata(soup: BeautifulSoup) -> PageMetadata:
    """Pull title, byline and excerpt from their usual locations in the page."""
    return PageMetadata(
        title=extract_title(soup),
        byline=extract_byline(soup),
        excerpt=extract_excerpt(soup),
    )
