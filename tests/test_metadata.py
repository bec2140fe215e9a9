# tests/test_metadata.py
"""
Tests for ``article_mdx.metadata``: title, byline and excerpt discovery.
"""

import pytest
from bs4 import BeautifulSoup

from article_mdx.metadata import (
    extract_byline,
    extract_excerpt,
    extract_metadata,
    extract_title,
)


def _soup(head: str = "", body: str = "") -> BeautifulSoup:
    return BeautifulSoup(
        f"<html><head>{head}</head><body>{body}</body></html>", "html.parser"
    )


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Big News – Example News Site", "Big News"),
        ("Big News - Example", "Big News"),
        ("Big News | Example", "Big News"),
        ("Big News — Example | Section", "Big News"),
        ("Well-known hyphenated title", "Well-known hyphenated title"),
    ],
)
def test_site_suffix_is_stripped(raw, expected):
    assert extract_title(_soup(f"<title>{raw}</title>")) == expected


def test_short_title_falls_back_to_og_title():
    soup = _soup(
        '<title>Hi | Site</title><meta property="og:title" content="Open Graph Title">',
        "<h1>Heading</h1>",
    )
    assert extract_title(soup) == "Open Graph Title"


def test_short_title_falls_back_to_h1():
    soup = _soup("<title>Hi</title>", "<h1>  Heading   text </h1>")
    assert extract_title(soup) == "Heading text"


def test_untitled_title_falls_back():
    soup = _soup("<title>Untitled document</title>", "<h1>Real heading</h1>")
    assert extract_title(soup) == "Real heading"


def test_missing_title_defaults():
    assert extract_title(_soup()) == "Untitled"


def test_byline_from_meta_author():
    soup = _soup('<meta name="author" content="Jane Doe">', '<div class="byline">By Other</div>')
    assert extract_byline(soup) == "Jane Doe"


def test_byline_from_article_author_meta():
    soup = _soup('<meta property="article:author" content="John Roe">')
    assert extract_byline(soup) == "John Roe"


def test_byline_from_author_class_skips_related():
    soup = _soup(
        body='<span class="related-author">Someone Else</span>'
        '<div class="post-author">By <a href="/jane">Jane Doe</a></div>'
    )
    assert extract_byline(soup) == "By Jane Doe"


def test_byline_length_bounds():
    soup = _soup(
        body='<div class="author">Joe</div>'
        f'<div class="author-bio">{"x" * 120}</div>'
        '<p class="byline">By Alexander Writer</p>'
    )
    assert extract_byline(soup) == "By Alexander Writer"


def test_byline_absent():
    soup = _soup(body='<div class="author">Al</div><p>No byline here</p>')
    assert extract_byline(soup) is None


def test_excerpt_prefers_og_description():
    soup = _soup(
        '<meta property="og:description" content="Open graph summary text">'
        '<meta name="description" content="Plain description text">'
    )
    assert extract_excerpt(soup) == "Open graph summary text"


def test_excerpt_skips_short_candidates():
    soup = _soup(
        '<meta property="og:description" content="short">'
        '<meta name="description" content="A longer description here">'
    )
    assert extract_excerpt(soup) == "A longer description here"


def test_excerpt_absent():
    soup = _soup('<meta name="description" content="tiny text">')
    assert extract_excerpt(soup) is None


def test_extract_metadata_combines_fields():
    soup = _soup(
        "<title>Big News – Example News Site</title>"
        '<meta name="author" content="Jane Doe">'
        '<meta name="description" content="Everything about the news.">'
    )
    metadata = extract_metadata(soup)
    assert metadata.title == "Big News"
    assert metadata.byline == "Jane Doe"
    assert metadata.excerpt == "Everything about the news."
