# tests/conftest.py
"""Shared HTML fixtures."""

import pytest

ARTICLE_PAGE = """<!DOCTYPE html>
<html><head>
<meta charset="utf-8">
<title>Big News – Example News Site</title>
<meta name="author" content="Jane Doe">
<meta property="og:description" content="Everything you need to know about the big news.">
</head><body>
<header class="site-header"><nav><a href="/">Home</a></nav></header>
<article class="story">
  <header><h1>Big News</h1></header>
  <p>The <strong>first</strong> paragraph explains the <a href="https://news.example/more">details</a>.</p>
  <aside class="promo">Subscribe now!</aside>
  <p>A second paragraph.</p>
  <pre><code>print(&quot;hi&quot;)</code></pre>
  <table><tr><th>Year</th><th>Count</th></tr><tr><td>2024</td><td>3</td></tr></table>
  <div class="share-tools">Share this</div>
  <script>track();</script>
</article>
<footer>Copyright</footer>
</body></html>
"""

EXPECTED_DOCUMENT = (
    "# Big News\n\n"
    "*Jane Doe*\n\n"
    "**Source:** https://news.example/big\n\n"
    "> Everything you need to know about the big news.\n\n"
    "---\n\n"
    "# Big News\n\n"
    "The **first** paragraph explains the [details](https://news.example/more).\n\n"
    "A second paragraph.\n\n"
    '```\nprint("hi")\n```\n\n'
    "| Year | Count |\n"
    "| --- | --- |\n"
    "| 2024 | 3 |"
)

EMPTY_PAGE = """<html><head><title>Nothing Here At All</title></head>
<body><div class="menu">Home</div><p>Short text.</p></body></html>
"""


@pytest.fixture
def article_page() -> bytes:
    return ARTICLE_PAGE.encode("utf-8")


@pytest.fixture
def empty_page() -> bytes:
    return EMPTY_PAGE.encode("utf-8")


@pytest.fixture
def expected_document() -> str:
    return EXPECTED_DOCUMENT
