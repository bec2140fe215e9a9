"""Configuration objects and constants for extraction and conversion."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
MAX_DOCUMENT_BYTES = 5 * 1024 * 1024

CONTENT_SELECTORS: Tuple[str, ...] = (
    "#mw-content-text",  # Wikipedia
    '[class*="article-content"]',
    '[class*="post-content"]',
    '[class*="entry-content"]',
    '[class*="content-body"]',
    '[class*="article-body"]',
    '#content div[class*="content"]',
)


@dataclass
class ScoringConfig:
    """Patterns, weights and thresholds used to pick the article root."""

    min_text_length: int = 200
    text_length_divisor: float = 100.0
    max_length_score: float = 50.0
    positive_bonus: float = 25.0
    paragraph_weight: float = 3.0
    candidate_tags: Tuple[str, ...] = ("div", "article", "section")
    negative_pattern: str = (
        r"nav|sidebar|footer|header|menu|comment|ad|promo|related|teaser"
    )
    positive_pattern: str = r"article|content|post|entry|main|body"
    excluded_article_markers: Tuple[str, ...] = ("teaser", "related")
    content_selectors: Tuple[str, ...] = CONTENT_SELECTORS


@dataclass
class SanitizerConfig:
    """Boilerplate removal rules applied to the chosen root."""

    removed_tags: Tuple[str, ...] = (
        "nav",
        "aside",
        "footer",
        "script",
        "style",
        "noscript",
        "form",
        "button",
    )
    boilerplate_markers: Tuple[str, ...] = (
        "advertisement",
        "ad-",
        "sidebar",
        "related",
        "teaser",
        "comments",
        "social",
        "share",
        "navigation",
        "meta",
    )
    allowed_embed_hosts: Tuple[str, ...] = ("youtube", "vimeo")


@dataclass
class ConversionConfig:
    """Switches for the HTML to Markdown transducer."""

    drop_noise_lines: bool = True
    bullet: str = "-"


@dataclass
class ExtractionConfig:
    """Bundle of settings for one extraction pipeline run."""

    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    sanitizer: SanitizerConfig = field(default_factory=SanitizerConfig)
    conversion: ConversionConfig = field(default_factory=ConversionConfig)


@dataclass
class FetchConfig:
    """Settings for downloading or rendering a remote page."""

    timeout: float = 30.0
    user_agent: str = DEFAULT_USER_AGENT
    render: bool = False
    wait_after_load: float = 1.0


@dataclass
class ConvertConfig:
    """Top-level settings that control fetching, extraction and storage."""

    output_root: Path
    fetch: FetchConfig = field(default_factory=FetchConfig)
    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)
    filename: Optional[str] = None
    max_document_bytes: int = MAX_DOCUMENT_BYTES
