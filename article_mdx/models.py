"""Data models used throughout the extraction pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass
class PageMetadata:
    """Metadata describing the extracted page."""

    title: str
    byline: Optional[str]
    excerpt: Optional[str]


@dataclass(frozen=True)
class Article:
    """Final extraction result: metadata plus the converted Markdown body."""

    title: str
    byline: Optional[str]
    excerpt: Optional[str]
    body_markdown: str
    source_url: str

    @property
    def metadata(self) -> PageMetadata:
        return PageMetadata(title=self.title, byline=self.byline, excerpt=self.excerpt)


@dataclass
class CodeBlock:
    """Raw code captured from a ``<pre>`` element."""

    text: str
    language: str = ""


@dataclass
class ConversionContext:
    """Per-conversion scratch state mapping placeholder tokens to code blocks."""

    nonce: str
    code_blocks: Dict[str, CodeBlock] = field(default_factory=dict)

    def protect(self, block: CodeBlock) -> str:
        token = f"MDXCODEBLOCK{len(self.code_blocks)}X{self.nonce}"
        self.code_blocks[token] = block
        return token
