"""Filename sanitizing and persistence of converted documents."""

from __future__ import annotations

import logging
import re
from pathlib import Path, PurePosixPath

from .config import MAX_DOCUMENT_BYTES
from .models import Article
from .utils import slugify

logger = logging.getLogger("article_mdx")

INVALID_FILENAME_CHARS = re.compile(r"[^a-z0-9äöüß\-_.]", re.IGNORECASE)
DOCUMENT_SUFFIX_PATTERN = re.compile(r"\.(md|html|htm)$", re.IGNORECASE)


class DocumentTooLargeError(ValueError):
    """Raised when a document exceeds the configured size cap."""


def sanitize_filename(name: str) -> str:
    """Reduce a user supplied name to a safe basename ending in a document suffix."""
    basename = PurePosixPath(name.replace("\\", "/")).name
    cleaned = INVALID_FILENAME_CHARS.sub("_", basename).strip("_")
    if not cleaned:
        raise ValueError(
            f'Filename "{name}" contains only invalid characters. '
            "Use only: a-z, 0-9, äöüß, -, _, ."
        )
    if not DOCUMENT_SUFFIX_PATTERN.search(cleaned):
        cleaned += ".md"
    return cleaned


def default_filename(article: Article) -> str:
    return slugify(article.title, fallback="article")[:80] + ".md"


def save_document(
    output_root: Path,
    filename: str,
    content: str,
    max_bytes: int = MAX_DOCUMENT_BYTES,
) -> Path:
    """Write a document without overwriting anything already stored."""
    if not content.strip():
        raise ValueError("Content required")
    data = content.encode("utf-8")
    if len(data) > max_bytes:
        raise DocumentTooLargeError(
            f"Content too large ({len(data)} bytes, limit {max_bytes})"
        )

    output_root.mkdir(parents=True, exist_ok=True)
    target = output_root / sanitize_filename(filename)
    try:
        with target.open("xb") as handle:
            handle.write(data)
    except FileExistsError:
        raise FileExistsError(f"File already exists: {target.name}") from None
    logger.info("Saved Markdown to %s", target)
    return target
