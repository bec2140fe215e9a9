"""Utility helpers for string normalization and path handling."""

from __future__ import annotations

import re

SLUG_PATTERN = re.compile(r"[^a-z0-9]+")
WHITESPACE_PATTERN = re.compile(r"\s+")


def slugify(value: str, fallback: str = "page") -> str:
    """Generate a filesystem-friendly slug using ASCII characters only."""
    normalized = value.encode("ascii", "ignore").decode("ascii")
    normalized = normalized.lower()
    normalized = SLUG_PATTERN.sub("-", normalized).strip("-")
    return normalized or fallback


def collapse_whitespace(value: str) -> str:
    """Collapse every whitespace run to one space and trim the ends."""
    return WHITESPACE_PATTERN.sub(" ", value).strip()


def class_id_string(tag) -> str:
    """Return a tag's class list and id joined the way an XPath ``contains`` sees them."""
    classes = tag.get("class") or []
    if isinstance(classes, str):
        classes = [classes]
    return f"{' '.join(classes)} {tag.get('id') or ''}".strip()
