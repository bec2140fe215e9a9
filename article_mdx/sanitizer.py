"""Strip boilerplate subtrees from the selected content root."""

from __future__ import annotations

import logging
from typing import List, Optional

from bs4 import Tag

from .config import SanitizerConfig
from .utils import class_id_string

logger = logging.getLogger("article_mdx")


def is_boilerplate(tag: Tag, config: SanitizerConfig) -> bool:
    """Return True when the tag matches any removal rule."""
    name = tag.name
    if name in config.removed_tags:
        return True
    if name == "header" and tag.find_parent("article") is None:
        return True
    if name == "iframe":
        src = (tag.get("src") or "").lower()
        if not any(host in src for host in config.allowed_embed_hosts):
            return True
    if (tag.get("role") or "").lower() == "navigation":
        return True
    signals = class_id_string(tag).lower()
    return any(marker in signals for marker in config.boilerplate_markers)


def sanitize(root: Tag, config: Optional[SanitizerConfig] = None) -> int:
    """Remove boilerplate descendants of ``root`` in place.

    Matches are collected on the untouched tree before anything is removed, so
    the result does not depend on rule order. Returns the number of subtrees
    that were excised.
    """
    config = config or SanitizerConfig()
    matches: List[Tag] = [
        tag for tag in root.find_all(True) if is_boilerplate(tag, config)
    ]

    removed = 0
    for tag in matches:
        # Nested matches disappear together with their removed ancestor.
        if tag.decomposed:
            continue
        tag.decompose()
        removed += 1
    if removed:
        logger.debug("Removed %d boilerplate subtrees", removed)
    return removed
