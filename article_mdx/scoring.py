"""Locate the element that holds the main article content."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterator, List, Optional

from bs4 import BeautifulSoup, NavigableString, Tag

from .config import ScoringConfig
from .utils import class_id_string, collapse_whitespace

logger = logging.getLogger("article_mdx")

INVISIBLE_TAGS = frozenset({"script", "style", "noscript", "template"})


@dataclass
class Candidate:
    """A node under evaluation together with its content score."""

    node: Tag
    score: float


def visible_text(node: Tag) -> str:
    """Return the node's rendered text, skipping script-like containers."""
    parts: List[str] = []
    for descendant in node.descendants:
        # Comments, doctypes and script/style strings are NavigableString subclasses.
        if type(descendant) is not NavigableString:
            continue
        if any(parent.name in INVISIBLE_TAGS for parent in descendant.parents):
            continue
        parts.append(str(descendant))
    return collapse_whitespace("".join(parts))


def _find_article(soup: BeautifulSoup, config: ScoringConfig) -> Optional[Tag]:
    for article in soup.find_all("article"):
        classes = " ".join(article.get("class") or []).lower()
        if any(marker in classes for marker in config.excluded_article_markers):
            continue
        return article
    return None


def _find_main(soup: BeautifulSoup) -> Optional[Tag]:
    return soup.find("main")


def _find_by_selectors(soup: BeautifulSoup, config: ScoringConfig) -> Optional[Tag]:
    for selector in config.content_selectors:
        match = soup.select_one(selector)
        if match is not None:
            logger.debug("Content selector %s matched", selector)
            return match
    return None


def iter_candidates(soup: BeautifulSoup, config: ScoringConfig) -> Iterator[Candidate]:
    """Yield scored candidates in document order, skipping disqualified nodes."""
    negative = re.compile(config.negative_pattern, re.IGNORECASE)
    positive = re.compile(config.positive_pattern, re.IGNORECASE)

    for node in soup.find_all(list(config.candidate_tags)):
        signals = class_id_string(node)
        if negative.search(signals):
            continue
        text_length = len(visible_text(node))
        if text_length < config.min_text_length:
            continue

        score = min(text_length / config.text_length_divisor, config.max_length_score)
        if positive.search(signals):
            score += config.positive_bonus
        score += config.paragraph_weight * len(node.find_all("p"))
        yield Candidate(node=node, score=score)


def find_best_candidate(soup: BeautifulSoup, config: ScoringConfig) -> Optional[Tag]:
    """Score every container and keep the strictly highest, first one on ties."""
    best: Optional[Candidate] = None
    for candidate in iter_candidates(soup, config):
        if candidate.score <= 0:
            continue
        if best is None or candidate.score > best.score:
            best = candidate
    if best is None:
        return None
    logger.debug("Best scoring candidate <%s> scored %.1f", best.node.name, best.score)
    return best.node


def select_root(
    soup: BeautifulSoup, config: Optional[ScoringConfig] = None
) -> Optional[Tag]:
    """Pick the article root via the selector chain, falling back to scoring."""
    config = config or ScoringConfig()

    root = _find_article(soup, config)
    if root is not None:
        logger.debug("Selected <article> element as content root")
        return root

    root = _find_main(soup)
    if root is not None:
        logger.debug("Selected <main> element as content root")
        return root

    root = _find_by_selectors(soup, config)
    if root is not None:
        return root

    return find_best_candidate(soup, config)
