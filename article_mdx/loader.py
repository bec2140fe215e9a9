"""Decode raw page bytes and build a parse tree."""

from __future__ import annotations

import logging
from typing import Optional, Union

from bs4 import BeautifulSoup, UnicodeDammit

logger = logging.getLogger("article_mdx")

# Tried after any explicit hint, byte-order mark and in-document declaration.
FALLBACK_ENCODINGS = ("utf-8", "windows-1252", "iso-8859-1")


def decode_html(raw: Union[bytes, str], encoding: Optional[str] = None) -> str:
    """Decode page bytes, preferring a declared charset over heuristics."""
    if isinstance(raw, str):
        return raw
    known = [encoding] if encoding else []
    dammit = UnicodeDammit(
        raw,
        known_definite_encodings=known,
        user_encodings=list(FALLBACK_ENCODINGS),
        is_html=True,
    )
    if dammit.unicode_markup is None:
        logger.debug("Encoding detection failed; decoding as UTF-8 with replacement")
        return raw.decode("utf-8", errors="replace")
    logger.debug("Decoded page as %s", dammit.original_encoding)
    return dammit.unicode_markup


def load_html(
    raw: Union[bytes, str],
    encoding: Optional[str] = None,
    url: Optional[str] = None,
) -> BeautifulSoup:
    """Parse page markup into a tree, tolerating malformed HTML."""
    markup = decode_html(raw, encoding)
    soup = BeautifulSoup(markup, "html.parser")
    if url:
        logger.debug("Parsed %s (%d characters)", url, len(markup))
    return soup
