"""High-level orchestration for fetching pages and storing Markdown."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

import requests

from .config import ConvertConfig
from .extractor import extract_article
from .fetcher import FetchError, get_page
from .markdown import compose_markdown
from .storage import default_filename, save_document

logger = logging.getLogger("article_mdx")


@dataclass
class ConvertResult:
    """Outcome and timing for one converted source."""

    url: str
    markdown: str
    output_path: Optional[Path]
    total_seconds: float


def convert_source(
    raw: Union[bytes, str],
    source_url: str,
    config: ConvertConfig,
    encoding: Optional[str] = None,
    write: bool = True,
) -> Optional[ConvertResult]:
    """Extract an article from raw HTML and optionally persist it."""
    start = time.perf_counter()
    article = extract_article(raw, source_url, encoding=encoding, config=config.extraction)
    if article is None:
        logger.error("Failed to extract article from %s", source_url)
        return None

    markdown = compose_markdown(article.metadata, article.body_markdown, article.source_url)
    output_path: Optional[Path] = None
    if write:
        filename = config.filename or default_filename(article)
        try:
            output_path = save_document(
                config.output_root,
                filename,
                markdown,
                max_bytes=config.max_document_bytes,
            )
        except (FileExistsError, ValueError) as exc:
            logger.error("Skipping %s: %s", source_url, exc)
            return None

    return ConvertResult(
        url=source_url,
        markdown=markdown,
        output_path=output_path,
        total_seconds=time.perf_counter() - start,
    )


def convert_url(
    url: str,
    config: ConvertConfig,
    session: Optional[requests.Session] = None,
    write: bool = True,
) -> Optional[ConvertResult]:
    """Fetch a URL and convert its main article."""
    start = time.perf_counter()
    try:
        page = get_page(url, config.fetch, session=session)
    except (FetchError, ValueError) as exc:
        logger.error("Skipping %s: %s", url, exc)
        return None

    if page.final_url != page.url:
        logger.info("Followed redirect %s -> %s", page.url, page.final_url)

    result = convert_source(
        page.content, page.url, config, encoding=page.encoding, write=write
    )
    if result is not None:
        result.total_seconds = time.perf_counter() - start
    return result


def run_converter(
    urls: List[str],
    config: ConvertConfig,
    write: bool = True,
) -> List[ConvertResult]:
    """Convert each URL sequentially, skipping failures."""
    results: List[ConvertResult] = []
    with requests.Session() as session:
        for url in urls:
            result = convert_url(url, config, session=session, write=write)
            if result:
                results.append(result)
    return results
