"""Download or render remote pages for extraction."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse

import requests
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from .config import FetchConfig

logger = logging.getLogger("article_mdx")

ALLOWED_SCHEMES = {"http", "https"}


class FetchError(RuntimeError):
    """Raised when a page cannot be downloaded or rendered."""


@dataclass
class FetchedPage:
    """Raw page payload as received from the network."""

    url: str
    final_url: str
    content: bytes
    encoding: Optional[str]


def validate_url(url: str) -> str:
    """Reject anything that is not an absolute http(s) URL."""
    parsed = urlparse(url)
    if parsed.scheme.lower() not in ALLOWED_SCHEMES or not parsed.netloc:
        raise ValueError(f"Invalid URL: {url}")
    return url


def charset_from_content_type(content_type: Optional[str]) -> Optional[str]:
    """Return the explicit ``charset`` parameter of a Content-Type header."""
    if not content_type:
        return None
    for param in content_type.split(";")[1:]:
        key, _, value = param.strip().partition("=")
        if key.strip().lower() == "charset":
            return value.strip().strip("'\"") or None
    return None


def fetch_page(
    url: str,
    config: FetchConfig,
    session: Optional[requests.Session] = None,
) -> FetchedPage:
    """Download a page with requests and keep the body as raw bytes."""
    validate_url(url)
    session = session or requests.Session()
    logger.info("Fetching %s", url)
    try:
        resp = session.get(
            url,
            headers={"User-Agent": config.user_agent},
            timeout=config.timeout,
        )
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise FetchError(f"Failed to fetch {url}: {exc}") from exc

    return FetchedPage(
        url=url,
        final_url=resp.url or url,
        content=resp.content,
        encoding=charset_from_content_type(resp.headers.get("Content-Type")),
    )


async def render_page(url: str, config: FetchConfig) -> FetchedPage:
    """Navigate to a URL using Playwright and return the rendered HTML."""
    validate_url(url)
    try:
        async with async_playwright() as playwright:
            browser = await playwright.chromium.launch(headless=True)
            try:
                page = await browser.new_page(user_agent=config.user_agent)
                page.set_default_navigation_timeout(config.timeout * 1000)
                logger.info("Rendering %s", url)
                await page.goto(url, wait_until="networkidle")
                if config.wait_after_load:
                    await page.wait_for_timeout(int(config.wait_after_load * 1000))
                html = await page.content()
                final_url = page.url
            finally:
                await browser.close()
    except PlaywrightError as exc:
        raise FetchError(f"Failed to render {url}: {exc}") from exc

    return FetchedPage(
        url=url,
        final_url=final_url,
        content=html.encode("utf-8"),
        encoding="utf-8",
    )


def get_page(
    url: str,
    config: FetchConfig,
    session: Optional[requests.Session] = None,
) -> FetchedPage:
    """Fetch or render a page depending on ``config.render``."""
    if config.render:
        return asyncio.run(render_page(url, config))
    return fetch_page(url, config, session=session)
