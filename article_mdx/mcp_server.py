"""MCP server exposing article-to-Markdown conversion."""

from __future__ import annotations

import asyncio
import logging

from mcp.server.fastmcp import FastMCP

from .config import FetchConfig
from .extractor import convert_html
from .fetcher import fetch_page, render_page

logger = logging.getLogger("article_mdx.mcp")
logger.setLevel(logging.ERROR)

mcp = FastMCP(name="article-mdx")


@mcp.tool()
async def convert(url: str, render: bool = False) -> str:
    """Fetch a web page and return its main article as Markdown."""
    config = FetchConfig(render=render)
    if render:
        page = await render_page(url, config)
    else:
        page = await asyncio.to_thread(fetch_page, url, config)

    markdown = await asyncio.to_thread(
        convert_html, page.content, page.url, encoding=page.encoding
    )
    if markdown is None:
        raise RuntimeError(f"Failed to extract article from {url}")
    return markdown


def main() -> None:
    """Entry point for running the MCP server."""
    logging.basicConfig(level=logging.ERROR)
    mcp.run()


if __name__ == "__main__":
    main()
