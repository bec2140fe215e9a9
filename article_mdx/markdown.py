"""HTML to Markdown conversion and final document assembly."""

from __future__ import annotations

import logging
import re
import uuid
from typing import Callable, Dict, List, Optional, Union

from bs4 import BeautifulSoup, CData, NavigableString, Tag

from .config import ConversionConfig
from .models import CodeBlock, ConversionContext, PageMetadata
from .utils import WHITESPACE_PATTERN, collapse_whitespace

logger = logging.getLogger("article_mdx")

HEADING_LEVELS = {f"h{level}": level for level in range(1, 7)}
SKIPPED_TAGS = frozenset({"head", "script", "style", "noscript", "template"})
# Containers rendered as their content followed by a line break.
BLOCK_TAGS = frozenset(
    {"div", "section", "article", "main", "header", "figure", "figcaption", "dt", "dd"}
)
TABLE_CELL_SKIPPED = frozenset({"table", "sup", "sub"}) | SKIPPED_TAGS
LANGUAGE_CLASS_PATTERN = re.compile(r"^(?:language|lang)-([\w+#.-]+)$")

SPACE_RUN_PATTERN = re.compile(r"[ \t]+")
BLANK_RUN_PATTERN = re.compile(r"\n{3,}")
BLANK_LINES_PATTERN = re.compile(r"\n\s*\n")
LEADING_BLANK_LINES_PATTERN = re.compile(r"\A(?:[ \t]*\n)+")
BACKTICK_RUN_PATTERN = re.compile(r"`+")

Fragment = Union[str, Tag]


def _is_text(node) -> bool:
    # Comments, doctypes and script/style strings subclass NavigableString.
    return type(node) in (NavigableString, CData)


def _wrap_inline(marker: str, inner: str) -> str:
    """Surround text with an inline marker, keeping outer whitespace outside."""
    core = inner.strip()
    if not core:
        return inner
    leading = inner[: len(inner) - len(inner.lstrip())]
    trailing = inner[len(inner.rstrip()) :]
    return f"{leading}{marker}{core}{marker}{trailing}"


def longest_backtick_run(text: str) -> int:
    return max((len(run) for run in BACKTICK_RUN_PATTERN.findall(text)), default=0)


def code_language(pre: Tag) -> str:
    """Read a fence language from ``language-*``/``lang-*`` classes."""
    for node in (pre, pre.find("code")):
        if node is None:
            continue
        for cls in node.get("class") or []:
            match = LANGUAGE_CLASS_PATTERN.match(cls)
            if match:
                return match.group(1)
    return ""


def table_cell_text(cell: Tag) -> str:
    """Flatten a table cell to a single escaped line of plain text."""
    parts: List[str] = []

    def collect(node) -> None:
        if isinstance(node, Tag):
            if node.name in TABLE_CELL_SKIPPED:
                return
            if node.name == "br":
                parts.append(" ")
                return
            for child in node.children:
                collect(child)
        elif _is_text(node):
            parts.append(str(node))

    for child in cell.children:
        collect(child)
    return collapse_whitespace("".join(parts)).replace("|", "\\|")


def render_table(table: Tag) -> str:
    """Convert a ``<table>`` into a pipe table padded to its widest row."""
    header_rows: List[List[str]] = []
    body_rows: List[List[str]] = []
    for row in table.find_all("tr"):
        if row.find_parent("table") is not table:
            continue
        cells = [table_cell_text(cell) for cell in row.find_all(["td", "th"], recursive=False)]
        if not cells:
            continue
        section = row.find_parent(["thead", "tbody", "tfoot", "table"])
        if section is not None and section.name == "thead":
            header_rows.append(cells)
        else:
            body_rows.append(cells)

    rows = header_rows + body_rows
    if not rows:
        return ""

    # Without a <thead> the first row doubles as the header, even for one-row tables.
    header_count = len(header_rows) or 1
    width = max(len(row) for row in rows)
    lines: List[str] = []
    for index, row in enumerate(rows):
        padded = row + [""] * (width - len(row))
        lines.append("| " + " | ".join(padded) + " |")
        if index == header_count - 1:
            lines.append("|" + " --- |" * width)
    return "\n\n" + "\n".join(lines) + "\n\n"


class MarkdownSerializer:
    """Single-pass tree walk that switches on the tag of each node."""

    def __init__(self, context: ConversionContext, config: ConversionConfig) -> None:
        self.context = context
        self.config = config
        self._handlers: Dict[str, Callable[[Tag], str]] = {
            "strong": self._strong,
            "b": self._strong,
            "em": self._emphasis,
            "i": self._emphasis,
            "a": self._link,
            "li": self._list_item,
            "ul": self._list,
            "ol": self._list,
            "code": self._inline_code,
            "pre": self._code_block,
            "blockquote": self._blockquote,
            "table": render_table,
            "br": lambda tag: "\n",
            "p": self._paragraph,
        }

    def render(self, node) -> str:
        if isinstance(node, Tag):
            name = node.name
            if name in SKIPPED_TAGS:
                return ""
            if name in HEADING_LEVELS:
                return self._heading(node, HEADING_LEVELS[name])
            handler = self._handlers.get(name)
            if handler is not None:
                return handler(node)
            if name in BLOCK_TAGS:
                return self.render_children(node) + "\n"
            return self.render_children(node)
        if _is_text(node):
            return WHITESPACE_PATTERN.sub(" ", str(node))
        return ""

    def render_children(self, node: Tag) -> str:
        return "".join(self.render(child) for child in node.children)

    def _heading(self, tag: Tag, level: int) -> str:
        text = collapse_whitespace(self.render_children(tag))
        if not text:
            return ""
        return f"\n\n{'#' * level} {text}\n\n"

    def _strong(self, tag: Tag) -> str:
        return _wrap_inline("**", self.render_children(tag))

    def _emphasis(self, tag: Tag) -> str:
        return _wrap_inline("*", self.render_children(tag))

    def _link(self, tag: Tag) -> str:
        inner = self.render_children(tag)
        href = (tag.get("href") or "").strip()
        text = inner.strip()
        if not href or not text:
            return inner
        return f"[{text}]({href})"

    def _list_item(self, tag: Tag) -> str:
        # Nested lists and paragraphs stay attached to their item.
        text = BLANK_LINES_PATTERN.sub("\n", self.render_children(tag).strip())
        if not text:
            return ""
        return f"\n{self.config.bullet} {text}\n"

    def _list(self, tag: Tag) -> str:
        items = [self.render(child).strip("\n") for child in tag.children]
        return "\n\n" + "\n".join(item for item in items if item.strip()) + "\n\n"

    def _inline_code(self, tag: Tag) -> str:
        text = collapse_whitespace(tag.get_text())
        if not text:
            return ""
        fence = "`" * (longest_backtick_run(text) + 1)
        if text.startswith("`") or text.endswith("`"):
            text = f" {text} "
        return f"{fence}{text}{fence}"

    def _code_block(self, tag: Tag) -> str:
        token = self.context.protect(CodeBlock(text=tag.get_text(), language=code_language(tag)))
        return f"\n\n{token}\n\n"

    def _blockquote(self, tag: Tag) -> str:
        text = self.render_children(tag).strip()
        if not text:
            return ""
        quoted = "\n".join(
            f"> {line}" if line.strip() else "" for line in text.split("\n")
        )
        return f"\n\n{quoted}\n\n"

    def _paragraph(self, tag: Tag) -> str:
        return f"{self.render_children(tag)}\n\n"


def _is_noise(line: str) -> bool:
    return len(line) < 3 and not any(ch.isalnum() for ch in line)


def normalize_whitespace(text: str, drop_noise_lines: bool = True) -> str:
    """Collapse blank-line runs and spaces, trimming every line.

    Empty lines survive as paragraph breaks. With ``drop_noise_lines`` short
    lines without any alphanumeric character (stray bullets, lone ``*``) are
    dropped. Applying the function twice yields the same text.
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = SPACE_RUN_PATTERN.sub(" ", text)
    lines: List[str] = []
    for line in text.split("\n"):
        line = line.strip()
        if line and drop_noise_lines and _is_noise(line):
            continue
        lines.append(line)
    text = BLANK_RUN_PATTERN.sub("\n\n", "\n".join(lines))
    return text.strip()


def restore_code_blocks(text: str, context: ConversionContext) -> str:
    """Swap placeholder tokens for fenced code blocks."""
    for token, block in context.code_blocks.items():
        code = LEADING_BLANK_LINES_PATTERN.sub("", block.text).rstrip()
        fence = "`" * max(3, longest_backtick_run(code) + 1)
        text = text.replace(token, f"{fence}{block.language}\n{code}\n{fence}")
    return text


def _parse_fragment(fragment: Fragment) -> Tag:
    if isinstance(fragment, Tag):
        return fragment
    return BeautifulSoup(fragment or "", "html.parser")


def _convert(fragment: Fragment, config: ConversionConfig) -> str:
    root = _parse_fragment(fragment)
    context = ConversionContext(nonce=uuid.uuid4().hex[:12])
    serializer = MarkdownSerializer(context, config)
    # A parsed root contributes only its inner content.
    raw = serializer.render_children(root)
    text = normalize_whitespace(raw, drop_noise_lines=config.drop_noise_lines)
    return restore_code_blocks(text, context)


def to_markdown(fragment: Fragment, config: Optional[ConversionConfig] = None) -> str:
    """Convert an HTML fragment (markup or parsed tag) into Markdown.

    Never raises: anything unexpected degrades to the fragment's plain text.
    """
    config = config or ConversionConfig()
    try:
        return _convert(fragment, config)
    except Exception:  # pylint: disable=broad-except
        logger.warning("Markdown conversion failed; falling back to plain text", exc_info=True)
        root = _parse_fragment(fragment)
        return normalize_whitespace(
            root.get_text("\n"), drop_noise_lines=config.drop_noise_lines
        )


def compose_markdown(metadata: PageMetadata, body: str, source_url: str) -> str:
    """Generate the final Markdown document with its fixed header."""
    parts: List[str] = [f"# {metadata.title}\n\n"]
    if metadata.byline:
        parts.append(f"*{metadata.byline}*\n\n")
    parts.append(f"**Source:** {source_url}\n\n")
    if metadata.excerpt:
        parts.append(f"> {metadata.excerpt}\n\n")
    parts.append("---\n\n")
    parts.append(body)
    return "".join(parts)
