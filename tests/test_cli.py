# tests/test_cli.py
"""
Tests for ``article_mdx.cli`` and the ``article_mdx.converter`` orchestration.
"""

import logging
from pathlib import Path

import pytest

from playwright.async_api import Error as PlaywrightError

from article_mdx import cli, converter, fetcher
from article_mdx.config import ConvertConfig, FetchConfig
from article_mdx.fetcher import FetchedPage, FetchError


def _write(tmp_path: Path, name: str, data: bytes) -> Path:
    path = tmp_path / name
    path.write_bytes(data)
    return path


def test_file_mode_writes_markdown(tmp_path, article_page, expected_document):
    source = _write(tmp_path, "page.html", article_page)
    output = tmp_path / "sources"

    cli.main(
        [
            "--file",
            str(source),
            "--url",
            "https://news.example/big",
            "--output",
            str(output),
        ]
    )

    stored = output / "big-news.md"
    assert stored.read_text(encoding="utf-8") == expected_document


def test_file_mode_custom_filename(tmp_path, article_page):
    source = _write(tmp_path, "page.html", article_page)
    output = tmp_path / "sources"

    cli.main(["--file", str(source), "--output", str(output), "--filename", "my story"])

    stored = output / "my_story.md"
    text = stored.read_text(encoding="utf-8")
    assert f"**Source:** {source.resolve().as_uri()}" in text


def test_stdout_mode(tmp_path, article_page, expected_document, capsys):
    source = _write(tmp_path, "page.html", article_page)
    output = tmp_path / "sources"

    cli.main(
        [
            "--file",
            str(source),
            "--url",
            "https://news.example/big",
            "--output",
            str(output),
            "--stdout",
        ]
    )

    assert capsys.readouterr().out == expected_document + "\n"
    assert not output.exists()


def test_no_content_exits_with_failure(tmp_path, empty_page):
    source = _write(tmp_path, "empty.html", empty_page)
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--file", str(source), "--output", str(tmp_path / "out")])
    assert excinfo.value.code == 1


def test_existing_file_is_not_overwritten(tmp_path, article_page):
    source = _write(tmp_path, "page.html", article_page)
    output = tmp_path / "sources"
    output.mkdir()
    (output / "big-news.md").write_text("original", encoding="utf-8")

    with pytest.raises(SystemExit):
        cli.main(["--file", str(source), "--output", str(output)])
    assert (output / "big-news.md").read_text(encoding="utf-8") == "original"


@pytest.mark.parametrize(
    "argv",
    [
        [],
        ["https://a.test/", "--file", "page.html"],
        ["https://a.test/", "https://b.test/", "--filename", "x"],
    ],
)
def test_invalid_arguments(argv):
    with pytest.raises(SystemExit) as excinfo:
        cli.parse_args(argv)
    assert excinfo.value.code == 2


def test_url_mode_uses_fetcher(tmp_path, monkeypatch, article_page):
    def fake_get_page(url, config, session=None):
        if "broken" in url:
            raise FetchError("unreachable")
        return FetchedPage(url=url, final_url=url, content=article_page, encoding="utf-8")

    monkeypatch.setattr(converter, "get_page", fake_get_page)
    config = ConvertConfig(output_root=tmp_path)

    results = converter.run_converter(
        ["https://news.example/big", "https://broken.example/"], config, write=False
    )

    assert [result.url for result in results] == ["https://news.example/big"]
    assert results[0].output_path is None
    assert results[0].markdown.startswith("# Big News\n\n*Jane Doe*\n\n")


def test_url_mode_reports_failures(tmp_path, monkeypatch):
    def fake_get_page(url, config, session=None):
        raise FetchError("unreachable")

    monkeypatch.setattr(converter, "get_page", fake_get_page)
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["https://broken.example/", "--output", str(tmp_path)])
    assert excinfo.value.code == 1


def test_url_mode_logs_redirects(tmp_path, monkeypatch, article_page, caplog):
    def fake_get_page(url, config, session=None):
        return FetchedPage(
            url=url,
            final_url="https://news.example/big-news",
            content=article_page,
            encoding="utf-8",
        )

    monkeypatch.setattr(converter, "get_page", fake_get_page)
    caplog.set_level(logging.INFO, logger="article_mdx")

    results = converter.run_converter(
        ["https://news.example/big"], ConvertConfig(output_root=tmp_path), write=False
    )

    assert len(results) == 1
    assert "Followed redirect https://news.example/big -> https://news.example/big-news" in caplog.text


def test_render_mode_skips_pages_when_browser_fails(tmp_path, monkeypatch):
    class BrokenChromium:
        async def launch(self, headless=True):
            raise PlaywrightError("Executable doesn't exist")

    class BrokenPlaywright:
        chromium = BrokenChromium()

        async def __aenter__(self):
            return self

        async def __aexit__(self, *exc_info):
            return False

    monkeypatch.setattr(fetcher, "async_playwright", BrokenPlaywright)
    config = ConvertConfig(output_root=tmp_path, fetch=FetchConfig(render=True))

    assert converter.run_converter(["https://news.example/big"], config) == []
