"""Command-line entry point for article extraction."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import List, Sequence

from .config import ConversionConfig, ConvertConfig, ExtractionConfig, FetchConfig
from .converter import ConvertResult, convert_source, run_converter

logger = logging.getLogger("article_mdx.cli")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Extract the main article of web pages and save it as Markdown.",
    )
    parser.add_argument("urls", nargs="*", help="One or more URLs to convert")
    parser.add_argument(
        "--file",
        type=Path,
        default=None,
        help="Convert a local HTML file instead of fetching URLs",
    )
    parser.add_argument(
        "--url",
        default=None,
        help="Source URL recorded for --file input (defaults to the file URI)",
    )
    parser.add_argument(
        "--output",
        default="sources",
        type=Path,
        help="Directory where Markdown documents should be written",
    )
    parser.add_argument(
        "--filename",
        default=None,
        help="Filename for the stored document (single input only)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=30.0,
        help="Network timeout in seconds",
    )
    parser.add_argument(
        "--render",
        action="store_true",
        help="Render pages with Playwright instead of a plain HTTP fetch",
    )
    parser.add_argument(
        "--wait",
        type=float,
        default=1.0,
        help="Seconds to wait after network idle when rendering",
    )
    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print Markdown to STDOUT instead of writing files",
    )
    parser.add_argument(
        "--keep-noise",
        action="store_true",
        help="Keep short punctuation-only lines in the converted body",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    args = parser.parse_args(argv)

    if args.file is None and not args.urls:
        parser.error("provide at least one URL or --file")
    if args.file is not None and args.urls:
        parser.error("--file cannot be combined with URLs")
    if args.filename and len(args.urls) > 1:
        parser.error("--filename requires a single input")
    return args


def _build_config(args: argparse.Namespace) -> ConvertConfig:
    return ConvertConfig(
        output_root=Path(args.output).resolve(),
        fetch=FetchConfig(
            timeout=args.timeout,
            render=args.render,
            wait_after_load=args.wait,
        ),
        extraction=ExtractionConfig(
            conversion=ConversionConfig(drop_noise_lines=not args.keep_noise),
        ),
        filename=args.filename,
    )


def _convert_file(args: argparse.Namespace, config: ConvertConfig) -> List[ConvertResult]:
    path: Path = args.file
    try:
        raw = path.read_bytes()
    except OSError as exc:
        logger.error("Cannot read %s: %s", path, exc)
        return []
    source_url = args.url or path.resolve().as_uri()
    result = convert_source(raw, source_url, config, write=not args.stdout)
    return [result] if result else []


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    level = logging.DEBUG if args.verbose else logging.INFO
    if args.stdout and not args.verbose:
        level = logging.ERROR
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )

    config = _build_config(args)
    overall_start = time.perf_counter()
    if args.file is not None:
        total_inputs = 1
        results = _convert_file(args, config)
    else:
        total_inputs = len(args.urls)
        results = run_converter(args.urls, config, write=not args.stdout)
    total_elapsed = time.perf_counter() - overall_start

    failures = total_inputs - len(results)
    logger.info(
        "Finished in %.2fs (%d/%d succeeded, %d failed)",
        total_elapsed,
        len(results),
        total_inputs,
        failures,
    )
    if args.verbose:
        for result in results:
            logger.debug(
                "Timing for %s -> %.2fs (%s)",
                result.url,
                result.total_seconds,
                result.output_path or "stdout",
            )

    if args.stdout:
        for idx, result in enumerate(results):
            if idx:
                sys.stdout.write("\n")
            markdown = result.markdown
            sys.stdout.write(markdown if markdown.endswith("\n") else markdown + "\n")
        sys.stdout.flush()

    if failures:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
