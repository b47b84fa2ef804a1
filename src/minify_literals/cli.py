"""
Command-line entry point.

Usage:
    minify-literals src/app.js -o dist/app.js
    python -m minify_literals src/app.js --no-source-map
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import MinifyLiteralsOptions
from .errors import MinifyLiteralsError
from .pipeline import minify_literals

logger = logging.getLogger("minify_literals")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="minify-literals",
        description="Minify HTML and CSS inside tagged template literals",
    )
    parser.add_argument("input", type=Path, help="JavaScript/TypeScript source file")
    parser.add_argument(
        "-o", "--output", type=Path,
        help="Output file (default: overwrite input)",
    )
    parser.add_argument(
        "--file-name",
        help="File name recorded in the source map (default: input path)",
    )
    parser.add_argument(
        "--no-source-map", action="store_true",
        help="Do not write <output>.map",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s | %(name)s | %(message)s",
    )

    output: Path = args.output or args.input
    try:
        source = args.input.read_text(encoding="utf-8")
    except OSError as e:
        logger.error(f"Cannot read {args.input}: {e}")
        return 1

    options = MinifyLiteralsOptions(
        file_name=args.file_name or args.input.as_posix(),
        generate_source_map=False if args.no_source_map else None,
    )
    try:
        result = minify_literals(source, options)
    except MinifyLiteralsError as e:
        logger.error(f"Minification failed for {args.input}: {e}")
        return 1

    output.parent.mkdir(parents=True, exist_ok=True)
    if result is None:
        logger.info(f"No changes for {args.input}")
        if output != args.input:
            output.write_text(source, encoding="utf-8")
        return 0

    output.write_text(result.code, encoding="utf-8")
    logger.info(f"Wrote {output}")
    if result.map is not None:
        map_path = output.with_name(output.name + ".map")
        map_path.write_text(result.map.to_json(), encoding="utf-8")
        logger.info(f"Wrote {map_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
