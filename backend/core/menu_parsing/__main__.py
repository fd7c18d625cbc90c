"""
CLI entry point for weekly menu parsing.

Usage:
    python -m backend.core.menu_parsing menu.txt
    python -m backend.core.menu_parsing menu.pdf --pdf --output menu.json
    cat menu.txt | python -m backend.core.menu_parsing - --parser llm
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from backend.core.config import settings

from .errors import MenuParseError
from .pdf import extract_text_from_pdf
from .strategy import PARSER_NAMES, get_parser


def _read_input(source: str, is_pdf: bool) -> str:
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")
    if is_pdf or path.suffix.lower() == ".pdf":
        return extract_text_from_pdf(path)
    return path.read_text(encoding="utf-8")


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="menu_parsing",
        description="Weekly Menu Parser - Convert OCR/PDF menu text into a structured weekly schedule",
    )

    parser.add_argument(
        "input",
        metavar="FILE",
        help="Menu text file, PDF, or '-' for stdin",
    )

    parser.add_argument(
        "--pdf",
        action="store_true",
        help="Treat the input as a PDF regardless of its extension",
    )

    parser.add_argument(
        "--parser",
        choices=PARSER_NAMES,
        default=None,
        help=f"Parser to use (default: {settings.MENU_PARSER_BACKEND})",
    )

    parser.add_argument(
        "--no-fallback",
        action="store_true",
        help="Do not fall back to the rule parser when the LLM parser fails",
    )

    parser.add_argument(
        "--rules",
        default=None,
        metavar="FILE",
        help="Rule table YAML (default: packaged menu_rules.yaml)",
    )

    parser.add_argument(
        "--output",
        "-o",
        metavar="FILE",
        help="Write JSON to this file instead of stdout",
    )

    parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indentation (default: 2)",
    )

    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Only log errors",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.ERROR if args.quiet else getattr(logging, settings.LOG_LEVEL, logging.INFO),
        format='%(asctime)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )

    try:
        text = _read_input(args.input, args.pdf)
        menu_parser = get_parser(
            args.parser,
            fallback=False if args.no_fallback else None,
            rules_path=args.rules,
        )
        menu = menu_parser.parse(text)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except (MenuParseError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)

    output = json.dumps(menu.to_dict(), indent=args.indent or None, ensure_ascii=False)

    if args.output:
        Path(args.output).write_text(output + "\n", encoding="utf-8")
        if not args.quiet:
            print(f"Menu written to: {args.output}", file=sys.stderr)
    else:
        print(output)

    if menu.skipped and not args.quiet:
        for block in menu.skipped:
            print(f"Warning: skipped block {block.block_index} ({block.reason}): {block.header}", file=sys.stderr)

    if not args.quiet:
        counts = menu.summary()
        print(
            f"{counts['days']} days, {counts['sessions']} sessions, {counts['courses']} courses",
            file=sys.stderr,
        )


if __name__ == "__main__":
    main()
