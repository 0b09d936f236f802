"""Command-line front end for the citation engine.

Usage:
    python -m swiss_citations.cli parse "BGE 145 III 229 E. 4.2"
    python -m swiss_citations.cli validate "BGE 145 VII 229"
    python -m swiss_citations.cli format "Art. 97 OR" --lang fr --style full
    python -m swiss_citations.cli convert "BGE 145 III 229" --to case --lang it
    python -m swiss_citations.cli extract --file decision.txt
"""
from __future__ import annotations

import argparse
import json
import logging
import os
import sys

from .extraction import extract_citations, extract_references
from .formatter import convert_citation, format_citation
from .grammar import KIND_ALIASES, FormatStyle, Language
from .parser import parse
from .validator import validate

LOG_LEVEL = os.environ.get("SWISS_CITATIONS_LOG_LEVEL", "INFO").upper()
DEFAULT_LANGUAGE = os.environ.get("SWISS_CITATIONS_DEFAULT_LANGUAGE", "de").lower()

_LANGUAGES = [lang.value for lang in Language]
_STYLES = [style.value for style in FormatStyle]
_KINDS = sorted(KIND_ALIASES)


def _print(data) -> None:
    print(json.dumps(data, ensure_ascii=False, indent=2))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Swiss legal citation tools")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging to stderr")
    sub = parser.add_subparsers(dest="command")

    # parse
    p_parse = sub.add_parser("parse", help="Parse a citation into its components")
    p_parse.add_argument("citation")
    p_parse.add_argument("--type", choices=_KINDS, help="Citation type hint")

    # validate
    p_val = sub.add_parser("validate", help="Validate a citation and suggest fixes")
    p_val.add_argument("citation")
    p_val.add_argument("--type", choices=_KINDS, help="Citation type hint")

    # format
    p_fmt = sub.add_parser("format", help="Render a citation in another language")
    p_fmt.add_argument("citation")
    p_fmt.add_argument("--lang", default=DEFAULT_LANGUAGE, choices=_LANGUAGES)
    p_fmt.add_argument("--style", default=FormatStyle.FULL.value, choices=_STYLES)

    # convert
    p_conv = sub.add_parser("convert", help="Convert a citation to a target format")
    p_conv.add_argument("citation")
    p_conv.add_argument("--to", dest="to_kind", required=True, choices=_KINDS)
    p_conv.add_argument("--from", dest="from_kind", choices=_KINDS)
    p_conv.add_argument("--lang", default=DEFAULT_LANGUAGE, choices=_LANGUAGES)

    # extract
    p_ext = sub.add_parser("extract", help="Find citations in running text")
    p_ext.add_argument("text", nargs="?", help="Text to scan (default: stdin)")
    p_ext.add_argument("--file", help="Read the text from a file")
    p_ext.add_argument("--by-type", action="store_true", help="Group statutes and cases")

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    # argparse does not check defaults against choices.
    if getattr(args, "lang", None) is not None and args.lang not in _LANGUAGES:
        parser.error(
            f"SWISS_CITATIONS_DEFAULT_LANGUAGE={args.lang!r} is not one of {', '.join(_LANGUAGES)}"
        )

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else LOG_LEVEL,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    if args.command == "parse":
        result = parse(args.citation, args.type)
        _print(result.to_dict())
        if not result.success:
            sys.exit(1)

    elif args.command == "validate":
        result = validate(args.citation, args.type)
        _print(result.to_dict())
        if not result.valid:
            sys.exit(1)

    elif args.command == "format":
        result = format_citation(args.citation, args.lang, args.style)
        _print(result.to_dict())
        if not result.success:
            sys.exit(1)

    elif args.command == "convert":
        result = convert_citation(args.citation, args.to_kind, args.from_kind, args.lang)
        _print(result.to_dict())
        if not result.success:
            sys.exit(1)

    elif args.command == "extract":
        if args.file:
            try:
                with open(args.file, encoding="utf-8") as f:
                    text = f.read()
            except OSError as e:
                print(f"Cannot read {args.file}: {e}", file=sys.stderr)
                sys.exit(1)
        elif args.text is not None:
            text = args.text
        else:
            text = sys.stdin.read()

        if args.by_type:
            _print(extract_references(text))
        else:
            _print([c.to_dict() for c in extract_citations(text)])

    else:
        parser.print_help()
        sys.exit(2)


if __name__ == "__main__":
    main()
