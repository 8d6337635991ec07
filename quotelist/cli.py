#!/usr/bin/env python3
"""
Command-line entry point for quote_join.

Usage:
    quote-join cars class air          # "cars","class","air"
    echo "cars class air" | quote-join --upper
"""

import argparse
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from quotelist.config import ValidationError, find_config, load_config
from quotelist.quoter import (
    EMPTY_POLICIES,
    QuoteJoinConfig,
    QuoterError,
    apply_case,
    check_output_length,
    quote_join,
)


def _resolve_config(args: argparse.Namespace) -> QuoteJoinConfig:
    config = load_config(Path(args.config)) if args.config else find_config()

    overrides = {}
    if args.max_length is not None:
        # 0 disables the cap
        overrides["max_output_length"] = args.max_length or None
    if args.empty is not None:
        overrides["empty_policy"] = args.empty
    if args.no_escape:
        overrides["escape_quotes"] = False
    return replace(config, **overrides) if overrides else config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quote-join",
        description='Quote whitespace-separated tokens and join them with commas ("a","b","c").',
    )
    parser.add_argument(
        "values",
        nargs="*",
        help="Tokens to quote. Reads standard input when omitted.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a quotelist.yaml file. Defaults to ./quotelist.yaml when present.",
    )
    parser.add_argument(
        "--max-length",
        type=int,
        default=None,
        help="Maximum output length (0 disables the cap)",
    )
    parser.add_argument(
        "--empty",
        choices=EMPTY_POLICIES,
        default=None,
        help="Result for input without tokens",
    )
    parser.add_argument(
        "--no-escape",
        action="store_true",
        help='Do not double " characters found inside tokens',
    )
    case = parser.add_mutually_exclusive_group()
    case.add_argument("--upper", dest="case", action="store_const", const="upper")
    case.add_argument("--lower", dest="case", action="store_const", const="lower")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    text = " ".join(args.values) if args.values else sys.stdin.read()

    try:
        config = _resolve_config(args)
        result = apply_case(quote_join(text, config), args.case)
        check_output_length(result, config)
    except (QuoterError, ValidationError, ValueError) as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    print(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
