"""
CLI interface for zidian.

Usage:
    zidian 你好
    zidian --search 以
    zidian --simplify "楊武"
    zidian --json --dict cedict.db 中国
"""

import argparse
import json
import logging
import sys
from typing import Iterable

from zidian import Entry, LoadError, __version__, open_dictionary
from zidian.constants import get_dictionary_path


# ============================================================================
# Output Formats
# ============================================================================

def format_default(entries: Iterable[Entry]) -> str:
    """One rendered block per entry, separated by blank lines."""
    return "\n\n".join(entry.render() for entry in entries)


def format_json(entries: Iterable[Entry]) -> str:
    return json.dumps([entry.to_dict() for entry in entries], ensure_ascii=False, indent=2)


def format_simple(entries: Iterable[Entry]) -> str:
    """Tab-separated output (simplified, traditional, pronunciation, level)."""
    lines = []
    for e in entries:
        lines.append(f"{e.head_simplified}\t{e.head_traditional}\t{e.pronunciation}\t{e.level_tag}")
    return "\n".join(lines)


# ============================================================================
# Main
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="zidian",
        description="Chinese dictionary lookup and traditional to simplified conversion",
    )
    parser.add_argument(
        "text",
        nargs="?",
        help="Word to look up (read from stdin if omitted)",
    )
    parser.add_argument(
        "--dict", "-D",
        dest="dictionary",
        default=None,
        help=f"Dictionary file (default: {get_dictionary_path()})",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--search", "-s",
        action="store_true",
        help="List all entries whose head forms contain the text",
    )
    mode.add_argument(
        "--traditional", "-T",
        action="store_true",
        help="Exact lookup matching either head form",
    )
    mode.add_argument(
        "--simplify", "-t",
        action="store_true",
        help="Convert traditional characters in the text to simplified",
    )
    mode.add_argument(
        "--chars",
        action="store_true",
        help="List all single-character entries",
    )
    output = parser.add_mutually_exclusive_group()
    output.add_argument(
        "--json", "-j",
        action="store_true",
        help="Output as JSON",
    )
    output.add_argument(
        "--tsv",
        action="store_true",
        help="Tab-separated output (not with --simplify)",
    )
    parser.add_argument(
        "--workers", "-w",
        type=int,
        default=None,
        help="Worker count for loading and scans",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log loading and query details",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"zidian {__version__}",
    )
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.simplify and args.tsv:
        parser.error("--tsv cannot be used with --simplify")
    
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(levelname)s - %(message)s',
    )
    
    if args.chars:
        text = ""
    elif args.text is None:
        # Read from stdin
        text = sys.stdin.read().strip()
    else:
        text = args.text
    
    if not text and not args.chars:
        parser.print_help()
        sys.exit(1)
    
    try:
        dictionary = open_dictionary(args.dictionary or get_dictionary_path(), workers=args.workers)
    except LoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    
    if args.simplify:
        simplified = dictionary.to_simplified(text)
        if args.json:
            print(json.dumps({"text": text, "simplified": simplified}, ensure_ascii=False, indent=2))
        else:
            print(simplified)
        return
    
    if args.chars:
        entries = dictionary.all_single_character_entries()
    elif args.search:
        entries = dictionary.search_substring(text)
    elif args.traditional:
        entries = dictionary.find_traditional(text)
    else:
        entries = dictionary.find_exact(text)
    
    if args.json:
        print(format_json(entries))
        return
    
    if not entries:
        print(f"No entries found for {text}", file=sys.stderr)
        sys.exit(1)
    
    if args.tsv:
        print(format_simple(entries))
    else:
        print(format_default(entries))


if __name__ == "__main__":
    main()
