#!/usr/bin/env python3
"""
Dictionary Builder for zidian.

This script compiles a CC-CEDICT text file (or a SQLite Cedict table)
into the binary lexicon read by zidian.compiled. Loading the compiled
file skips the line parsing entirely.

Usage:
    python scripts/build_dictionary.py [--input PATH] [--output PATH]
"""

import argparse
import logging
import sys
import time
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from zidian import LoadError, load, save_compiled
from zidian.constants import COMPILED_SUFFIX, get_dictionary_path

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


# ============================================================================
# Paths
# ============================================================================

DEFAULT_INPUT = get_dictionary_path()
DEFAULT_OUTPUT = Path("zidian.dic")


# ============================================================================
# Main
# ============================================================================

def main():
    parser = argparse.ArgumentParser(
        description="Build the zidian binary dictionary from CC-CEDICT"
    )
    parser.add_argument(
        '--input', '-i',
        type=Path,
        default=DEFAULT_INPUT,
        help=f"CC-CEDICT text, gzip or SQLite file (default: {DEFAULT_INPUT})"
    )
    parser.add_argument(
        '--output', '-o',
        type=Path,
        default=DEFAULT_OUTPUT,
        help=f"Output dictionary path (default: {DEFAULT_OUTPUT})"
    )
    parser.add_argument(
        '--workers', '-w',
        type=int,
        default=None,
        help="Worker processes for parsing (default: by input size)"
    )
    
    args = parser.parse_args()
    
    if not args.input.exists():
        logger.error(f"Dictionary source not found: {args.input}")
        sys.exit(1)
    if args.output.suffix != COMPILED_SUFFIX:
        logger.warning(f"Output {args.output} lacks the {COMPILED_SUFFIX} suffix; zidian.load will not detect it")
    
    start_time = time.time()
    
    try:
        entries = load(args.input, workers=args.workers)
        save_compiled(entries, args.output)
    except LoadError as e:
        logger.error(f"Failed to build {args.output} from {args.input}: {e}")
        sys.exit(1)
    
    elapsed = time.time() - start_time
    logger.info(f"Build completed in {elapsed:.1f} seconds")


if __name__ == '__main__':
    main()
