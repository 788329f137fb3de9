"""
Constants and default locations for zidian.
"""

import os
from pathlib import Path

# ============================================================================
# Source Format
# ============================================================================

# Separator between senses in the definition field
SENSE_SEPARATOR = "/"

# Lines starting with this are comments in CEDICT text files
COMMENT_PREFIX = "#"

# Tag prefix used when rendering the proficiency tier (HSK1 .. HSK9)
LEVEL_TAG = "HSK"

# Default relation name in a tabular (SQLite) source
DEFAULT_TABLE = "Cedict"

# File suffixes routed to the SQLite loader
SQLITE_SUFFIXES = frozenset(['.db', '.sqlite', '.sqlite3'])

# File suffix of the compiled binary lexicon
COMPILED_SUFFIX = ".dic"


# ============================================================================
# Parallelism
# ============================================================================

# Number of lines / entries handed to one worker
CHUNK_SIZE = 20_000

# Inputs longer than this are parsed in a process pool when workers is None
PARALLEL_THRESHOLD = 100_000


# ============================================================================
# Paths
# ============================================================================

DEFAULT_DICTIONARY = "cedict_1_0_ts_utf-8_mdbg.txt"
DICTIONARY_ENV = "ZIDIAN_DICTIONARY"


def get_dictionary_path() -> Path:
    """Get the default dictionary path ($ZIDIAN_DICTIONARY or the CC-CEDICT file)."""
    return Path(os.getenv(DICTIONARY_ENV, DEFAULT_DICTIONARY))
