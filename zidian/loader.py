"""
Lexicon loaders.

Turns a bulk source into a tuple of Entry records:
- CC-CEDICT style text (plain or gzipped)
- a read-only SQLite table with fixed columns
- the compiled binary lexicon (see zidian.compiled)

Every load is all-or-nothing: the first malformed line or row raises
LoadError and no entries are returned.
"""

import gzip
import logging
import os
import re
import sqlite3
import time
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from zidian.constants import (
    CHUNK_SIZE,
    COMMENT_PREFIX,
    COMPILED_SUFFIX,
    DEFAULT_TABLE,
    SQLITE_SUFFIXES,
)
from zidian.entry import Entry
from zidian.parallel import chunked, parallel_map, resolve_workers

logger = logging.getLogger(__name__)

Source = Union[str, os.PathLike, Iterable[str]]


class LoadError(Exception):
    """Raised when a dictionary source is unreadable or malformed."""
    
    def __init__(self, message: str, line_no: Optional[int] = None, line: Optional[str] = None):
        # All three go into args so the error survives a process pool
        super().__init__(message, line_no, line)
        self.message = message
        self.line_no = line_no
        self.line = line
    
    def __str__(self) -> str:
        if self.line_no is None:
            return self.message
        return f"line {self.line_no}: {self.message}: {self.line!r}"


# ============================================================================
# Text Format
# ============================================================================

# TRADITIONAL SIMPLIFIED [PRONUNCIATION] /sense1/sense2/.../
CEDICT_LINE_RE = re.compile(
    r"^(?P<trad>[^\s\[/]+)\s+(?P<simp>[^\s\[/]+)\s+"
    r"(?:\[(?P<pron>[^\]]*)\]\s+)?"
    r"/(?P<defs>.*)/$"
)

BOM = "\ufeff"


def parse_line(line: str, seq: int = 0, line_no: Optional[int] = None) -> Optional[Entry]:
    """
    Parse one line of CEDICT text.
    
    Args:
        line: Raw line (a trailing newline is allowed)
        seq: Position to record on the entry
        line_no: 1-based line number for error messages
        
    Returns:
        The Entry, or None for comment and blank lines
        
    Raises:
        LoadError: If the line does not match the grammar
    """
    text = line.rstrip("\r\n").lstrip(BOM)
    if not text.strip() or text.startswith(COMMENT_PREFIX):
        return None
    
    match = CEDICT_LINE_RE.match(text)
    if match is None:
        raise LoadError("malformed dictionary line", line_no, text)
    
    return Entry(
        head_simplified=match.group("simp"),
        head_traditional=match.group("trad"),
        pronunciation=match.group("pron") or "",
        definition=match.group("defs"),
        seq=seq,
    )


def _parse_chunk(chunk: Tuple[int, Sequence[str]]) -> List[Entry]:
    start, lines = chunk
    entries = []
    for offset, line in enumerate(lines):
        pos = start + offset
        entry = parse_line(line, seq=pos, line_no=pos + 1)
        if entry is not None:
            entries.append(entry)
    return entries


def load_lines(
    lines: Iterable[str],
    workers: Optional[int] = None,
    chunk_size: int = CHUNK_SIZE,
) -> Tuple[Entry, ...]:
    """
    Parse CEDICT lines into entries.
    
    Lines are parsed chunk by chunk, in a process pool when more than one
    worker is used. Entry order follows line order regardless of scheduling.
    
    Args:
        lines: Iterable of text lines
        workers: Worker processes; None decides from input size
        chunk_size: Lines per unit of work
        
    Returns:
        Tuple of parsed entries
        
    Raises:
        LoadError: If the lines cannot be read, or on the first malformed line
    """
    try:
        lines = list(lines)
    except (OSError, UnicodeDecodeError) as e:
        raise LoadError(f"Cannot read dictionary lines: {e}") from e

    for line_no, line in enumerate(lines, start=1):
        if not isinstance(line, str):
            raise LoadError("dictionary line is not text", line_no, repr(line))

    workers = resolve_workers(workers, len(lines))
    chunks = list(zip(range(0, len(lines), chunk_size), chunked(lines, chunk_size)))
    
    start_time = time.perf_counter()
    results = parallel_map(_parse_chunk, chunks, workers, processes=True)
    entries = tuple(entry for chunk in results for entry in chunk)
    
    duration = time.perf_counter() - start_time
    logger.info(f"Parsed {len(entries)} entries from {len(lines)} lines in {duration:.2f}s ({workers} workers)")
    return entries


def load_text(path: Union[str, os.PathLike], workers: Optional[int] = None) -> Tuple[Entry, ...]:
    """
    Load a UTF-8 CEDICT text file (``.gz`` files are decompressed).
    
    Raises:
        LoadError: If the file cannot be read or contains a malformed line
    """
    path = Path(path)
    opener = gzip.open if path.suffix.lower() == ".gz" else open
    
    try:
        with opener(path, "rt", encoding="utf-8") as f:
            lines = f.readlines()
    except (OSError, EOFError, UnicodeDecodeError) as e:
        raise LoadError(f"Cannot read dictionary file {path}: {e}") from e
    
    logger.info(f"Loading dictionary text from {path}...")
    return load_lines(lines, workers)


# ============================================================================
# Tabular Format
# ============================================================================

IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def entry_from_row(row: Sequence, seq: int = 0) -> Entry:
    """
    Build an entry from a (simplified, traditional, pronunciation,
    definition[, level]) row.
    
    Raises:
        LoadError: If the row has the wrong shape or types
    """
    row_no = seq + 1
    if len(row) not in (4, 5):
        raise LoadError(f"expected 4 or 5 columns, got {len(row)}", row_no, repr(row))
    
    simplified, traditional, pronunciation, definition = row[:4]
    level = row[4] if len(row) == 5 else None
    
    if not isinstance(simplified, str) or not isinstance(traditional, str):
        raise LoadError("head forms must be text", row_no, repr(row))
    if pronunciation is not None and not isinstance(pronunciation, str):
        raise LoadError("pronunciation must be text", row_no, repr(row))
    if definition is not None and not isinstance(definition, str):
        raise LoadError("definition must be text", row_no, repr(row))
    if level is not None and (isinstance(level, bool) or not isinstance(level, int)):
        raise LoadError("level must be an integer or NULL", row_no, repr(row))
    
    try:
        return Entry(
            head_simplified=simplified,
            head_traditional=traditional,
            pronunciation=pronunciation or "",
            definition=definition or "",
            level=level,
            seq=seq,
        )
    except ValueError as e:
        raise LoadError(str(e), row_no, repr(row)) from e


def _parse_rows(chunk: Tuple[int, Sequence[tuple]]) -> List[Entry]:
    start, rows = chunk
    return [entry_from_row(row, start + offset) for offset, row in enumerate(rows)]


def load_sqlite(
    path: Union[str, os.PathLike],
    table: str = DEFAULT_TABLE,
    workers: Optional[int] = None,
) -> Tuple[Entry, ...]:
    """
    Load entries from a SQLite table, opened read-only.
    
    Columns are taken by position: simplified, traditional, pronunciation,
    definition and an optional nullable integer level.
    
    Raises:
        LoadError: If the database cannot be opened or a row is malformed
    """
    if not IDENTIFIER_RE.match(table):
        raise LoadError(f"Invalid table name: {table!r}")
    
    path = Path(path)
    uri = f"{path.resolve().as_uri()}?mode=ro"
    logger.info(f"Loading dictionary table {table} from {path}...")
    
    try:
        conn = sqlite3.connect(uri, uri=True)
    except sqlite3.Error as e:
        raise LoadError(f"Cannot open database {path}: {e}") from e
    
    try:
        rows = conn.execute(f'SELECT * FROM "{table}"').fetchall()
    except sqlite3.Error as e:
        raise LoadError(f"Cannot read table {table} from {path}: {e}") from e
    finally:
        conn.close()
    
    workers = resolve_workers(workers, len(rows))
    chunks = list(zip(range(0, len(rows), CHUNK_SIZE), chunked(rows, CHUNK_SIZE)))
    results = parallel_map(_parse_rows, chunks, workers, processes=True)
    entries = tuple(entry for chunk in results for entry in chunk)
    
    logger.info(f"Loaded {len(entries)} entries from {path}")
    return entries


# ============================================================================
# Dispatch
# ============================================================================

def load(source: Source, workers: Optional[int] = None) -> Tuple[Entry, ...]:
    """
    Load a dictionary from any supported source.
    
    Paths are routed by suffix (.db/.sqlite/.sqlite3 -> SQLite,
    .dic -> compiled lexicon, anything else -> CEDICT text). Any other
    iterable is parsed as CEDICT lines.
    
    Args:
        source: Path, or iterable of lines
        workers: Worker count for parsing; None decides from input size
        
    Returns:
        Tuple of entries
        
    Raises:
        LoadError: If the source is missing, unreadable or malformed
    """
    if isinstance(source, (str, os.PathLike)):
        path = Path(source)
        if not path.is_file():
            raise LoadError(f"Dictionary not found at {path}")
        
        suffix = path.suffix.lower()
        if suffix in SQLITE_SUFFIXES:
            return load_sqlite(path, workers=workers)
        if suffix == COMPILED_SUFFIX:
            from zidian.compiled import load_compiled
            return load_compiled(path)
        return load_text(path, workers)
    
    return load_lines(source, workers)
