"""
Compiled binary lexicon for zidian.

Parsing the 120k-line CC-CEDICT text on every start is the slowest part
of startup. The compiled form stores the same entries in a
marisa_trie.BytesTrie that can be memory-mapped:
- Key: head_simplified
- Value: one record per entry (several values per key for homographs)

Build one with ``scripts/build_dictionary.py``.
"""

import logging
import os
import time
from pathlib import Path
from typing import Iterable, Tuple, Union

import marisa_trie

from zidian.entry import Entry
from zidian.loader import LoadError

logger = logging.getLogger(__name__)

# ============================================================================
# Record Schema
# ============================================================================
# Each value is UTF-8 text with five fields joined by FIELD_SEPARATOR:
#   seq | level ("" if none) | traditional | pronunciation | definition
#
# UTF-8 never produces 0xff, the trie's key/value separator.

FIELD_SEPARATOR = "\x1f"
RECORD_FIELDS = 5


def encode_record(entry: Entry) -> bytes:
    """
    Encode everything but the key of an entry.

    Raises:
        LoadError: If a text field contains FIELD_SEPARATOR
    """
    level = "" if entry.level is None else str(entry.level)
    fields = (str(entry.seq), level, entry.head_traditional, entry.pronunciation, entry.definition)
    if any(FIELD_SEPARATOR in field for field in fields):
        raise LoadError("field contains the record separator \\x1f", entry.seq + 1, entry.head_simplified)
    return FIELD_SEPARATOR.join(fields).encode("utf-8")


def decode_record(key: str, value: bytes) -> Entry:
    """
    Rebuild an entry from its trie key and value.
    
    Raises:
        LoadError: If the record is corrupt
    """
    try:
        fields = value.decode("utf-8").split(FIELD_SEPARATOR)
        if len(fields) != RECORD_FIELDS:
            raise ValueError(f"expected {RECORD_FIELDS} fields, got {len(fields)}")
        seq, level, traditional, pronunciation, definition = fields
        return Entry(
            head_simplified=key,
            head_traditional=traditional,
            pronunciation=pronunciation,
            definition=definition,
            level=int(level) if level else None,
            seq=int(seq),
        )
    except (UnicodeDecodeError, ValueError) as e:
        raise LoadError(f"corrupt record: {e}", line=key) from e


def save_compiled(entries: Iterable[Entry], path: Union[str, os.PathLike]) -> Path:
    """
    Build and save the binary lexicon.
    
    Args:
        entries: Entries to store
        path: Output .dic path
        
    Returns:
        The output path
    """
    path = Path(path)
    logger.info("Building marisa_trie.BytesTrie...")
    
    trie = marisa_trie.BytesTrie((entry.head_simplified, encode_record(entry)) for entry in entries)
    
    path.parent.mkdir(parents=True, exist_ok=True)
    trie.save(str(path))
    
    file_size = path.stat().st_size / (1024 * 1024)
    logger.info(f"Saved dictionary to {path} ({file_size:.1f} MB, {len(trie)} entries)")
    return path


def load_compiled(path: Union[str, os.PathLike], mmap: bool = True) -> Tuple[Entry, ...]:
    """
    Load entries from a binary lexicon.
    
    Entries come back in source order (by seq), so an index built from them
    matches one built from the original text.
    
    Args:
        path: Path to the .dic file
        mmap: Memory-map the file instead of reading it
        
    Raises:
        LoadError: If the file is missing, unreadable or corrupt
    """
    path = Path(path)
    if not path.is_file():
        raise LoadError(f"Dictionary not found at {path}")
    
    start_time = time.perf_counter()
    trie = marisa_trie.BytesTrie()
    try:
        if mmap:
            trie.mmap(str(path))
        else:
            trie.load(str(path))
    except (OSError, RuntimeError, ValueError) as e:
        raise LoadError(f"Cannot read compiled dictionary {path}: {e}") from e
    
    entries = sorted((decode_record(key, value) for key, value in trie.items()), key=lambda e: e.seq)
    
    duration = time.perf_counter() - start_time
    logger.info(f"Dictionary loaded in {duration:.2f} seconds. ({len(entries)} entries)")
    return tuple(entries)
