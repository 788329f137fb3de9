"""
zidian: In-memory Chinese dictionary engine

Loads a CC-CEDICT lexicon (text, SQLite or compiled), indexes it by
leading character and answers lookups and traditional to simplified
conversion. Everything is read-only after loading.

Basic Usage:
    import zidian
    
    dictionary = zidian.open_dictionary("cedict_1_0_ts_utf-8_mdbg.txt")
    for entry in dictionary.find_exact("你好"):
        print(entry)
    
    print(dictionary.to_simplified("楊武"))  # 杨武
"""

import logging
import time
from dataclasses import dataclass
from typing import Optional, Tuple

from zidian.compiled import load_compiled, save_compiled
from zidian.convert import ScriptConverter
from zidian.entry import Entry
from zidian.index import Index
from zidian.loader import LoadError, Source, load, load_lines, load_sqlite, load_text, parse_line
from zidian.parallel import shutdown
from zidian.search import SearchEngine

__version__ = "0.1.0"

logger = logging.getLogger(__name__)


# =============================================================================
# Dictionary
# =============================================================================

@dataclass(frozen=True)
class Dictionary:
    """
    A loaded dictionary: the index plus the services built on it.
    
    Construct one at startup with open_dictionary() (or from_entries())
    and pass it to whatever needs lookups. Instances are immutable and
    safe to share between threads.
    """
    index: Index
    search: SearchEngine
    converter: ScriptConverter
    
    @classmethod
    def from_entries(cls, entries: Tuple[Entry, ...], workers: Optional[int] = None) -> "Dictionary":
        """Index already loaded entries."""
        index = Index.build(entries, workers=workers)
        return cls(
            index=index,
            search=SearchEngine(index, workers=workers),
            converter=ScriptConverter(index, workers=workers),
        )
    
    def find_exact(self, word: str) -> Tuple[Entry, ...]:
        return self.search.find_exact(word)
    
    def find_traditional(self, word: str) -> Tuple[Entry, ...]:
        return self.search.find_traditional(word)
    
    def contains(self, word: str) -> bool:
        return self.search.contains(word)
    
    def search_substring(self, fragment: str) -> Tuple[Entry, ...]:
        return self.search.search_substring(fragment)
    
    def all_single_character_entries(self) -> Tuple[Entry, ...]:
        return self.index.all_single_character_entries()
    
    def to_simplified(self, text: str) -> str:
        return self.converter.to_simplified(text)
    
    def __len__(self) -> int:
        return len(self.index)
    
    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.contains(word)


def open_dictionary(source: Source, workers: Optional[int] = None) -> Dictionary:
    """
    Load and index a dictionary.
    
    Args:
        source: Path to a CEDICT text (.txt/.u8/.gz), SQLite (.db/.sqlite)
            or compiled (.dic) file, or an iterable of CEDICT lines
        workers: Worker count for parsing and scans; None decides from size
        
    Returns:
        The ready-to-query Dictionary
        
    Raises:
        LoadError: If the source is missing, unreadable or malformed
    """
    start_time = time.perf_counter()
    entries = load(source, workers=workers)
    dictionary = Dictionary.from_entries(entries, workers=workers)
    
    duration = time.perf_counter() - start_time
    logger.info(f"Dictionary ready in {duration:.2f} seconds. ({len(dictionary)} entries)")
    return dictionary


def get_version() -> str:
    """Get the library version."""
    return __version__


__all__ = [
    # Data classes
    "Entry",
    "Index",
    "Dictionary",
    # Services
    "SearchEngine",
    "ScriptConverter",
    # Loading
    "open_dictionary",
    "load",
    "load_lines",
    "load_text",
    "load_sqlite",
    "load_compiled",
    "save_compiled",
    "parse_line",
    "shutdown",
    # Exceptions
    "LoadError",
    # Version
    "get_version",
    "__version__",
]
