"""
Traditional to simplified script conversion.

Conversion is strictly one character to one character, using the
single-character entries of the dictionary as the substitution table.
No context is considered: a traditional character that merges several
simplified characters always maps to the same one.
"""

import logging
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from zidian.entry import Entry
from zidian.index import Index
from zidian.parallel import chunked, parallel_map, resolve_workers

logger = logging.getLogger(__name__)

# Texts shorter than this are always converted inline
MIN_PARALLEL_TEXT = 10_000


class ScriptConverter:
    """
    Converts traditional-script text to simplified script.
    
    Args:
        index: The built index
        workers: Threads used for very long texts (1 = inline, None =
            decide from text length)
    """
    
    def __init__(self, index: Index, workers: Optional[int] = None):
        self.workers = workers
        
        # First single-char entry in source order wins for each traditional char
        table: Dict[str, Entry] = {}
        for entry in index.all_single_character_entries():
            if len(entry.head_traditional) == 1:
                table.setdefault(entry.head_traditional, entry)
        self._table: Mapping[str, Entry] = MappingProxyType(table)
        logger.debug(f"Conversion table: {len(table)} characters")
    
    def candidates(self, text: str) -> Dict[str, Entry]:
        """
        Single-character entries whose traditional head occurs in ``text``.
        
        Returns:
            Mapping of traditional character -> entry
        """
        return {ch: self._table[ch] for ch in set(text) if ch in self._table}
    
    def to_simplified(self, text: str) -> str:
        """
        Convert ``text`` to simplified script.
        
        Characters without a dictionary mapping (punctuation, Latin text,
        already simplified characters) pass through unchanged. The result
        always has the same length as ``text``.
        
        Example:
            >>> converter.to_simplified("楊武")
            '杨武'
        """
        if not text:
            return text
        
        candidates = self.candidates(text)
        if not candidates:
            return text
        
        def convert(piece: str) -> str:
            return "".join(
                candidates[ch].head_simplified[0] if ch in candidates else ch
                for ch in piece
            )
        
        workers = resolve_workers(self.workers, len(text))
        if workers <= 1 or len(text) < MIN_PARALLEL_TEXT:
            return convert(text)

        size = -(-len(text) // workers)
        return "".join(parallel_map(convert, chunked(text, size), workers))
