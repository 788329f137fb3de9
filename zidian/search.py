"""
Exact and substring lookups over a built Index.

Absent buckets and absent matches are normal outcomes and yield empty
tuples; nothing in this module raises for a query.
"""

import logging
from typing import Optional, Tuple

from zidian.entry import Entry
from zidian.index import Bucket, Index
from zidian.parallel import parallel_map, resolve_workers

logger = logging.getLogger(__name__)


class SearchEngine:
    """
    Query interface over an Index.
    
    Args:
        index: The built index
        workers: Threads used for full-index scans (1 = inline, None =
            decide from index size)
    """

    def __init__(self, index: Index, workers: Optional[int] = None):
        self.index = index
        self.workers = resolve_workers(workers, len(index))
    
    def find_exact(self, word: str) -> Tuple[Entry, ...]:
        """
        Find entries whose simplified head equals ``word``.
        
        Only the bucket of the first character is scanned, so a traditional
        head form is not found unless it is also a simplified head. Use
        find_traditional() for that.
        """
        logger.debug("find: %s", word)
        return tuple(e for e in self.index.bucket_for(word) if e.head_simplified == word)
    
    def contains(self, word: str) -> bool:
        """Check if ``word`` is a simplified head in the dictionary."""
        return bool(self.find_exact(word))
    
    def find_traditional(self, word: str) -> Tuple[Entry, ...]:
        """
        Find entries whose simplified or traditional head equals ``word``.
        
        Traditional heads are not indexed, so this falls back to a full scan.
        """
        if not word:
            return ()
        logger.debug("find (any script): %s", word)
        
        def matches(bucket: Bucket) -> list:
            return [e for e in bucket if e.head_simplified == word or e.head_traditional == word]
        
        return self._scan(matches)
    
    def search_substring(self, fragment: str) -> Tuple[Entry, ...]:
        """
        Find entries whose simplified or traditional head contains ``fragment``.
        
        A substring may start anywhere in a head, so every bucket is scanned.
        An empty fragment matches nothing.
        """
        if not fragment:
            return ()
        logger.debug("search: %s", fragment)
        
        def matches(bucket: Bucket) -> list:
            return [e for e in bucket if fragment in e.head_simplified or fragment in e.head_traditional]
        
        return self._scan(matches)
    
    def _scan(self, matches) -> Tuple[Entry, ...]:
        results = parallel_map(matches, self.index.buckets(), self.workers)
        return tuple(entry for found in results for entry in found)
