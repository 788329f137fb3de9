"""
Leading-character index.

Entries are grouped into buckets keyed by the first character of their
simplified head. A lookup only has to scan one bucket instead of the
whole lexicon. The index is built once and never changes afterwards, so
any number of threads can read it without locking.
"""

import logging
import time
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

from zidian.constants import CHUNK_SIZE
from zidian.entry import Entry
from zidian.parallel import chunked, parallel_map, resolve_workers

logger = logging.getLogger(__name__)

Bucket = Tuple[Entry, ...]

EMPTY_BUCKET: Bucket = ()


def partition(entries: Sequence[Entry]) -> Dict[str, List[Entry]]:
    """Group a slice of entries by index key, keeping their relative order."""
    groups: Dict[str, List[Entry]] = {}
    for entry in entries:
        groups.setdefault(entry.index_key, []).append(entry)
    return groups


def merge(partitions: Iterable[Dict[str, List[Entry]]]) -> Dict[str, List[Entry]]:
    """Merge partitions in order; later partitions append to earlier buckets."""
    merged: Dict[str, List[Entry]] = {}
    for groups in partitions:
        for key, bucket in groups.items():
            merged.setdefault(key, []).extend(bucket)
    return merged


class Index:
    """
    Read-only mapping from leading character to a bucket of entries.
    
    Use Index.build() to construct one.
    """
    
    __slots__ = ("_buckets", "_size", "_single_chars")
    
    def __init__(self, buckets: Mapping[str, Sequence[Entry]]):
        ordered = {key: tuple(buckets[key]) for key in sorted(buckets)}
        self._buckets: Mapping[str, Bucket] = MappingProxyType(ordered)
        self._size = sum(len(bucket) for bucket in ordered.values())
        self._single_chars: Bucket = tuple(sorted(
            (entry for bucket in ordered.values() for entry in bucket if entry.is_single_char),
            key=lambda e: e.seq,
        ))
    
    @classmethod
    def build(
        cls,
        entries: Sequence[Entry],
        workers: Optional[int] = None,
        chunk_size: int = CHUNK_SIZE,
    ) -> "Index":
        """
        Build an index from loaded entries.
        
        Each chunk of entries is partitioned independently and the partitions
        are merged in chunk order, so bucket order matches input order.
        
        Args:
            entries: Entries to index
            workers: Threads used for partitioning; None decides from size
            chunk_size: Entries per partition
        """
        entries = tuple(entries)
        start_time = time.perf_counter()
        
        workers = resolve_workers(workers, len(entries))
        partitions = parallel_map(partition, chunked(entries, chunk_size), workers)
        index = cls(merge(partitions))
        
        duration = time.perf_counter() - start_time
        logger.info(f"Indexed {len(index)} entries into {index.bucket_count} buckets in {duration:.2f}s")
        return index
    
    def bucket_for(self, ch: str) -> Bucket:
        """
        Get the bucket for a leading character.
        
        Only the first character of ``ch`` is used. Returns an empty tuple
        when there is no such bucket.
        """
        if not ch:
            return EMPTY_BUCKET
        return self._buckets.get(ch[0], EMPTY_BUCKET)
    
    def all_single_character_entries(self) -> Bucket:
        """All entries whose simplified head is one character, in source order."""
        return self._single_chars
    
    def keys(self) -> Tuple[str, ...]:
        return tuple(self._buckets)
    
    def buckets(self) -> Tuple[Bucket, ...]:
        return tuple(self._buckets.values())
    
    @property
    def bucket_count(self) -> int:
        return len(self._buckets)
    
    def __len__(self) -> int:
        return self._size
    
    def __contains__(self, ch: object) -> bool:
        return ch in self._buckets
    
    def __iter__(self) -> Iterator[Entry]:
        for bucket in self._buckets.values():
            yield from bucket
    
    def __repr__(self) -> str:
        return f"Index({self._size} entries, {len(self._buckets)} buckets)"
