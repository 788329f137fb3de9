"""
Data-parallel helpers.

Parsing, index construction, substring scans and conversion are all
independent per unit of work, so they share one fan-out/fan-in shape:
split into chunks, map over an executor, collect results in submission
order.
"""

import os
import threading
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor
from typing import Any, Callable, List, Optional, Sequence

from zidian.constants import PARALLEL_THRESHOLD

# Thread pool shared by index builds, scans and conversion
_executor: Optional[ThreadPoolExecutor] = None
_executor_lock = threading.Lock()


def get_executor() -> ThreadPoolExecutor:
    """Get or create the shared thread pool (sized to the CPU count)."""
    global _executor

    with _executor_lock:
        if _executor is None:
            _executor = ThreadPoolExecutor(max_workers=os.cpu_count() or 1, thread_name_prefix="zidian")

    return _executor


def shutdown():
    """
    Shut down the shared thread pool.

    Call this when your application is shutting down. The next threaded
    call creates a fresh pool.
    """
    global _executor

    with _executor_lock:
        if _executor is not None:
            _executor.shutdown(wait=True)
            _executor = None


def chunked(items: Sequence, size: int) -> List[Sequence]:
    """Split a sequence into consecutive slices of at most ``size`` items."""
    if size < 1:
        raise ValueError("size must be >= 1")
    return [items[i:i + size] for i in range(0, len(items), size)]


def resolve_workers(workers: Optional[int], total: int) -> int:
    """
    Decide how many workers to use.
    
    Args:
        workers: Explicit worker count, or None to decide from input size
        total: Number of units of work
        
    Returns:
        1 for small inputs when unspecified, otherwise the CPU count
    """
    if workers is not None:
        return max(1, workers)
    if total > PARALLEL_THRESHOLD:
        return os.cpu_count() or 1
    return 1


def parallel_map(
    func: Callable[[Any], Any],
    items: Sequence,
    workers: int = 1,
    processes: bool = False,
) -> List[Any]:
    """
    Map ``func`` over ``items``, optionally on a worker pool.
    
    Results come back in the order of ``items``. The first exception raised
    by any call propagates to the caller.

    Threads come from the shared pool (see get_executor()). A process pool
    is created per call, since it is only used for one-shot loads.

    Args:
        func: Function to apply (must be picklable when processes=True)
        items: Units of work
        workers: 1 runs inline; otherwise the process pool size
        processes: Use a process pool instead of threads
    """
    if workers <= 1 or len(items) <= 1:
        return [func(item) for item in items]

    if not processes:
        return list(get_executor().map(func, items))

    with ProcessPoolExecutor(max_workers=workers) as executor:
        return list(executor.map(func, items))
