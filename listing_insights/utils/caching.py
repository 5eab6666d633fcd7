"""Caching utilities used by the listing analysis layer."""

from __future__ import annotations

import functools
import threading
import time
from typing import Callable, Dict, Optional, Tuple, TypeVar

T = TypeVar("T")

_cache_lock = threading.Lock()
_memory_cache: Dict[Tuple, Tuple[float, object]] = {}
_clock = time.monotonic


def memoize(prefix: str, ttl: Optional[float] = None) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Thread-safe memoization decorator with an optional time-to-live.

    Keys are grouped by ``prefix`` so a logical concern can be inspected or
    invalidated on its own. Entries older than ``ttl`` seconds are recomputed,
    and every store drops the prefix's expired entries so distinct argument
    combinations do not accumulate.
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            key = (prefix, args, tuple(sorted(kwargs.items())))
            now = _clock()
            with _cache_lock:
                entry = _memory_cache.get(key)
                if entry is not None:
                    if ttl is None or now - entry[0] < ttl:
                        return entry[1]
                    del _memory_cache[key]
            result = func(*args, **kwargs)
            with _cache_lock:
                if ttl is not None:
                    _evict_expired(prefix, ttl, now)
                _memory_cache[key] = (now, result)
            return result

        return wrapper

    return decorator


def _evict_expired(prefix: str, ttl: float, now: float) -> None:
    # Caller holds _cache_lock.
    stale = [key for key, (stored, _) in _memory_cache.items() if key[0] == prefix and now - stored >= ttl]
    for key in stale:
        del _memory_cache[key]


def cache_size(prefix: str) -> int:
    """Number of entries currently held for ``prefix``."""

    with _cache_lock:
        return sum(1 for key in _memory_cache if key[0] == prefix)


def clear_prefix(prefix: str) -> None:
    """Clear all cache entries for the given prefix."""

    with _cache_lock:
        to_delete = [key for key in _memory_cache if key[0] == prefix]
        for key in to_delete:
            del _memory_cache[key]


__all__ = ["memoize", "cache_size", "clear_prefix"]
