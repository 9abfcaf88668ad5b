"""Lock striping helpers for the in-memory data store.

Keys (codes and owner ids) are hashed onto a fixed number of stripes. Each
stripe owns one lock and the slice of both indexes whose keys hash onto it.
Operations lock only the stripes they touch, always in ascending order, and
never wait longer than the configured timeout for any one of them.

Functions:
    stripe_index(key, stripes) -> int
        Map a key onto a stripe with xxhash.
    locked_stripes(stripes, indexes, timeout) -> ContextManager
        Acquire a set of stripe locks in ascending order.
"""

import threading
from dataclasses import dataclass, field
from contextlib import contextmanager
from collections.abc import Iterable, Iterator, Sequence

import xxhash

from linkshorter.dao.exceptions import DataStoreError
from linkshorter.constants import LOCK_TIMEOUT_SECONDS


__all__ = []


@dataclass
class Stripe:
    """One lock plus the slice of both indexes whose keys hash onto it."""

    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)
    links: dict = field(default_factory=dict)  # code -> ShortLinkModel
    owners: dict = field(default_factory=dict)  # owner id -> set of codes


def stripe_index(key: object, stripes: int) -> int:
    """Map a code or owner id onto a stripe

    Args:
        key (object):
            Code or owner id. Hashed through its string form so equal UUIDs
            and their string representation land on the same stripe.
        stripes (int):
            Number of stripes.

    Returns:
        int: stripe index in [0, stripes).

    Example:
        >>> stripe_index('aB3xY9', 16) in range(16)
        True
    """
    return xxhash.xxh64_intdigest(str(key).encode('utf-8')) % stripes


@contextmanager
def locked_stripes(stripes: Sequence[Stripe], indexes: Iterable[int], timeout: float = LOCK_TIMEOUT_SECONDS) -> Iterator[None]:
    """Hold the locks of the given stripes for the duration of the block

    Locks are taken in ascending index order (each at most once) so two
    operations touching overlapping stripes can never deadlock.

    Args:
        stripes (Sequence[Stripe]):
            All stripes of the store.
        indexes (Iterable[int]):
            Indexes of the stripes to lock (duplicates allowed).
        timeout (float):
            Maximum wait in seconds for each lock.

    Raises:
        DataStoreError:
            If any lock cannot be acquired within `timeout`.

    Example:
        >>> with locked_stripes(self._stripes, {3, 11}):
        ...     ...
    """
    acquired = []
    try:
        for index in sorted(set(indexes)):
            lock = stripes[index].lock
            if not lock.acquire(timeout=timeout):
                raise DataStoreError(f'Timed out after {timeout}s waiting for store stripe {index}.')
            acquired.append(lock)
        yield
    finally:
        for lock in reversed(acquired):
            lock.release()
