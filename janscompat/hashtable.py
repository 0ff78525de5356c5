"""Chained hash table with prime bucket counts and bucket-grouped ordering."""

from __future__ import annotations

import operator
from collections.abc import Callable, Hashable, Iterator
from typing import Any

_PRIMES = (
    5, 13, 23, 53, 97, 193, 389, 769, 1543, 3079, 6151, 12289, 24593,
    49157, 98317, 196613, 393241, 786433, 1572869, 3145739, 6291469,
    12582917, 25165843, 50331653, 100663319, 201326611, 402653189,
    805306457, 1610612741,
)

_MISSING = object()


def _default_hash(key: Hashable) -> int:
    return hash(key)


class _Pair:
    __slots__ = ("key", "value", "hash")

    def __init__(self, key: Any, value: Any, hash_: int) -> None:
        self.key = key
        self.value = value
        self.hash = hash_


class HashTable:
    """Hash table keyed through user-supplied hash and comparison functions.

    Iteration visits items grouped by bucket: buckets appear in the order
    in which they last became non-empty, and within a bucket the most
    recently inserted item comes first. The table grows to the next prime
    bucket count whenever an insertion finds the load ratio at 1.
    """

    def __init__(
        self,
        hash_key: Callable[[Any], int] = _default_hash,
        cmp_keys: Callable[[Any, Any], Any] = operator.eq,
    ) -> None:
        self._hash_key = hash_key
        self._cmp_keys = cmp_keys
        self._prime_index = 0
        self._size = 0
        # bucket index -> pairs, newest first; dict order is the list order
        self._buckets: dict[int, list[_Pair]] = {}

    def _hash(self, key: Any) -> int:
        return self._hash_key(key) & 0xFFFFFFFF

    def _find(self, key: Any, hash_: int) -> _Pair | None:
        bucket = self._buckets.get(hash_ % self.bucket_count())
        if bucket is None:
            return None
        for pair in bucket:
            if pair.hash == hash_ and self._cmp_keys(pair.key, key):
                return pair
        return None

    def _insert(self, pair: _Pair) -> None:
        index = pair.hash % self.bucket_count()
        bucket = self._buckets.get(index)
        if bucket is None:
            self._buckets[index] = [pair]
        else:
            bucket.insert(0, pair)

    def _rehash(self) -> None:
        if self._prime_index + 1 >= len(_PRIMES):
            raise OverflowError("hash table cannot grow any further")
        pairs = self._pairs()
        self._prime_index += 1
        self._buckets = {}
        for pair in pairs:
            self._insert(pair)

    def _pairs(self) -> list[_Pair]:
        return [pair for bucket in self._buckets.values() for pair in bucket]

    def bucket_count(self) -> int:
        """Return the current number of buckets."""
        return _PRIMES[self._prime_index]

    def set(self, key: Any, value: Any) -> None:
        """Add ``key`` or replace its value; an existing key object is kept."""
        if self._size >= self.bucket_count():
            self._rehash()
        hash_ = self._hash(key)
        pair = self._find(key, hash_)
        if pair is not None:
            pair.value = value
            return
        self._insert(_Pair(key, value, hash_))
        self._size += 1

    def get(self, key: Any, default: Any = None) -> Any:
        """Return the value for ``key``, or ``default`` if absent."""
        pair = self._find(key, self._hash(key))
        return default if pair is None else pair.value

    def remove(self, key: Any) -> None:
        """Remove ``key``; raise KeyError if it is not present."""
        hash_ = self._hash(key)
        index = hash_ % self.bucket_count()
        pair = self._find(key, hash_)
        if pair is None:
            raise KeyError(key)
        bucket = self._buckets[index]
        bucket.remove(pair)
        if not bucket:
            del self._buckets[index]
        self._size -= 1

    def clear(self) -> None:
        """Remove every item; the bucket count is left unchanged."""
        self._buckets = {}
        self._size = 0

    def keys(self) -> list[Any]:
        """Return the keys in iteration order."""
        return [pair.key for pair in self._pairs()]

    def values(self) -> list[Any]:
        """Return the values in iteration order."""
        return [pair.value for pair in self._pairs()]

    def items(self) -> list[tuple[Any, Any]]:
        """Return ``(key, value)`` pairs in iteration order."""
        return [(pair.key, pair.value) for pair in self._pairs()]

    def iter_from(self, key: Any) -> Iterator[tuple[Any, Any]]:
        """Iterate ``(key, value)`` pairs starting at ``key``.

        Raises KeyError if ``key`` is not present.
        """
        target = self._find(key, self._hash(key))
        if target is None:
            raise KeyError(key)
        pairs = self._pairs()
        start = next(i for i, pair in enumerate(pairs) if pair is target)
        return iter([(pair.key, pair.value) for pair in pairs[start:]])

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: Any) -> bool:
        return self._find(key, self._hash(key)) is not None

    def __iter__(self) -> Iterator[Any]:
        return iter(self.keys())