"""Helper functions and objects for caching results

Copyright 2023 The meataxe Authors and Infleqtion Inc.

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

from __future__ import annotations

import functools
import os
import sys
import threading
from collections.abc import Callable, Hashable
from typing import Any

import diskcache
import platformdirs


def get_disk_cache(cache_name: str, *, cache_dir: str | None = None) -> diskcache.Cache:
    """Retrieve a dictionary-like cache object."""
    if running_with_pytest():
        return {}
    cache_dir = cache_dir or platformdirs.user_cache_dir()
    cache_path = os.path.join(cache_dir, cache_name)
    return diskcache.Cache(cache_path)


def use_disk_cache(
    cache_name: str,
    *,
    cache_dir: str | None = None,
    key_func: Callable[..., Hashable] | None = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator to cache results to disk."""

    def decorator(function: Callable[..., Any]) -> Callable[..., Any]:
        if running_with_pytest():
            return function

        @functools.wraps(function)
        def function_with_cache(*args: Hashable, **kwargs: Hashable) -> Any:
            # retrieve results from cache, if available
            cache = get_disk_cache(cache_name, cache_dir=cache_dir)
            if key_func is not None:
                key = key_func(*args, **kwargs)
            else:
                key = args + tuple(kwargs.items())
            if key in cache:
                return cache[key]

            # compute results and save to cache
            result = function(*args, **kwargs)
            cache[key] = result
            return result

        return function_with_cache

    return decorator


def running_with_pytest() -> bool:
    """Are we currently running  with pytest?"""
    return "pytest" in sys.modules


class IdentityCache:
    """In-memory cache of values that are keyed by the identity of an object and an integer.

    Objects such as finite fields may compare equal without being interchangeable, so we key entries
    by id(obj) rather than by obj itself.  Every entry holds a reference to its object, which keeps
    the object alive, and hence keeps its id from being recycled, for as long as the entry exists.

    Each entry is computed at most once: lookups of existing entries take no locks, while the first
    computation of an entry holds a lock that is specific to its key.
    """

    def __init__(self) -> None:
        self._entries: dict[tuple[int, int], tuple[object, Any]] = {}
        self._key_locks: dict[tuple[int, int], threading.Lock] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: tuple[object, int]) -> bool:
        obj, size = key
        return (id(obj), size) in self._entries

    def get_or_compute(self, obj: object, size: int, compute: Callable[[], Any]) -> Any:
        """Retrieve the value for (obj, size), computing and inserting it if absent."""
        key = (id(obj), size)
        if (entry := self._entries.get(key)) is not None:
            return entry[1]

        with self._lock:
            key_lock = self._key_locks.setdefault(key, threading.Lock())
        with key_lock:
            if (entry := self._entries.get(key)) is None:
                entry = (obj, compute())
                self._entries[key] = entry
        return entry[1]

    def clear(self) -> None:
        """Forget all entries."""
        with self._lock:
            self._entries.clear()
            self._key_locks.clear()
