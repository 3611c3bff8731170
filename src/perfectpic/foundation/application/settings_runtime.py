"""Cached, thread-safe read path for dynamic settings.

Every non-admin consumer reads configuration through :class:`SettingsRuntime`.
Resolution chain for a key: cache -> store -> default schema.

- A known default with no persisted row is lazily inserted on first read.
- An unknown key is cached as known-absent (negative cache), so repeated
  misses cost a single store lookup until the cache is cleared.
- Typed accessors never raise on a malformed value; they degrade to the
  zero value of the requested type.
"""

from __future__ import annotations

import logging
import math
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING

from cachetools import LRUCache  # type: ignore[import-untyped]

from perfectpic.foundation.domain.exceptions import ConflictError, DomainError
from perfectpic.foundation.domain.setting_defaults import DEFAULT_SCHEMA
from perfectpic.foundation.domain.validators import parse_int64

if TYPE_CHECKING:
    from perfectpic.foundation.domain.ports import SettingStorePort
    from perfectpic.foundation.domain.setting_defaults import DefaultSchema

logger = logging.getLogger(__name__)

DEFAULT_CACHE_MAX_ENTRIES = 4096

_TRUE_VALUES = frozenset({"1", "t", "T"})
_FALSE_VALUES = frozenset({"0", "f", "F"})


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """A cached lookup result.

    Attributes:
        value: Persisted value (empty for a known-absent key).
        present: False marks a negative entry: the key is known not to exist.
    """

    value: str
    present: bool


def parse_bool(raw: str) -> bool | None:
    """Parse a boolean setting value.

    Accepts ``1``/``t``/``T`` and ``true`` in any case as True, and
    ``0``/``f``/``F`` and ``false`` in any case as False.

    Returns:
        The parsed flag, or None when ``raw`` is not a boolean spelling.
    """
    text = raw.strip()
    if text in _TRUE_VALUES or text.lower() == "true":
        return True
    if text in _FALSE_VALUES or text.lower() == "false":
        return False
    return None


def parse_float(raw: str) -> float | None:
    """Parse a finite float, or return None.

    NaN, infinities and values that overflow to infinity are rejected.
    """
    text = raw.strip()
    if not text or "_" in text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


class SettingsRuntime:
    """Read-through settings cache with typed accessors.

    The runtime exclusively owns its cache. The cache is an LRU bounded by
    ``cache_max_entries``; eviction only causes a re-read from the store.
    Store I/O never happens while the cache lock is held.

    A generation counter is bumped on every :meth:`clear_cache`. A reader
    only writes its result back when the generation is unchanged since its
    lookup began, so a value read before an admin update cannot repopulate
    the cache after that update has cleared it.

    Args:
        store: Persistent setting store.
        schema: Default schema registry (lazy defaults and reconciliation).
        cache_max_entries: Upper bound on cached keys.

    Example:
        >>> runtime = SettingsRuntime(store)
        >>> runtime.get_string("site_name")
        'Perfect Pic'
    """

    def __init__(
        self,
        store: SettingStorePort,
        schema: DefaultSchema = DEFAULT_SCHEMA,
        cache_max_entries: int = DEFAULT_CACHE_MAX_ENTRIES,
    ) -> None:
        self._store = store
        self._schema = schema
        self._cache: LRUCache[str, CacheEntry] = LRUCache(maxsize=cache_max_entries)
        self._lock = threading.Lock()
        self._generation = 0

    @property
    def schema(self) -> DefaultSchema:
        """The default schema this runtime resolves against."""
        return self._schema

    def get_string(self, key: str) -> str:
        """Resolve the raw string value of ``key``.

        Returns:
            The persisted value, the default value for a known key (which
            is materialized in the store on first read), or ``""`` for a
            key that is neither persisted nor known.
        """
        with self._lock:
            entry = self._cache.get(key)
            generation = self._generation
        if entry is not None:
            return entry.value if entry.present else ""

        try:
            entry = self._load(key)
        except DomainError as err:
            # Degrade to the default; the failure is not cached.
            logger.warning(
                "setting_read_failed",
                extra={"key": key, "error_code": err.error_code},
            )
            default = self._schema.get(key)
            return default.value if default is not None else ""

        with self._lock:
            if generation == self._generation:
                self._cache[key] = entry
        return entry.value

    def get_int(self, key: str) -> int:
        """Resolve ``key`` as a signed 64-bit integer; 0 when unparseable."""
        value = parse_int64(self.get_string(key))
        return 0 if value is None else value

    def get_int64(self, key: str) -> int:
        """Alias of :meth:`get_int`, kept for callers that name the width."""
        return self.get_int(key)

    def get_float(self, key: str) -> float:
        """Resolve ``key`` as a finite float; 0.0 when unparseable."""
        value = parse_float(self.get_string(key))
        return 0.0 if value is None else value

    def get_bool(self, key: str) -> bool:
        """Resolve ``key`` as a boolean; False for anything but a true spelling."""
        return parse_bool(self.get_string(key)) is True

    def clear_cache(self) -> None:
        """Evict every cached entry, positive and negative."""
        with self._lock:
            self._cache.clear()
            self._generation += 1
        logger.debug("settings_cache_cleared")

    def reconcile_defaults(self, *, prune: bool = False) -> int:
        """Align persisted rows with the default schema.

        Inserts missing defaults and refreshes metadata of existing rows
        while preserving their values. When ``prune`` is set, rows whose
        key is not in the schema are deleted. Clears the cache afterwards.

        Args:
            prune: Delete persisted rows with keys unknown to the schema.

        Returns:
            Number of rows pruned (0 when ``prune`` is False).

        Raises:
            InternalError: If the store fails; nothing is partially applied.
        """
        self._store.initialize_defaults(self._schema)
        removed = 0
        if prune:
            removed = self._store.delete_not_in_keys(self._schema.keys())
        self.clear_cache()
        logger.info(
            "settings_defaults_reconciled",
            extra={"defaults": len(self._schema), "pruned": removed, "prune": prune},
        )
        return removed

    def _load(self, key: str) -> CacheEntry:
        setting = self._store.find_by_key(key)
        if setting is not None:
            return CacheEntry(value=setting.value, present=True)

        default = self._schema.get(key)
        if default is None:
            return CacheEntry(value="", present=False)

        try:
            self._store.create(default.to_setting())
        except ConflictError:
            # Another reader materialized it first.
            logger.debug("setting_default_create_raced", extra={"key": key})
        else:
            logger.info("setting_default_materialized", extra={"key": key})

        setting = self._store.find_by_key(key)
        value = setting.value if setting is not None else default.value
        return CacheEntry(value=value, present=True)
