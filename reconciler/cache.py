"""In-memory cache for reconciled catalogs."""
import copy
import hashlib
from collections import OrderedDict
from dataclasses import astuple

from .library import build_library
from .models import LibraryCatalog, LibraryEntry

DEFAULT_MAX_ENTRIES = 8


def fingerprint(entries: list[LibraryEntry]) -> str:
    """
    Compute a cache key for an entry collection.

    Order-sensitive: movie group keys depend on input order, so the same
    entries in a different order are a different key.
    """
    digest = hashlib.sha1()
    for entry in entries:
        digest.update(repr(astuple(entry.item)).encode('utf-8'))
        metadata = astuple(entry.metadata) if entry.metadata is not None else None
        digest.update(repr(metadata).encode('utf-8'))
        digest.update(b'\x00')
    return digest.hexdigest()


class CatalogCache:
    """Memo of catalogs keyed by input fingerprint.

    Passed explicitly to whoever needs it; there is no module-level
    instance. Safe because build_library is deterministic. Callers get
    their own copy of a cached catalog, so mutating a result never leaks
    into later lookups.
    """

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES):
        """
        Initialize the cache.

        Args:
            max_entries: Number of catalogs kept before the oldest is evicted.
        """
        self.max_entries = max(1, max_entries)
        self._cache: OrderedDict[str, LibraryCatalog] = OrderedDict()

    def __len__(self) -> int:
        return len(self._cache)

    def get(self, key: str) -> LibraryCatalog | None:
        """Get a copy of a cached catalog, or None."""
        catalog = self._cache.get(key)
        if catalog is None:
            return None
        self._cache.move_to_end(key)
        return copy.deepcopy(catalog)

    def set(self, key: str, catalog: LibraryCatalog) -> None:
        """Store a catalog, evicting the least recently used one if full."""
        self._cache[key] = catalog
        self._cache.move_to_end(key)
        while len(self._cache) > self.max_entries:
            self._cache.popitem(last=False)

    def catalog_for(self, entries: list[LibraryEntry]) -> LibraryCatalog:
        """Return the catalog for *entries*, building it on a miss."""
        key = fingerprint(entries)
        catalog = self.get(key)
        if catalog is None:
            catalog = build_library(entries)
            self.set(key, copy.deepcopy(catalog))
        return catalog

    def clear(self) -> None:
        """Clear all cached catalogs."""
        self._cache.clear()
