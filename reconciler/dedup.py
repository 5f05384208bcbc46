"""Movie deduplication.

Partitions movie entries into equivalence classes with a disjoint-set
forest keyed on two independent signals: the normalized title and the
poster identity. Chains are merged transitively, so if A shares a title
with B and B shares a poster with C, all three end up in one group.
"""
from __future__ import annotations

import logging

from .models import MOVIE, LibraryEntry, MovieGroup
from .normalizer import normalize_movie_title, normalize_poster_url

log = logging.getLogger(__name__)


class UnionFind:
    """Array-backed disjoint-set forest indexed by entry position.

    Uses path compression and union by rank. On equal rank the root of the
    first argument is kept, so root selection only depends on call order.
    """

    def __init__(self, size: int):
        self.parent = list(range(size))
        self.rank = [0] * size

    def __len__(self) -> int:
        return len(self.parent)

    def find(self, i: int) -> int:
        root = i
        while self.parent[root] != root:
            root = self.parent[root]
        # Path compression
        while self.parent[i] != root:
            self.parent[i], i = root, self.parent[i]
        return root

    def union(self, a: int, b: int) -> int:
        """Merge the sets containing *a* and *b*. Returns the new root."""
        root_a = self.find(a)
        root_b = self.find(b)
        if root_a == root_b:
            return root_a
        if self.rank[root_a] < self.rank[root_b]:
            root_a, root_b = root_b, root_a
        self.parent[root_b] = root_a
        if self.rank[root_a] == self.rank[root_b]:
            self.rank[root_a] += 1
        return root_a

    def groups(self) -> dict[int, list[int]]:
        """Map each root to its members, in order of first member."""
        components: dict[int, list[int]] = {}
        for i in range(len(self.parent)):
            components.setdefault(self.find(i), []).append(i)
        return components


def _representative_score(entry: LibraryEntry) -> tuple[int, int]:
    return (1 if entry.metadata is not None else 0, entry.item.file_size or 0)


def select_representative(entries: list[LibraryEntry]) -> LibraryEntry:
    """
    Pick the entry shown by default for a group of duplicates.

    Entries with metadata outrank entries without; within a tier the larger
    file wins. Ties keep input order.
    """
    return sorted(entries, key=_representative_score, reverse=True)[0]


def _link(
    index: dict[str, int],
    key: str,
    position: int,
    forest: UnionFind,
) -> None:
    existing = index.get(key)
    if existing is not None:
        forest.union(existing, position)
    else:
        index[key] = position


def build_movie_groups(entries: list[LibraryEntry]) -> list[MovieGroup]:
    """
    Group movie entries that depict the same work.

    Args:
        entries: Scanned entries with optional metadata, in input order.
                 Entries that are not movie-typed are ignored.

    Returns:
        One MovieGroup per connected component, ordered by the component's
        first entry. Every movie entry belongs to exactly one group.
    """
    movies = [e for e in entries if e.item.media_type == MOVIE]
    if not movies:
        return []

    forest = UnionFind(len(movies))
    by_title_key: dict[str, int] = {}
    by_poster_key: dict[str, int] = {}

    for i, entry in enumerate(movies):
        metadata = entry.metadata

        if metadata is not None and metadata.title is not None:
            title = metadata.title
        else:
            title = entry.item.title
        title_key = normalize_movie_title(title)
        if title_key:
            _link(by_title_key, title_key, i, forest)

        poster_raw = (metadata.poster_url or '').strip() if metadata is not None else ''
        if poster_raw:
            _link(by_poster_key, normalize_poster_url(poster_raw), i, forest)

    groups = []
    for root, members in forest.groups().items():
        group_entries = [movies[i] for i in members]
        representative = select_representative(group_entries)
        groups.append(MovieGroup(
            key=f"movie-group-{root}-{representative.item.id}",
            representative=representative,
            entries=group_entries,
        ))

    log.debug("Grouped %d movie file(s) into %d movie(s)", len(movies), len(groups))
    return groups
