"""Full reconciliation pass over a scanned library."""
import logging

from .clustering import build_clusters
from .dedup import build_movie_groups
from .models import LibraryCatalog, LibraryEntry

log = logging.getLogger(__name__)


def build_library(entries: list[LibraryEntry]) -> LibraryCatalog:
    """
    Reconstruct the movie and series catalog from scanned entries.

    Series-bound entries are clustered first; whatever falls through is
    deduplicated into movie groups. The input is never modified, so the
    same input always yields the same catalog.
    """
    clusters = build_clusters(entries)
    movies = build_movie_groups(clusters.movies)
    log.info(
        "Reconciled %d file(s) into %d movie(s) and %d series",
        len(entries), len(movies), len(clusters.series),
    )
    return LibraryCatalog(movies=movies, series=clusters.series)
