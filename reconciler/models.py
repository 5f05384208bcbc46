"""Data models for the reconciler package."""
from dataclasses import dataclass, field
from typing import Literal

MOVIE = "movie"
SERIES = "series"
MEDIA_TYPES = (MOVIE, SERIES)

MediaType = Literal["movie", "series"]


@dataclass(frozen=True)
class ScannedEntry:
    """One scanned media file as emitted by the scan subsystem."""
    id: str
    title: str
    file_path: str
    media_type: MediaType
    file_size: int | None = None
    series_name_hint: str | None = None


@dataclass(frozen=True)
class FetchedMetadata:
    """Externally fetched metadata for a scanned file.

    ``genres`` and ``cast_crew`` hold the JSON-encoded strings produced by
    the metadata subsystem. Grouping only looks at ``title`` and
    ``poster_url``.
    """
    title: str | None = None
    poster_url: str | None = None
    release_date: str | None = None
    rating: float | None = None
    genres: str | None = None
    cast_crew: str | None = None
    overview: str | None = None
    tmdb_id: int | None = None


@dataclass(frozen=True)
class LibraryEntry:
    """A scanned file paired with its (optional) metadata."""
    item: ScannedEntry
    metadata: FetchedMetadata | None = None


@dataclass(frozen=True)
class EpisodeInfo:
    """Season/episode slot parsed from a title."""
    season: int
    episode: int
    display: str


@dataclass
class MovieGroup:
    """Files judged to be the same movie."""
    key: str
    representative: LibraryEntry
    entries: list[LibraryEntry] = field(default_factory=list)


@dataclass
class SeriesCluster:
    """All episodes of one series."""
    key: str
    title: str
    episodes: list[LibraryEntry] = field(default_factory=list)
    metadata: FetchedMetadata | None = None


@dataclass
class LibraryCatalog:
    """Result of a full reconciliation pass."""
    movies: list[MovieGroup] = field(default_factory=list)
    series: list[SeriesCluster] = field(default_factory=list)
