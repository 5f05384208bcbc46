"""Title normalization for duplicate detection.

Produces comparison keys, not display strings. Two files whose keys are
equal are treated as the same work by the movie deduplication pass.
"""

import re

# ---------------------------------------------------------------------------
# Pattern groups
# ---------------------------------------------------------------------------

# Trailing file extension (".mkv", ".mp4", ".webm" ...)
_EXTENSION = r'\.[a-z0-9]{2,4}$'

# Separator runs
_SEPARATORS = r'[._-]+'

# Release tags that differ between quality variants of the same movie
_RELEASE_TAGS = (
    r'\b(2160p|1080p|720p|480p|4k|8k|uhd|hdr|x264|x265|hevc'
    r'|bluray|webrip|web-dl|dvdrip)\b'
)

# Bracket characters only; their contents stay
_BRACKETS = r'[()\[\]{}]'


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def normalize_whitespace(value: str) -> str:
    """Collapse whitespace runs to a single space and trim."""
    return re.sub(r'\s+', ' ', value).strip()


def normalize_movie_title(raw: str) -> str:
    """Build the comparison key for a movie title or filename.

    >>> normalize_movie_title("Inception.2010.1080p.BluRay.x264.mkv")
    'inception 2010'
    >>> normalize_movie_title("The Matrix (1999) [4K HDR]")
    'the matrix 1999'
    """
    name = raw.lower()
    name = re.sub(_EXTENSION, '', name, flags=re.IGNORECASE)
    name = re.sub(_SEPARATORS, ' ', name)
    name = re.sub(_RELEASE_TAGS, '', name, flags=re.IGNORECASE)
    name = re.sub(_BRACKETS, ' ', name)
    return normalize_whitespace(name)


def normalize_poster_url(raw: str) -> str:
    """Drop the query string so resized variants of one poster compare equal."""
    return raw.split('?', 1)[0].strip()
