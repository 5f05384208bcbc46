"""Parser module for extracting episode information from titles."""
import re

from .models import EpisodeInfo

# Episode patterns (order matters - more specific first). Later patterns are
# more permissive and would misclassify titles an earlier one already covers.
EPISODE_PATTERNS = [
    # S01E04 / s1e4
    r's(\d{1,2})e(\d{1,2})',
    # 1x04, 01x05, Show_1x04 (not 1920x1080)
    r'(?<![\da-z])(\d{1,2})x(\d{1,2})(?![\da-z])',
    # E04 / Ep04 (episode only, season 1 implied)
    r'(?<![a-z])ep?(\d{1,2})',
    # Season 1 Episode 4
    r'season\s*(\d{1,2})\s*episode\s*(\d{1,2})',
    # 104 -> season 1, episode 04 (bare run only, not "720p" or "x264")
    r'(?<![\da-z])(\d)(\d{2})(?![\da-z])',
]

_COMPILED_PATTERNS = [re.compile(p, re.IGNORECASE) for p in EPISODE_PATTERNS]

# Video and audio containers the scanner emits
MEDIA_EXTENSIONS = {
    'mkv', 'mp4', 'avi', 'mov', 'wmv', 'flv', 'webm',
    'm4v', 'mpg', 'mpeg', 'm2ts', 'ts', 'vob', 'ogm',
    'mp3', 'flac', 'm4a', 'aac', 'ogg', 'opus', 'wav',
}

_MEDIA_EXTENSION = re.compile(
    r'\.(' + '|'.join(sorted(MEDIA_EXTENSIONS)) + r')$', re.IGNORECASE
)


def _episode_from_match(match: re.Match) -> EpisodeInfo | None:
    groups = match.groups()
    if len(groups) >= 2:
        season = int(groups[0])
        episode = int(groups[1])
        if season < 0 or episode < 0:
            return None
        return EpisodeInfo(
            season=season,
            episode=episode,
            display=f"S{season:02d}E{episode:02d}",
        )
    episode = int(groups[0])
    if episode < 0:
        return None
    return EpisodeInfo(season=1, episode=episode, display=f"E{episode:02d}")


def parse_episode_info(title: str) -> EpisodeInfo | None:
    """
    Classify a title as an episode and extract its season/episode slot.

    Patterns are tried in EPISODE_PATTERNS order; the first one that
    matches and yields valid numbers wins.

    Args:
        title: Raw title or filename

    Returns:
        EpisodeInfo, or None when no pattern matches
    """
    text = title.strip()
    for pattern in _COMPILED_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        info = _episode_from_match(match)
        if info is not None:
            return info
    return None


def is_episode_title(title: str) -> bool:
    """Check if a title carries an episode marker."""
    return parse_episode_info(title) is not None


def strip_media_extension(title: str) -> str:
    """Remove a trailing media container extension, if any."""
    return _MEDIA_EXTENSION.sub('', title)


def extract_series_name(title: str) -> str:
    """
    Derive the bare series name from an episode title.

    "The.Office.US.S03E01.mkv" -> "The Office US"

    Never returns an empty string: when nothing is left after stripping,
    the original title is returned unchanged.
    """
    name = strip_media_extension(title)
    for pattern in _COMPILED_PATTERNS:
        name = pattern.sub('', name)
    name = re.sub(r'[._-]', ' ', name)

    parts = name.split()
    # Trailing year or disc number
    if parts and re.fullmatch(r'[0-9]+', parts[-1]):
        parts.pop()

    return ' '.join(parts) or title
