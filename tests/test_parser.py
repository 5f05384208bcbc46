from reconciler.models import EpisodeInfo
from reconciler.parser import (
    extract_series_name,
    is_episode_title,
    parse_episode_info,
    strip_media_extension,
)


def test_parse_episode_info_season_episode():
    assert parse_episode_info("Breaking.Bad.S02E05.mkv") == EpisodeInfo(2, 5, "S02E05")


def test_parse_episode_info_lowercase_marker():
    assert parse_episode_info("show.s1e2.mkv") == EpisodeInfo(1, 2, "S01E02")


def test_parse_episode_info_cross_format():
    assert parse_episode_info("Friends.1x02.avi") == EpisodeInfo(1, 2, "S01E02")


def test_parse_episode_info_episode_only_defaults_to_season_one():
    assert parse_episode_info("Show.E07.mp4") == EpisodeInfo(1, 7, "E07")
    assert parse_episode_info("Show Ep03") == EpisodeInfo(1, 3, "E03")


def test_parse_episode_info_spelled_out():
    assert parse_episode_info("Show Season 2 Episode 10") == EpisodeInfo(2, 10, "S02E10")


def test_parse_episode_info_three_digit_run():
    assert parse_episode_info("Show.102.mkv") == EpisodeInfo(1, 2, "S01E02")


def test_parse_episode_info_explicit_marker_wins_over_three_digits():
    assert parse_episode_info("Show.S03E04.102.mkv") == EpisodeInfo(3, 4, "S03E04")


def test_parse_episode_info_ignores_resolution_and_codec_digits():
    assert parse_episode_info("Movie.720p.x264.mkv") is None
    assert parse_episode_info("Inception.2010.1080p.BluRay.x264.mkv") is None


def test_parse_episode_info_no_match():
    assert parse_episode_info("RandomMovieTitle.mkv") is None
    assert parse_episode_info("") is None


def test_is_episode_title():
    assert is_episode_title("Lost.S01E01.mkv")
    assert not is_episode_title("The.Matrix.1999.mkv")


def test_strip_media_extension_only_strips_media_containers():
    assert strip_media_extension("Show.S01E01.mkv") == "Show.S01E01"
    assert strip_media_extension("The.Office.US") == "The.Office.US"


def test_extract_series_name():
    assert extract_series_name("The.Office.US.S03E01.mkv") == "The Office US"
    assert extract_series_name("Breaking.Bad.S01E01.mkv") == "Breaking Bad"


def test_extract_series_name_without_marker():
    assert extract_series_name("Breaking Bad") == "Breaking Bad"


def test_extract_series_name_drops_trailing_number():
    assert extract_series_name("Show_Name_2019_E05") == "Show Name"


def test_extract_series_name_falls_back_to_original_title():
    assert extract_series_name("S01E01.mkv") == "S01E01.mkv"


def test_parse_episode_info_cross_format_with_underscores():
    assert parse_episode_info("Friends_1x02.avi") == EpisodeInfo(1, 2, "S01E02")
    assert parse_episode_info("Show.01x05_Pilot.mkv") == EpisodeInfo(1, 5, "S01E05")


def test_parse_episode_info_ignores_frame_size():
    assert parse_episode_info("Movie.1920x1080.mkv") is None


def test_extract_series_name_underscore_cross_format():
    assert extract_series_name("Friends_1x02.avi") == "Friends"
