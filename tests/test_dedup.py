from reconciler.dedup import UnionFind, build_movie_groups, select_representative
from reconciler.models import FetchedMetadata, LibraryEntry, ScannedEntry

GB = 1024 ** 3
MB = 1024 ** 2


def make_entry(entry_id, title, media_type="movie", file_size=None, metadata=None):
    return LibraryEntry(
        item=ScannedEntry(
            id=entry_id,
            title=title,
            file_path=f"/media/{entry_id}/{title}",
            media_type=media_type,
            file_size=file_size,
        ),
        metadata=metadata,
    )


def group_ids(groups):
    return [[e.item.id for e in g.entries] for g in groups]


def test_union_find_merges_transitively():
    forest = UnionFind(5)
    forest.union(0, 1)
    forest.union(3, 4)
    forest.union(1, 4)

    assert forest.find(0) == forest.find(3)
    assert forest.find(2) == 2
    assert list(forest.groups().values()) == [[0, 1, 3, 4], [2]]


def test_union_find_keeps_first_root_on_equal_rank():
    forest = UnionFind(3)
    assert forest.union(0, 2) == 0
    assert forest.find(2) == 0


def test_build_movie_groups_empty():
    assert build_movie_groups([]) == []
    assert build_movie_groups([make_entry("s", "Lost.S01E01.mkv", media_type="series")]) == []


def test_build_movie_groups_merges_quality_variants():
    entries = [
        make_entry("a", "Inception.2010.1080p.BluRay.x264.mkv"),
        make_entry("b", "Inception.2010.720p.mkv"),
        make_entry("c", "The.Matrix.1999.mkv"),
    ]

    groups = build_movie_groups(entries)

    assert group_ids(groups) == [["a", "b"], ["c"]]


def test_build_movie_groups_prefers_metadata_title():
    entries = [
        make_entry("a", "inc.mkv", metadata=FetchedMetadata(title="Inception 2010")),
        make_entry("b", "Inception (2010)"),
    ]

    assert group_ids(build_movie_groups(entries)) == [["a", "b"]]


def test_build_movie_groups_merges_by_poster():
    entries = [
        make_entry("a", "cd1.mkv", metadata=FetchedMetadata(title="Alien", poster_url="https://img/p/1.jpg?w=300")),
        make_entry("b", "backup.mkv", metadata=FetchedMetadata(title="Aliens", poster_url="https://img/p/1.jpg")),
    ]

    assert group_ids(build_movie_groups(entries)) == [["a", "b"]]


def test_build_movie_groups_title_then_poster_chain_is_one_group():
    entries = [
        make_entry("a", "Alpha.2001.mkv"),
        make_entry("b", "alpha 2001 [1080p]", metadata=FetchedMetadata(poster_url="https://img/p/9.jpg?x=1")),
        make_entry("d", "Unrelated.Film.mkv"),
        make_entry("c", "Completely Different.mkv",
                   metadata=FetchedMetadata(title="Something Else", poster_url="https://img/p/9.jpg")),
    ]

    assert group_ids(build_movie_groups(entries)) == [["a", "b", "c"], ["d"]]


def test_build_movie_groups_ignores_empty_signals():
    entries = [
        make_entry("a", "", metadata=FetchedMetadata(poster_url="   ")),
        make_entry("b", "", metadata=FetchedMetadata(poster_url="")),
    ]

    assert group_ids(build_movie_groups(entries)) == [["a"], ["b"]]


def test_build_movie_groups_partitions_movie_entries():
    entries = [
        make_entry("a", "Heat.1995.mkv"),
        make_entry("s", "Lost.S01E01.mkv", media_type="series"),
        make_entry("b", "Heat (1995) 720p.avi"),
        make_entry("c", "Ronin.1998.mkv"),
        make_entry("d", "Ronin 1998 [4K]"),
        make_entry("e", "Collateral.mkv"),
    ]

    groups = build_movie_groups(entries)
    seen = [e.item.id for g in groups for e in g.entries]

    assert sorted(seen) == ["a", "b", "c", "d", "e"]
    assert len(seen) == len(set(seen))


def test_build_movie_groups_is_idempotent():
    entries = [
        make_entry("a", "Heat.1995.mkv", file_size=2 * GB),
        make_entry("b", "Heat (1995) 720p.avi", metadata=FetchedMetadata(title="Heat 1995")),
        make_entry("c", "Ronin.1998.mkv"),
    ]

    first = build_movie_groups(entries)
    second = build_movie_groups(entries)

    assert [g.key for g in first] == [g.key for g in second]
    assert group_ids(first) == group_ids(second)
    assert [g.representative for g in first] == [g.representative for g in second]


def test_build_movie_groups_key_uses_root_and_representative():
    entries = [
        make_entry("a", "Heat.1995.mkv", file_size=GB),
        make_entry("b", "Heat 1995 [720p]", file_size=500 * MB, metadata=FetchedMetadata(title="Heat 1995")),
    ]

    groups = build_movie_groups(entries)

    assert [g.key for g in groups] == ["movie-group-0-b"]


def test_select_representative_metadata_outranks_size():
    big = make_entry("big", "Heat.1995.mkv", file_size=GB)
    small = make_entry("small", "Heat.1995.mkv", file_size=500 * MB, metadata=FetchedMetadata(title="Heat"))

    assert select_representative([big, small]) is small


def test_select_representative_larger_file_wins_within_tier():
    a = make_entry("a", "x.mkv", file_size=100)
    b = make_entry("b", "x.mkv", file_size=200)
    c = make_entry("c", "x.mkv")

    assert select_representative([a, c, b]) is b


def test_select_representative_ties_keep_input_order():
    a = make_entry("a", "x.mkv")
    b = make_entry("b", "x.mkv")

    assert select_representative([a, b]) is a
