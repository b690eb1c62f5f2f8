"""AssetStore naming, listing and path resolution."""

import io

import pytest

from errors import AssetNotFound
from services.asset_service import AssetStore, area_segment, next_stamp, safe_filename


def test_stamps_strictly_increase():
    stamps = [next_stamp() for _ in range(50)]
    assert stamps == sorted(set(stamps))


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("ch1.mp3", "ch1.mp3"),
        ("a b.mp3", "a_b.mp3"),
        ("../../etc/passwd", ".._.._etc_passwd"),
        ("..", "__"),
        ("", "unnamed"),
    ],
)
def test_safe_filename(raw, expected):
    assert safe_filename(raw) == expected


def test_ensure_area_is_idempotent(tmp_path):
    store = AssetStore(tmp_path)
    first = store.ensure_area("b1")
    second = store.ensure_area("b1")
    assert first == second
    assert first.is_dir()


def test_list_assets_skips_subdirectories(tmp_path):
    store = AssetStore(tmp_path)
    store.upload("b1", [("a.mp3", io.BytesIO(b"a"))])
    store.store_cover("b1", "c.jpg", io.BytesIO(b"c"))
    listed = store.list_assets("b1")
    assert len(listed) == 1
    assert listed[0]["name"].endswith("-a.mp3")
    assert listed[0]["url"] == f"/uploads/b1/{listed[0]['name']}"


def test_book_id_cannot_escape_root(tmp_path):
    store = AssetStore(tmp_path / "uploads")
    store.upload("..", [("a.mp3", io.BytesIO(b"a"))])
    assert store.area_path("..").parent == tmp_path / "uploads"
    assert not (tmp_path / "a.mp3").exists()


def test_resolve_rejects_paths_outside_root(tmp_path):
    (tmp_path / "secret.txt").write_text("x")
    store = AssetStore(tmp_path / "uploads")
    store.ensure_area("b1")
    with pytest.raises(AssetNotFound):
        store.resolve("b1", "../../secret.txt")


def test_resolve_finds_uploaded_file(tmp_path):
    store = AssetStore(tmp_path)
    url = store.upload("b1", [("a.mp3", io.BytesIO(b"data"))])[0]["url"]
    stored = url.rsplit("/", 1)[1]
    assert store.resolve("b1", stored).read_bytes() == b"data"


@pytest.mark.parametrize(
    ("first", "second"),
    [
        ("a b", "a_b"),
        ("a/b", "a_b"),
        ("..", "__"),
        ("L" * 200 + "1", "L" * 200 + "2"),
    ],
)
def test_distinct_book_ids_keep_separate_areas(tmp_path, first, second):
    store = AssetStore(tmp_path)
    store.upload(first, [("x.mp3", io.BytesIO(b"x"))])
    assert store.list_assets(second) == []
    store.upload(second, [("y.mp3", io.BytesIO(b"y"))])
    assert [a["name"].split("-", 1)[1] for a in store.list_assets(first)] == ["x.mp3"]
    assert [a["name"].split("-", 1)[1] for a in store.list_assets(second)] == ["y.mp3"]


def test_area_segment_is_a_single_path_component():
    for book_id in ["", ".", "..", "a/b", "a\\b", "x" * 500, "книга"]:
        segment = area_segment(book_id)
        assert "/" not in segment
        assert segment not in ("", ".", "..")
        assert len(segment) <= 200
