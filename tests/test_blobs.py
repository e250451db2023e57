"""Blob store tests."""

import io
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from filecast.storage import BlobStore, unique_name


def test_unique_name_keeps_simple_extension() -> None:
    """Short alphanumeric extensions survive, lowercased."""
    assert unique_name("Photo.PNG").endswith(".png")


@pytest.mark.parametrize("filename", ["noext", "weird.p/ng", "archive.", "x.way-too-long-extension"])
def test_unique_name_drops_unusable_extension(filename: str) -> None:
    """Missing or odd extensions are dropped."""
    name = unique_name(filename)
    stem, _, nonce = name.partition("-")
    assert stem.isdigit()
    assert len(nonce) == 16
    assert "." not in name


def test_unique_names_do_not_collide_under_concurrency() -> None:
    """Names generated in parallel within the same millisecond stay distinct."""
    with ThreadPoolExecutor(max_workers=8) as pool:
        names = list(pool.map(unique_name, ["a.txt"] * 2000))
    assert len(set(names)) == len(names)


def test_save_writes_file_under_root(tmp_path: Path) -> None:
    """Saved bytes land in the store directory under a fresh name."""
    store = BlobStore(tmp_path / "uploads")
    store.initialize()

    path = store.save("report.pdf", io.BytesIO(b"%PDF-1.7"))

    stored = Path(path)
    assert stored.parent == tmp_path / "uploads"
    assert stored.suffix == ".pdf"
    assert stored.read_bytes() == b"%PDF-1.7"
    assert [p.name for p in stored.parent.iterdir()] == [stored.name]


def test_check_fails_for_missing_root(tmp_path: Path) -> None:
    """An uninitialized store is reported as unusable."""
    store = BlobStore(tmp_path / "missing")
    with pytest.raises(OSError):
        store.check()
