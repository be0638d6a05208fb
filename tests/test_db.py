"""Tests for the SQLite blob store."""

from db import BlobStore, wal_connect


def test_creates_parent_dirs(tmp_path):
    path = tmp_path / "nested" / "dir" / "state.db"
    BlobStore(path)
    assert path.exists()


def test_wal_mode(tmp_path):
    path = tmp_path / "state.db"
    BlobStore(path)
    conn = wal_connect(path)
    try:
        mode = conn.execute("PRAGMA journal_mode").fetchone()[0]
    finally:
        conn.close()
    assert mode == "wal"


def test_set_and_get(tmp_path):
    blobs = BlobStore(tmp_path / "state.db")
    blobs.set("pp_habits", [{"id": "a", "name": "Walk"}])
    assert blobs.get("pp_habits") == [{"id": "a", "name": "Walk"}]


def test_get_default(tmp_path):
    blobs = BlobStore(tmp_path / "state.db")
    assert blobs.get("missing") is None
    assert blobs.get("missing", []) == []


def test_upsert_overwrites(tmp_path):
    blobs = BlobStore(tmp_path / "state.db")
    blobs.set("pp_today_stress_level", "low")
    blobs.set("pp_today_stress_level", "high")
    assert blobs.get("pp_today_stress_level") == "high"
    assert blobs.load_all() == {"pp_today_stress_level": "high"}


def test_load_all_skips_corrupt_rows(tmp_path):
    path = tmp_path / "state.db"
    blobs = BlobStore(path)
    blobs.set("good", {"ok": True})
    conn = wal_connect(path)
    try:
        conn.execute("INSERT INTO blobs (key, value) VALUES (?, ?)", ("bad", "{not json"))
        conn.commit()
    finally:
        conn.close()
    assert blobs.load_all() == {"good": {"ok": True}}
