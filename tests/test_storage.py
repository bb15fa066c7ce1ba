"""Tests for the filesystem object store."""

from pathlib import Path

import pytest

from portfolio_admin.storage import FileObjectStore, create_object_store


class TestFileObjectStore:
    def test_upload_and_remove(self, store):
        path = store.upload("pages", "about.md", b"# About", "text/markdown")

        assert path == "about.md"
        assert (store.root / "pages" / "about.md").read_bytes() == b"# About"
        assert store.remove("pages", ["about.md", "missing.md"]) == ["about.md"]
        assert not (store.root / "pages" / "about.md").exists()

    def test_upload_without_upsert_refuses_overwrite(self, store):
        store.upload("pages", "about.md", b"one")
        with pytest.raises(FileExistsError):
            store.upload("pages", "about.md", b"two")

        store.upload("pages", "about.md", b"two", upsert=True)
        assert (store.root / "pages" / "about.md").read_bytes() == b"two"

    def test_paths_cannot_escape_bucket(self, store):
        with pytest.raises(ValueError):
            store.upload("pages", "../media/evil.md", b"x")

    def test_public_url_round_trip(self, store):
        url = store.get_public_url("media", "photos/my photo.jpg")

        assert url == "https://cdn.example.test/storage/media/photos/my%20photo.jpg"
        assert store.path_from_public_url("media", url) == "photos/my photo.jpg"
        assert store.path_from_public_url("pages", url) is None

    def test_file_uri_without_public_base(self, tmp_path):
        store = FileObjectStore(tmp_path / "files")
        url = store.get_public_url("media", "a.jpg")

        assert url.startswith("file://")
        assert store.path_from_public_url("media", url) == "a.jpg"


class TestCreateObjectStore:
    def test_file_uri(self, tmp_path):
        store = create_object_store(f"file://{tmp_path}/storage")
        assert isinstance(store, FileObjectStore)
        assert store.root == Path(f"{tmp_path}/storage")

    def test_unsupported_scheme(self):
        with pytest.raises(ValueError, match="Unsupported storage scheme"):
            create_object_store("s3://bucket/prefix")
