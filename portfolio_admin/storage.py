"""
Object storage abstraction for uploaded files.

v0: file:// support (local filesystem)

Storage is addressed by URI, so another backend can be added behind
``create_object_store`` without touching the services that upload files.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, List, Optional
from urllib.parse import quote, unquote, urlparse

from .config import get_settings

logger = logging.getLogger(__name__)


class ObjectStore(ABC):
    """Abstract base class for bucket/path object storage."""

    @abstractmethod
    def upload(
        self,
        bucket: str,
        path: str,
        content: bytes,
        content_type: Optional[str] = None,
        upsert: bool = False,
    ) -> str:
        """Store content at bucket/path and return the stored path.

        Raises:
            FileExistsError: If the object exists and ``upsert`` is False
        """
        pass

    @abstractmethod
    def remove(self, bucket: str, paths: Iterable[str]) -> List[str]:
        """Remove objects; return the paths that were actually removed."""
        pass

    @abstractmethod
    def get_public_url(self, bucket: str, path: str) -> str:
        """Public URL under which the object is served."""
        pass

    @abstractmethod
    def path_from_public_url(self, bucket: str, url: str) -> Optional[str]:
        """Inverse of ``get_public_url``; None if the URL is not in this bucket."""
        pass


class FileObjectStore(ObjectStore):
    """Local filesystem object store (file:// URIs).

    Structure:
        {root}/{bucket}/{path}
    """

    def __init__(self, root: Path, public_base_url: Optional[str] = None):
        self.root = root
        self.public_base_url = (public_base_url or "").rstrip("/")
        self.root.mkdir(parents=True, exist_ok=True)

    def _resolve(self, bucket: str, path: str) -> Path:
        bucket_dir = (self.root / bucket).resolve()
        full_path = (bucket_dir / path.lstrip("/")).resolve()
        if bucket_dir != full_path and bucket_dir not in full_path.parents:
            raise ValueError(f"Path escapes bucket {bucket!r}: {path}")
        return full_path

    def upload(
        self,
        bucket: str,
        path: str,
        content: bytes,
        content_type: Optional[str] = None,
        upsert: bool = False,
    ) -> str:
        full_path = self._resolve(bucket, path)
        if full_path.exists() and not upsert:
            raise FileExistsError(f"Object already exists: {bucket}/{path}")
        full_path.parent.mkdir(parents=True, exist_ok=True)
        full_path.write_bytes(content)
        logger.debug(
            "Stored %s/%s (%d bytes, %s)", bucket, path, len(content), content_type
        )
        return path

    def remove(self, bucket: str, paths: Iterable[str]) -> List[str]:
        removed = []
        for path in paths:
            full_path = self._resolve(bucket, path)
            if full_path.is_file():
                full_path.unlink()
                removed.append(path)
        return removed

    def get_public_url(self, bucket: str, path: str) -> str:
        quoted = quote(path.lstrip("/"))
        if self.public_base_url:
            return f"{self.public_base_url}/{bucket}/{quoted}"
        return (self.root.resolve() / bucket / path.lstrip("/")).as_uri()

    def path_from_public_url(self, bucket: str, url: str) -> Optional[str]:
        prefixes = [f"{self.public_base_url}/{bucket}/"] if self.public_base_url else []
        prefixes.append((self.root.resolve() / bucket).as_uri() + "/")
        for prefix in prefixes:
            if url.startswith(prefix):
                return unquote(url[len(prefix):])
        return None


def create_object_store(
    uri: str, public_base_url: Optional[str] = None
) -> ObjectStore:
    """Factory function to create an ObjectStore from a URI.

    Args:
        uri: Storage root (e.g., "file:///var/lib/portfolio/storage")
        public_base_url: Base URL objects are served from, if any

    Returns:
        ObjectStore instance for the given URI scheme

    Raises:
        ValueError: If URI scheme is not supported
    """
    parsed = urlparse(uri)

    if parsed.scheme == "file":
        # file://./storage -> ./storage, file:///srv/storage -> /srv/storage
        root = Path(parsed.netloc + parsed.path) if parsed.netloc else Path(parsed.path)
        return FileObjectStore(root, public_base_url)

    raise ValueError(
        f"Unsupported storage scheme: {parsed.scheme}. Supported: file://"
    )


_store: Optional[ObjectStore] = None


def get_object_store() -> ObjectStore:
    """FastAPI dependency returning the configured store."""
    global _store
    if _store is None:
        settings = get_settings()
        _store = create_object_store(
            settings.storage_uri, settings.storage_public_base_url
        )
    return _store
