"""
Content Store - directory-backed content-addressed object storage

Each partition is a sub-directory of the base path; each object is a file in
it named by the lowercase hex SHA-256 of its bytes:

    <base>/vertex/<hex>      vertex objects
    <base>/edge/<hex>        edge objects
    <base>/vertexvec/<hex>   vertex manifests
    <base>/edgevec/<hex>     edge manifests

Objects are immutable. Writing an object that already exists rewrites
identical bytes, which is harmless, so concurrent writers of the same content
need no coordination.
"""

import asyncio
import logging
import os
import uuid
from contextlib import asynccontextmanager
from enum import Enum
from pathlib import Path
from typing import AsyncIterator, Optional

import aiofiles
import aiofiles.os

from ..config import HistographConfig
from .content_hash import ContentHash
from .errors import IoFailure, ObjectNotFound

logger = logging.getLogger(__name__)

_fsync = aiofiles.os.wrap(os.fsync)


class Partition(Enum):
    """Object namespaces within a content store, valued by directory name."""
    VERTEX = "vertex"
    EDGE = "edge"
    VERTEX_MANIFEST = "vertexvec"
    EDGE_MANIFEST = "edgevec"


async def ensure_dir(path: Path) -> None:
    """Create a directory and its parents. Safe to call concurrently."""
    try:
        await aiofiles.os.makedirs(path, exist_ok=True)
    except OSError as e:
        raise IoFailure("mkdir", path, str(e)) from e


async def write_file(path: Path, content: bytes, fsync: bool = False) -> None:
    """Write bytes to path, replacing any existing file atomically.

    The bytes go to a uniquely named sibling first and are then renamed onto
    path, so readers see either the old file or the complete new one.

    Raises:
        IoFailure: If writing or renaming fails
    """
    tmp_path = path.with_name(f".{path.name}.{uuid.uuid4().hex}.tmp")
    try:
        async with aiofiles.open(tmp_path, "wb") as f:
            await f.write(content)
            if fsync:
                await f.flush()
                await _fsync(f.fileno())
        await aiofiles.os.replace(tmp_path, path)
    except OSError as e:
        try:
            await aiofiles.os.remove(tmp_path)
        except FileNotFoundError:
            pass
        except OSError:
            logger.warning(f"Could not remove temporary file {tmp_path}")
        raise IoFailure("write", path, str(e)) from e


async def read_file(path: Path) -> bytes:
    """Read a whole file.

    Raises:
        FileNotFoundError: If path does not exist (left to the caller to map)
        IoFailure: For any other read failure
    """
    try:
        async with aiofiles.open(path, "rb") as f:
            return await f.read()
    except FileNotFoundError:
        raise
    except OSError as e:
        raise IoFailure("read", path, str(e)) from e


class ContentStore:
    """
    Content-addressed object store rooted at a base directory.

    Pattern: put(bytes) -> hash, get(hash) -> bytes, per partition
    Lifetime: Objects are never deleted

    Example:
        store = ContentStore(Path("~/.histograph").expanduser())
        key = await store.put(Partition.VERTEX, b"...")
        data = await store.get(Partition.VERTEX, key)
    """

    def __init__(self, base_path: Path, config: Optional[HistographConfig] = None):
        """
        Initialize Content Store.

        Args:
            base_path: Root directory holding the partition directories
            config: Storage settings (default: HistographConfig())
        """
        self.base_path = Path(base_path)
        self.config = config or HistographConfig()
        self._sync_writes = self.config.fsync

        # Bounds the number of object files open at once
        self._limit: Optional[asyncio.Semaphore] = None
        if self.config.max_concurrency > 0:
            self._limit = asyncio.Semaphore(self.config.max_concurrency)

    def partition_path(self, partition: Partition) -> Path:
        return self.base_path / partition.value

    def object_path(self, partition: Partition, content_hash: ContentHash) -> Path:
        return self.partition_path(partition) / content_hash.to_key_string()

    async def ensure_partition(self, partition: Partition) -> None:
        """Create the partition directory if needed."""
        await ensure_dir(self.partition_path(partition))

    @asynccontextmanager
    async def _slot(self) -> AsyncIterator[None]:
        if self._limit is None:
            yield
            return
        async with self._limit:
            yield

    async def put(self, partition: Partition, content: bytes) -> ContentHash:
        """
        Store content under its own hash.

        Args:
            partition: Namespace to store into
            content: Object bytes

        Returns:
            The content hash, which is also the object's key

        Raises:
            IoFailure: If the directory or file cannot be written
        """
        content_hash = ContentHash.compute(content)
        await self.ensure_partition(partition)

        path = self.object_path(partition, content_hash)
        async with self._slot():
            await write_file(path, content, fsync=self._sync_writes)

        logger.debug(f"Stored {partition.value}/{content_hash}")
        return content_hash

    async def get(self, partition: Partition, content_hash: ContentHash) -> bytes:
        """
        Fetch the bytes stored under content_hash.

        Raises:
            ObjectNotFound: If no object exists under that key
            IoFailure: If the file exists but cannot be read
        """
        path = self.object_path(partition, content_hash)
        try:
            async with self._slot():
                content = await read_file(path)
        except FileNotFoundError:
            raise ObjectNotFound(partition.value, content_hash.to_key_string()) from None

        logger.debug(f"Loaded {partition.value}/{content_hash}")
        return content

    async def contains(self, partition: Partition, content_hash: ContentHash) -> bool:
        return await aiofiles.os.path.isfile(self.object_path(partition, content_hash))
