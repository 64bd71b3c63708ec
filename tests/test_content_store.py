"""Tests for ContentStore"""

import asyncio
import shutil
from unittest.mock import patch

import pytest

from histograph.config import HistographConfig
from histograph.storage import ContentHash, ContentStore, IoFailure, ObjectNotFound, Partition


class TestContentStorePut:

    @pytest.mark.asyncio
    async def test_put_returns_hash_of_content(self, store):
        content_hash = await store.put(Partition.VERTEX, b"payload")
        assert content_hash == ContentHash.compute(b"payload")

    @pytest.mark.asyncio
    async def test_put_creates_partition_directory(self, store, base_path):
        await store.put(Partition.EDGE_MANIFEST, b"payload")
        assert (base_path / "edgevec").is_dir()

    @pytest.mark.asyncio
    async def test_object_file_named_by_key(self, store, base_path):
        content_hash = await store.put(Partition.VERTEX, b"payload")
        path = base_path / "vertex" / content_hash.to_key_string()
        assert path.read_bytes() == b"payload"

    @pytest.mark.asyncio
    async def test_put_twice_is_idempotent(self, store, base_path):
        first = await store.put(Partition.VERTEX, b"same")
        listing = sorted(p.name for p in (base_path / "vertex").iterdir())

        second = await store.put(Partition.VERTEX, b"same")

        assert first == second
        assert sorted(p.name for p in (base_path / "vertex").iterdir()) == listing
        assert len(listing) == 1

    @pytest.mark.asyncio
    async def test_concurrent_identical_puts(self, store, base_path):
        hashes = await asyncio.gather(*(store.put(Partition.EDGE, b"dup") for _ in range(20)))
        assert len(set(hashes)) == 1
        # no temporary files left behind
        assert [p.name for p in (base_path / "edge").iterdir()] == [hashes[0].to_key_string()]

    @pytest.mark.asyncio
    async def test_put_recreates_removed_partition(self, store, base_path):
        await store.put(Partition.VERTEX, b"first")
        shutil.rmtree(base_path / "vertex")

        content_hash = await store.put(Partition.VERTEX, b"second")

        assert await store.get(Partition.VERTEX, content_hash) == b"second"

    @pytest.mark.asyncio
    async def test_partitions_are_separate_namespaces(self, store):
        content_hash = await store.put(Partition.VERTEX, b"payload")
        assert await store.contains(Partition.VERTEX, content_hash)
        assert not await store.contains(Partition.EDGE, content_hash)

    @pytest.mark.asyncio
    async def test_unbounded_concurrency(self, base_path):
        store = ContentStore(base_path, HistographConfig(max_concurrency=0))
        hashes = await asyncio.gather(*(store.put(Partition.VERTEX, bytes([i])) for i in range(50)))
        assert len(set(hashes)) == 50

    @pytest.mark.asyncio
    async def test_fsync_enabled(self, base_path):
        store = ContentStore(base_path, HistographConfig(fsync=True))
        content_hash = await store.put(Partition.VERTEX, b"durable")
        assert await store.get(Partition.VERTEX, content_hash) == b"durable"


class TestContentStoreGet:

    @pytest.mark.asyncio
    async def test_get_returns_stored_bytes(self, store):
        content_hash = await store.put(Partition.EDGE, b"\x00\x01\x02")
        assert await store.get(Partition.EDGE, content_hash) == b"\x00\x01\x02"

    @pytest.mark.asyncio
    async def test_get_missing_raises_not_found(self, store):
        missing = ContentHash.compute(b"never stored")
        with pytest.raises(ObjectNotFound) as exc_info:
            await store.get(Partition.VERTEX, missing)

        assert exc_info.value.partition == "vertex"
        assert exc_info.value.content_hash == missing.to_key_string()

    @pytest.mark.asyncio
    async def test_get_from_wrong_partition_raises_not_found(self, store):
        content_hash = await store.put(Partition.VERTEX, b"payload")
        with pytest.raises(ObjectNotFound):
            await store.get(Partition.VERTEX_MANIFEST, content_hash)


class TestContentStoreIoFailure:

    @pytest.mark.asyncio
    async def test_unwritable_base_raises_io_failure(self, tmp_path):
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("file in the way")
        store = ContentStore(blocker)

        with pytest.raises(IoFailure) as exc_info:
            await store.put(Partition.VERTEX, b"payload")

        assert exc_info.value.operation == "mkdir"
        assert exc_info.value.path == blocker / "vertex"

    @pytest.mark.asyncio
    async def test_write_failure_raises_io_failure(self, store, base_path):
        with patch("aiofiles.os.replace", side_effect=PermissionError("denied")):
            with pytest.raises(IoFailure) as exc_info:
                await store.put(Partition.VERTEX, b"payload")

        assert exc_info.value.operation == "write"
        assert isinstance(exc_info.value.__cause__, PermissionError)
        # the temporary file is cleaned up
        assert list((base_path / "vertex").iterdir()) == []

    @pytest.mark.asyncio
    async def test_read_failure_raises_io_failure(self, store):
        content_hash = await store.put(Partition.VERTEX, b"payload")
        with patch("aiofiles.open", side_effect=PermissionError("denied")):
            with pytest.raises(IoFailure) as exc_info:
                await store.get(Partition.VERTEX, content_hash)

        assert exc_info.value.operation == "read"
        assert exc_info.value.path == store.object_path(Partition.VERTEX, content_hash)
