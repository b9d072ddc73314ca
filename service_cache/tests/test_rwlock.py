"""
Unit tests for the asyncio reader/writer lock.
"""

import asyncio

import pytest

from service_cache.app.cache.rwlock import ReadWriteLock


async def _settle():
    """Let pending tasks run until they block."""
    for _ in range(5):
        await asyncio.sleep(0)


class TestReadWriteLock:
    """Test cases for ReadWriteLock."""

    @pytest.fixture
    def lock(self):
        """Create ReadWriteLock instance."""
        return ReadWriteLock()

    @pytest.mark.asyncio
    async def test_readers_share_access(self, lock):
        """Test several readers hold the lock at once."""
        await lock.acquire_read()
        await asyncio.wait_for(lock.acquire_read(), timeout=1)

        assert lock.readers == 2

        await lock.release_read()
        await lock.release_read()
        assert lock.readers == 0

    @pytest.mark.asyncio
    async def test_writer_blocks_readers(self, lock):
        """Test a reader waits while a writer holds the lock."""
        await lock.acquire_write()

        reader = asyncio.create_task(lock.acquire_read())
        await _settle()
        assert not reader.done()

        await lock.release_write()
        await asyncio.wait_for(reader, timeout=1)
        assert lock.readers == 1

    @pytest.mark.asyncio
    async def test_readers_block_writer(self, lock):
        """Test a writer waits until every reader released."""
        await lock.acquire_read()
        await lock.acquire_read()

        writer = asyncio.create_task(lock.acquire_write())
        await _settle()
        assert not writer.done()

        await lock.release_read()
        await _settle()
        assert not writer.done()

        await lock.release_read()
        await asyncio.wait_for(writer, timeout=1)
        assert lock.writer_active

    @pytest.mark.asyncio
    async def test_writers_are_exclusive(self, lock):
        """Test a second writer waits for the first."""
        await lock.acquire_write()

        second = asyncio.create_task(lock.acquire_write())
        await _settle()
        assert not second.done()

        await lock.release_write()
        await asyncio.wait_for(second, timeout=1)
        assert lock.writer_active

    @pytest.mark.asyncio
    async def test_waiting_writer_holds_back_new_readers(self, lock):
        """Test new readers queue behind a waiting writer."""
        await lock.acquire_read()
        writer = asyncio.create_task(lock.acquire_write())
        await _settle()

        late_reader = asyncio.create_task(lock.acquire_read())
        await _settle()
        assert not late_reader.done()

        await lock.release_read()
        await asyncio.wait_for(writer, timeout=1)
        await _settle()
        assert not late_reader.done()

        await lock.release_write()
        await asyncio.wait_for(late_reader, timeout=1)
        assert lock.readers == 1

    @pytest.mark.asyncio
    async def test_cancelled_writer_releases_readers(self, lock):
        """Test readers proceed when the writer they queued behind is cancelled."""
        await lock.acquire_read()
        writer = asyncio.create_task(lock.acquire_write())
        await _settle()
        late_reader = asyncio.create_task(lock.acquire_read())
        await _settle()
        assert not late_reader.done()

        writer.cancel()
        with pytest.raises(asyncio.CancelledError):
            await writer

        await asyncio.wait_for(late_reader, timeout=1)
        assert lock.readers == 2
        assert not lock.writer_active

    @pytest.mark.asyncio
    async def test_context_managers(self, lock):
        """Test read and write blocks release on exit, including on error."""
        async with lock.read():
            assert lock.readers == 1
        assert lock.readers == 0

        with pytest.raises(RuntimeError):
            async with lock.write():
                assert lock.writer_active
                raise RuntimeError("boom")
        assert not lock.writer_active
