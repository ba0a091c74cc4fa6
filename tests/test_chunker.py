"""Tests for the fixed-size byte chunk stream."""

import asyncio
import gc
import math

import pytest

from xca_openai_client.services.streaming import ByteChunkStream, StreamState

from conftest import RecordingSource


async def collect(stream: ByteChunkStream) -> list:
    return [chunk async for chunk in stream]


def split_bytes(data: bytes, piece_size: int) -> list:
    return [data[i:i + piece_size] for i in range(0, len(data), piece_size)]


# -----------------------------------------------------------------------------
# Chunking
# -----------------------------------------------------------------------------


class TestChunking:
    """Tests for chunk boundaries and ordering."""

    async def test_byte_by_byte_source(self) -> None:
        """"abcdefghij" with threshold 4 gives abcd, efgh, ij then FINISHED."""
        source = RecordingSource(split_bytes(b"abcdefghij", 1))
        async with ByteChunkStream(source, chunk_size=4) as stream:
            assert await collect(stream) == [b"abcd", b"efgh", b"ij"]
            assert stream.state is StreamState.FINISHED

    @pytest.mark.parametrize(
        ("total", "chunk_size", "piece_size"),
        [
            (0, 4, 1),
            (1, 4, 1),
            (4, 4, 4),
            (9, 4, 3),
            (1024, 1024, 100),
            (4097, 1024, 1000),
            (5000, 1024, 7000),
        ],
    )
    async def test_chunk_count_and_sizes(self, total: int, chunk_size: int, piece_size: int) -> None:
        """N bytes with threshold T give ceil(N/T) chunks that rebuild the input."""
        data = bytes(i % 251 for i in range(total))
        async with ByteChunkStream(RecordingSource(split_bytes(data, piece_size)), chunk_size=chunk_size) as stream:
            chunks = await collect(stream)

        assert len(chunks) == math.ceil(total / chunk_size)
        assert all(len(chunk) == chunk_size for chunk in chunks[:-1])
        if chunks:
            assert 0 < len(chunks[-1]) <= chunk_size
        assert b"".join(chunks) == data

    async def test_empty_pieces_ignored(self) -> None:
        source = RecordingSource([b"", b"ab", b"", b"cd", b""])
        async with ByteChunkStream(source, chunk_size=2) as stream:
            assert await collect(stream) == [b"ab", b"cd"]

    async def test_counters(self) -> None:
        async with ByteChunkStream(RecordingSource([b"x" * 10]), chunk_size=4) as stream:
            await collect(stream)
            assert stream.chunk_count == 3
            assert stream.total_bytes == 10

    def test_invalid_chunk_size(self) -> None:
        with pytest.raises(ValueError):
            ByteChunkStream(RecordingSource([]), chunk_size=0)


# -----------------------------------------------------------------------------
# Release and failure
# -----------------------------------------------------------------------------


class TestRelease:
    """Tests for source release on completion and cancellation."""

    async def test_released_after_completion(self) -> None:
        closes = []

        async def on_close() -> None:
            closes.append(True)

        source = RecordingSource([b"abc"])
        async with ByteChunkStream(source, chunk_size=2, on_close=on_close) as stream:
            await collect(stream)
        assert source.closed
        assert stream.released
        assert closes == [True]

    async def test_abandon_after_first_chunk(self) -> None:
        """Stopping after one chunk releases an endless source."""
        closes = []

        async def on_close() -> None:
            closes.append(True)

        source = RecordingSource([b"abcd"], repeat=True)
        stream = ByteChunkStream(source, chunk_size=4, max_pending=1, on_close=on_close)
        assert await stream.__anext__() == b"abcd"

        await stream.aclose()

        assert source.closed
        assert closes == [True]
        assert stream.state is StreamState.FINISHED
        with pytest.raises(StopAsyncIteration):
            await stream.__anext__()

    async def test_break_inside_async_with(self) -> None:
        source = RecordingSource([b"ab"], repeat=True)
        async with ByteChunkStream(source, chunk_size=2) as stream:
            async for chunk in stream:
                assert chunk == b"ab"
                break
        assert source.closed

    async def test_close_before_iteration(self) -> None:
        """A stream that was never iterated still releases its source."""
        source = RecordingSource([b"abc"])
        stream = ByteChunkStream(source)
        await stream.aclose()
        assert source.closed
        assert source.reads == 0

    async def test_aclose_is_idempotent(self) -> None:
        closes = []

        async def on_close() -> None:
            closes.append(True)

        stream = ByteChunkStream(RecordingSource([b"abc"]), on_close=on_close)
        await collect(stream)
        await stream.aclose()
        await stream.aclose()
        assert closes == [True]

    async def test_dropped_stream_releases_source(self) -> None:
        """Dropping a half-read stream without aclose() still releases the source."""
        closes = []

        async def on_close() -> None:
            closes.append(True)

        source = RecordingSource([b"ab"], repeat=True)
        stream = ByteChunkStream(source, chunk_size=2, max_pending=1, on_close=on_close)
        async for chunk in stream:
            assert chunk == b"ab"
            break

        del stream
        gc.collect()
        await asyncio.sleep(0.05)

        assert source.closed
        assert closes == [True]


class TestFailure:
    """Tests for source errors."""

    async def test_error_after_delivered_chunks(self) -> None:
        """Chunks read before the fault are delivered, the partial buffer is not."""
        source = RecordingSource([b"abcd", b"ef"], error=ConnectionResetError("peer reset"))
        async with ByteChunkStream(source, chunk_size=4) as stream:
            received = []
            with pytest.raises(ConnectionResetError, match="peer reset"):
                async for chunk in stream:
                    received.append(chunk)

            assert received == [b"abcd"]
            assert stream.state is StreamState.FAILED
            with pytest.raises(StopAsyncIteration):
                await stream.__anext__()
        assert source.closed

    async def test_immediate_error(self) -> None:
        source = RecordingSource([], error=RuntimeError("boom"))
        async with ByteChunkStream(source, chunk_size=4) as stream:
            with pytest.raises(RuntimeError, match="boom"):
                await collect(stream)
        assert source.closed

    async def test_unconsumed_failure_kept_on_close(self) -> None:
        source = RecordingSource([b"abcd"], error=RuntimeError("boom"))
        stream = ByteChunkStream(source, chunk_size=4)
        assert await stream.__anext__() == b"abcd"
        await asyncio.sleep(0.01)

        await stream.aclose()

        assert stream.state is StreamState.FAILED
        assert source.closed
