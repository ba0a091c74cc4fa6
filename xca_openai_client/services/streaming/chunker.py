"""
Fixed-size byte chunking over a live byte source.

A producer task reads the source, buffers bytes and hands full-threshold
chunks to the consumer through a bounded queue. The consumer iterates with
``async for`` and may stop at any point; ``aclose()`` (or leaving the
``async with`` block) cancels the producer and releases the source. A stream
that is dropped without being closed cancels its producer when it is
garbage-collected, and the producer releases the source on the way out.
"""

from __future__ import annotations

import asyncio
import enum
import logging
import weakref
from typing import AsyncIterator, Awaitable, Callable, Optional, Set

from ...core.config import STREAM_CHUNK_SIZE, STREAM_QUEUE_SIZE

logger = logging.getLogger("XCAOpenAIClient.Services.Streaming.Chunker")

# 运行中的 producer 任务需要强引用，否则事件循环只持有弱引用
_running_producers: Set[asyncio.Task] = set()


class StreamState(enum.Enum):
    ACCUMULATING = "accumulating"
    EMITTING = "emitting"
    DRAINING = "draining"
    FINISHED = "finished"
    FAILED = "failed"


class _EndOfStream:
    pass


class _StreamFailure:
    def __init__(self, error: BaseException):
        self.error = error


_END = _EndOfStream()


class _Pipeline:
    """
    Everything the producer touches. It never refers back to the
    ByteChunkStream, so dropping the stream leaves it collectable.
    """

    def __init__(
        self,
        source: AsyncIterator[bytes],
        chunk_size: int,
        max_pending: int,
        on_close: Optional[Callable[[], Awaitable[None]]],
    ):
        self.source = source
        self.chunk_size = chunk_size
        self.queue: "asyncio.Queue[object]" = asyncio.Queue(maxsize=max(1, max_pending))
        self.on_close = on_close
        self.state = StreamState.ACCUMULATING
        self.released = False

    async def produce(self) -> None:
        buffer = bytearray()
        try:
            async for piece in self.source:
                buffer.extend(piece)
                while len(buffer) >= self.chunk_size:
                    self.state = StreamState.EMITTING
                    chunk = bytes(buffer[:self.chunk_size])
                    del buffer[:self.chunk_size]
                    await self.queue.put(chunk)
                self.state = StreamState.ACCUMULATING
            if buffer:
                self.state = StreamState.DRAINING
                await self.queue.put(bytes(buffer))
            await self.queue.put(_END)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self.state = StreamState.FAILED
            logger.error(f"Stream source failed: {type(e).__name__} - {e}")
            await self.queue.put(_StreamFailure(e))
        finally:
            await self.release()

    async def release(self) -> None:
        if self.released:
            return
        self.released = True
        source_close = getattr(self.source, "aclose", None)
        if source_close is not None:
            await source_close()
        if self.on_close is not None:
            await self.on_close()


def _cancel_abandoned(task: asyncio.Task) -> None:
    if not task.done():
        logger.warning("Stream dropped without aclose(), cancelling its producer")
        task.cancel()


class ByteChunkStream:
    """
    Async iterator of ``bytes`` chunks of exactly ``chunk_size`` bytes, except
    for a possibly shorter last chunk.

    ``on_close`` is awaited once when the source is released, whether the
    stream ended, failed, was closed or was dropped mid-way.
    """

    def __init__(
        self,
        source: AsyncIterator[bytes],
        chunk_size: int = STREAM_CHUNK_SIZE,
        max_pending: int = STREAM_QUEUE_SIZE,
        on_close: Optional[Callable[[], Awaitable[None]]] = None,
    ):
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self._pipeline = _Pipeline(source, chunk_size, max_pending, on_close)
        self._producer: Optional[asyncio.Task] = None
        self._done = False
        self.chunk_count = 0
        self.total_bytes = 0

    @property
    def state(self) -> StreamState:
        return self._pipeline.state

    @property
    def released(self) -> bool:
        return self._pipeline.released

    def __aiter__(self) -> "ByteChunkStream":
        return self

    def _start_producer(self) -> None:
        task = asyncio.create_task(self._pipeline.produce())
        _running_producers.add(task)
        task.add_done_callback(_running_producers.discard)
        weakref.finalize(self, _cancel_abandoned, task)
        self._producer = task

    async def __anext__(self) -> bytes:
        if self._done:
            raise StopAsyncIteration
        if self._producer is None:
            self._start_producer()

        item = await self._pipeline.queue.get()
        if item is _END:
            self._done = True
            self._pipeline.state = StreamState.FINISHED
            logger.info(f"Stream completed. Chunks: {self.chunk_count}, Total bytes: {self.total_bytes}")
            raise StopAsyncIteration
        if isinstance(item, _StreamFailure):
            self._done = True
            self._pipeline.state = StreamState.FAILED
            raise item.error

        self.chunk_count += 1
        self.total_bytes += len(item)
        return item

    async def aclose(self) -> None:
        """Stop consuming: cancel the producer and release the source."""
        if self._producer is not None and not self._producer.done():
            self._producer.cancel()
            await asyncio.wait([self._producer])
        if not self._done:
            self._done = True
            # 未被消费的失败保持 FAILED
            if self._pipeline.state is not StreamState.FAILED:
                self._pipeline.state = StreamState.FINISHED
            logger.info(f"Stream closed after {self.chunk_count} chunks, state={self._pipeline.state.value}")
        await self._pipeline.release()

    async def __aenter__(self) -> "ByteChunkStream":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
