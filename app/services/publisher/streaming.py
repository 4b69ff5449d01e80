"""In-memory streaming bridge between a source download and a resumable upload.

The producer side runs on the event loop and pushes byte chunks read from
the source into a bounded ByteChannel. The consumer side is the resumable
upload, which runs in a worker thread and pulls fixed-size chunks out of
the channel through ChannelMediaUpload. Nothing is written to disk and at
most ``max_chunks`` source chunks plus one upload chunk are held in memory.
"""

import asyncio
import queue
import threading
import time
from collections.abc import AsyncIterable

from googleapiclient.http import MediaUpload

from app.core.exceptions import SourceStreamError
from app.core.logging import get_logger

logger = get_logger(__name__)

# Blocked reads and writes wake up this often to check for close/abort
_POLL_INTERVAL = 0.1


class ByteChannel:
    """Bounded, thread-safe hand-off of byte chunks.

    One writer, one reader. Writes block while the channel is full, which
    paces the producer to the upload rate. A stored close error is raised
    on the reader side instead of an end-of-stream, so a failed download
    can never finalize a truncated upload.

    Example:
        >>> channel = ByteChannel(max_chunks=64, timeout=120.0)
        >>> channel.write(b"abc")
        >>> channel.close()
        >>> channel.read(8)
        b'abc'
    """

    def __init__(self, max_chunks: int = 64, timeout: float = 120.0) -> None:
        """Initialize channel.

        Args:
            max_chunks: Maximum number of chunks buffered between the two sides
            timeout: Seconds either side may stay blocked before failing
        """
        self._queue: queue.Queue[bytes] = queue.Queue(maxsize=max_chunks)
        self._timeout = timeout
        self._buffer = bytearray()
        self._closed = threading.Event()
        self._aborted = threading.Event()
        self._error: BaseException | None = None
        self._eof = False

        self.bytes_written = 0
        self.bytes_read = 0

    @property
    def closed(self) -> bool:
        """Whether the writer has finished."""
        return self._closed.is_set()

    @property
    def aborted(self) -> bool:
        """Whether the reader has given up."""
        return self._aborted.is_set()

    def write(self, chunk: bytes) -> None:
        """Append a chunk, blocking while the channel is full.

        Args:
            chunk: Bytes to hand over

        Raises:
            SourceStreamError: If the channel is closed, the reader aborted,
                or the reader stayed blocked for longer than the timeout
        """
        if self._closed.is_set():
            raise SourceStreamError("Write to a closed stream channel")
        if not chunk:
            return

        deadline = time.monotonic() + self._timeout
        while True:
            if self._aborted.is_set():
                raise SourceStreamError("Upload stopped reading from the stream")
            try:
                self._queue.put(bytes(chunk), timeout=_POLL_INTERVAL)
                break
            except queue.Full:
                if time.monotonic() >= deadline:
                    raise SourceStreamError(
                        f"Upload did not consume data for {self._timeout:.0f}s"
                    ) from None

        self.bytes_written += len(chunk)

    def close(self, error: BaseException | None = None) -> None:
        """End the stream. Never blocks.

        Args:
            error: Failure that ended the stream early, re-raised to the reader
        """
        if self._closed.is_set():
            return
        self._error = error
        self._closed.set()

    def abort(self) -> None:
        """Stop reading; a blocked writer is released with an error."""
        self._aborted.set()

    def _raise_if_failed(self) -> None:
        if self._error is not None:
            raise SourceStreamError(f"Source stream failed: {self._error}") from self._error

    def _next_item(self, deadline: float) -> bytes | None:
        """Take the next chunk, or None at end of stream."""
        while True:
            try:
                return self._queue.get(timeout=_POLL_INTERVAL)
            except queue.Empty:
                if self._closed.is_set():
                    # Writes that landed before close() are still queued
                    try:
                        return self._queue.get_nowait()
                    except queue.Empty:
                        return None
                if time.monotonic() >= deadline:
                    raise SourceStreamError(
                        f"Source produced no data for {self._timeout:.0f}s"
                    ) from None

    def read(self, size: int) -> bytes:
        """Read up to ``size`` bytes, blocking until that many or end of stream.

        Args:
            size: Number of bytes wanted

        Returns:
            Exactly ``size`` bytes, or fewer only at end of stream

        Raises:
            SourceStreamError: If the writer failed or stalled
        """
        while len(self._buffer) < size and not self._eof:
            self._raise_if_failed()
            item = self._next_item(time.monotonic() + self._timeout)
            if item is None:
                self._eof = True
                break
            self._buffer.extend(item)

        self._raise_if_failed()

        data = bytes(self._buffer[:size])
        del self._buffer[:size]
        self.bytes_read += len(data)
        return data


class ChannelMediaUpload(MediaUpload):
    """Resumable upload media backed by a ByteChannel.

    The total size is unknown up front; the upload finalizes on the first
    short read. Only the most recent chunk is retained, which is enough
    for the resumable protocol to resend a chunk the server did not
    fully acknowledge.
    """

    def __init__(self, channel: ByteChannel, mimetype: str, chunksize: int) -> None:
        self._channel = channel
        self._mimetype = mimetype
        self._chunksize = chunksize
        self._last_offset = 0
        self._last_chunk = b""

    def chunksize(self) -> int:
        return self._chunksize

    def mimetype(self) -> str:
        return self._mimetype

    def size(self) -> int | None:
        return None

    def resumable(self) -> bool:
        return True

    def has_stream(self) -> bool:
        return False

    def getbytes(self, begin: int, length: int) -> bytes:
        """Return ``length`` bytes starting at offset ``begin``.

        Raises:
            SourceStreamError: If ``begin`` is before the retained chunk
        """
        last_end = self._last_offset + len(self._last_chunk)

        if begin == last_end:
            data = self._channel.read(length)
        elif self._last_offset <= begin < last_end:
            head = self._last_chunk[begin - self._last_offset :][:length]
            data = head + self._channel.read(length - len(head))
        else:
            raise SourceStreamError(
                f"Cannot rewind stream to offset {begin} (retained from {self._last_offset})"
            )

        self._last_offset = begin
        self._last_chunk = data
        return data

    def to_json(self) -> str:
        raise NotImplementedError("A streaming upload cannot be serialized")


async def pump_source(chunks: AsyncIterable[bytes], channel: ByteChannel) -> int:
    """Copy a source byte stream into the channel.

    The channel is always closed when this returns or raises; a read
    error (or cancellation) is handed to the reader side before being
    re-raised here.

    Args:
        chunks: Async iterable of source bytes
        channel: Channel to fill

    Returns:
        Number of bytes written
    """
    error: BaseException | None = None
    try:
        async for chunk in chunks:
            await asyncio.to_thread(channel.write, chunk)
    except BaseException as e:
        error = e
        raise
    finally:
        channel.close(error)

    logger.debug("Source stream drained", bytes_written=channel.bytes_written)
    return channel.bytes_written


__all__ = [
    "ByteChannel",
    "ChannelMediaUpload",
    "pump_source",
]
