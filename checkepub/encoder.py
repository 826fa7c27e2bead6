"""Streaming base64 encoding of a byte source.

Base64EncodeStream turns any readable binary source into a readable stream of
its base64 encoding without holding the whole input or output in memory.

A daemon worker thread reads the source block by block, encodes each block
and writes it into a bounded in-memory pipe. The consumer (usually the HTTP
client sending the request body) drains the other end. A full pipe blocks the
worker; an empty pipe blocks the consumer. Closing the stream closes the
consumer end, which unblocks the worker and stops it.

Usage::

    with open(path, "rb") as f, Base64EncodeStream(f) as body:
        client.post(url, content=body)
"""

from __future__ import annotations

import base64
import logging
import threading
from collections import deque
from typing import BinaryIO, Iterator

from checkepub.config import DEFAULT_CHUNK_SIZE, DEFAULT_MAX_BUFFERED_CHUNKS

logger = logging.getLogger(__name__)

# Upper bound on how long close() waits for the worker to notice the closure.
_JOIN_TIMEOUT_S = 5.0


# ---------------------------------------------------------------------------
# Bounded pipe
# ---------------------------------------------------------------------------


class _Pipe:
    """Bounded, closable pipe of byte chunks between one writer and one reader.

    Closing either end wakes the other. A writer-side error is re-raised to
    the reader once the chunks written before it have been drained.
    """

    def __init__(self, max_chunks: int) -> None:
        self._chunks: deque[bytes] = deque()
        self._max_chunks = max_chunks
        self._cond = threading.Condition()
        self._write_closed = False
        self._read_closed = False
        self._error: BaseException | None = None

    def write(self, chunk: bytes) -> bool:
        """Block until there is room, then append. False if the reader is gone."""
        with self._cond:
            while len(self._chunks) >= self._max_chunks and not self._read_closed:
                self._cond.wait()
            if self._read_closed:
                return False
            self._chunks.append(chunk)
            self._cond.notify_all()
            return True

    def close_write(self, error: BaseException | None = None) -> None:
        with self._cond:
            self._write_closed = True
            self._error = error
            self._cond.notify_all()

    def read(self) -> bytes:
        """Block until a chunk is available. ``b""`` marks a clean end of stream."""
        with self._cond:
            while not self._chunks and not self._write_closed and not self._read_closed:
                self._cond.wait()
            if self._read_closed:
                raise ValueError("read from closed stream")
            if self._chunks:
                chunk = self._chunks.popleft()
                self._cond.notify_all()
                return chunk
            if self._error is not None:
                raise self._error
            return b""

    def close_read(self) -> None:
        with self._cond:
            self._read_closed = True
            self._chunks.clear()
            self._cond.notify_all()

    @property
    def read_closed(self) -> bool:
        return self._read_closed

    def __len__(self) -> int:
        with self._cond:
            return len(self._chunks)


# ---------------------------------------------------------------------------
# Encoding stream
# ---------------------------------------------------------------------------


class Base64EncodeStream:
    """Readable stream yielding the standard, padded base64 encoding of ``source``.

    Supports ``read(size)``, iteration over encoded chunks, and use as a
    context manager. Has no ``fileno``/``tell``/``seek``, so HTTP clients
    cannot size it up front and send it chunked.

    Args:
        source: Binary source with ``read(n) -> bytes``; ``b""`` means EOF.
        chunk_size: Source bytes per block, rounded down to a multiple of 3.
        max_buffered_chunks: Encoded blocks the pipe holds before the
            worker blocks.
    """

    def __init__(
        self,
        source: BinaryIO,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        max_buffered_chunks: int = DEFAULT_MAX_BUFFERED_CHUNKS,
    ) -> None:
        if max_buffered_chunks < 1:
            raise ValueError(f"max_buffered_chunks must be >= 1, got {max_buffered_chunks}")
        self._source = source
        self._chunk_size = max(3, chunk_size - chunk_size % 3)
        self._pipe = _Pipe(max_buffered_chunks)
        self._pending = b""
        self._worker = threading.Thread(target=self._pump, name="base64-encode", daemon=True)
        self._worker.start()

    # --- Producer ---

    def _pump(self) -> None:
        bytes_in = 0
        bytes_out = 0
        carry = b""
        try:
            while True:
                data = self._source.read(self._chunk_size)
                if not data:
                    break
                bytes_in += len(data)
                data = carry + data
                cut = len(data) - len(data) % 3
                carry = data[cut:]
                if not cut:
                    continue
                encoded = base64.b64encode(data[:cut])
                if not self._pipe.write(encoded):
                    logger.debug("encode_aborted", extra={"bytes_in": bytes_in})
                    return
                bytes_out += len(encoded)
            if carry:
                encoded = base64.b64encode(carry)
                if not self._pipe.write(encoded):
                    logger.debug("encode_aborted", extra={"bytes_in": bytes_in})
                    return
                bytes_out += len(encoded)
        except Exception as exc:
            logger.debug("encode_failed", extra={"bytes_in": bytes_in, "error": str(exc)})
            self._pipe.close_write(exc)
            return
        logger.debug("encode_complete", extra={"bytes_in": bytes_in, "bytes_out": bytes_out})
        self._pipe.close_write()

    # --- Consumer ---

    def read(self, size: int | None = -1) -> bytes:
        """Read up to ``size`` encoded bytes, or everything when ``size`` is negative.

        May return fewer than ``size`` bytes before the end of the stream.
        Returns ``b""`` once all output, padding included, has been read.
        Re-raises the source's exception if reading the source failed.
        """
        if size is None or size < 0:
            parts = [self._pending]
            self._pending = b""
            while True:
                chunk = self._pipe.read()
                if not chunk:
                    return b"".join(parts)
                parts.append(chunk)

        if size == 0:
            if self._pipe.read_closed:
                raise ValueError("read from closed stream")
            return b""

        if not self._pending:
            self._pending = self._pipe.read()
        data, self._pending = self._pending[:size], self._pending[size:]
        return data

    def __iter__(self) -> Iterator[bytes]:
        if self._pending:
            chunk, self._pending = self._pending, b""
            yield chunk
        while True:
            chunk = self._pipe.read()
            if not chunk:
                return
            yield chunk

    # --- Lifecycle ---

    def close(self) -> None:
        """Close the consumer end and stop the worker.

        Buffered output is discarded. The worker stops at its next write
        instead of blocking forever on a full pipe.
        """
        self._pipe.close_read()
        self._pending = b""
        if self._worker is not threading.current_thread():
            self._worker.join(_JOIN_TIMEOUT_S)

    @property
    def closed(self) -> bool:
        return self._pipe.read_closed

    def __enter__(self) -> Base64EncodeStream:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
