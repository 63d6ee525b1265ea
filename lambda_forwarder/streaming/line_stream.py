# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import threading
from collections import deque
from collections.abc import Iterator


class StreamClosedError(RuntimeError):
    pass


class StreamAbortedError(RuntimeError):
    pass


class LineStream:
    """
    A bounded pipe between one thread producing log lines and one thread sending them.

    The producer calls `push` for every line and `close` once after the last line.
    `push` blocks while `max_buffered_lines` lines are waiting to be sent. The consumer
    iterates the stream; each step yields every line buffered so far as a single chunk,
    and iteration ends once the stream is closed and drained.

    Either side may `abort` the stream. A blocked or later `push` then raises
    `StreamAbortedError`, as does the consumer's iteration.
    """

    def __init__(self, max_buffered_lines: int = 1000) -> None:
        if max_buffered_lines < 1:
            raise ValueError("max_buffered_lines must be positive")
        self._max_buffered_lines = max_buffered_lines
        self._buffer: deque[bytes] = deque()
        self._condition = threading.Condition()
        self._closed = False
        self._aborted = False
        self._line_count = 0

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def aborted(self) -> bool:
        return self._aborted

    @property
    def line_count(self) -> int:
        """number of lines accepted by `push`"""
        return self._line_count

    def push(self, line: bytes) -> None:
        with self._condition:
            if self._closed:
                raise StreamClosedError("push after end of stream")
            while (
                len(self._buffer) >= self._max_buffered_lines and not self._aborted
            ):
                self._condition.wait()
            if self._aborted:
                raise StreamAbortedError("stream was aborted")
            self._buffer.append(line)
            self._line_count += 1
            self._condition.notify_all()

    def close(self) -> None:
        with self._condition:
            if self._closed:
                raise StreamClosedError("stream already closed")
            self._closed = True
            self._condition.notify_all()

    def abort(self) -> None:
        with self._condition:
            self._aborted = True
            self._condition.notify_all()

    def __iter__(self) -> Iterator[bytes]:
        while True:
            with self._condition:
                while not self._buffer and not self._closed and not self._aborted:
                    self._condition.wait()
                if self._aborted:
                    raise StreamAbortedError("stream was aborted")
                if not self._buffer:
                    return
                chunk = b"".join(self._buffer)
                self._buffer.clear()
                self._condition.notify_all()
            yield chunk
