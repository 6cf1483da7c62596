"""Bounded handoff channel between the walker and the dispatcher."""

import threading
from collections.abc import Iterator
from pathlib import Path
from queue import Empty
from queue import Full
from queue import Queue

from sbsevery.exceptions import ChannelClosedError

DEFAULT_CHANNEL_CAPACITY = 1024

# How often a blocked sender rechecks whether the receiver went away.
_SEND_POLL_SECONDS = 0.1

_CLOSED = object()


class PathChannel:
    """Ordered single-producer, single-consumer queue of discovered paths.

    The producer calls send() for every path and close() exactly once when it
    is done. The consumer iterates the channel, which ends after close() once
    the backlog is drained. If the consumer calls close_receiver(), pending
    and future sends raise ChannelClosedError.
    """

    def __init__(self, capacity: int = DEFAULT_CHANNEL_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f"Channel capacity must be positive, got {capacity}")
        self._queue: Queue[object] = Queue(maxsize=capacity)
        self._receiver_gone = threading.Event()

    def send(self, path: Path) -> None:
        """Hand a path to the receiver, blocking while the channel is full.

        Raises:
            ChannelClosedError: If the receiver has gone away
        """
        if not self._put(path):
            raise ChannelClosedError(f"Receiver gone, dropped {path}")

    def close(self) -> None:
        """Signal that no more paths are coming."""
        self._put(_CLOSED)

    def close_receiver(self) -> None:
        """Stop receiving and release a producer blocked on a full channel."""
        self._receiver_gone.set()
        while True:
            try:
                self._queue.get_nowait()
            except Empty:
                return

    def __iter__(self) -> Iterator[Path]:
        while not self._receiver_gone.is_set():
            item = self._queue.get()
            if item is _CLOSED:
                return
            yield item  # type: ignore[misc]

    def _put(self, item: object) -> bool:
        while not self._receiver_gone.is_set():
            try:
                self._queue.put(item, timeout=_SEND_POLL_SECONDS)
            except Full:
                continue
            return True
        return False
