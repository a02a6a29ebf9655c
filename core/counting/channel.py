"""
Fan-in Channel - Hai lanes doc lap (pairs + completions) voi select.

Producers (scanning tasks) gui Pair qua results lane va mot completion
signal qua completion lane. Consumer duy nhat (aggregator) dung select()
de nhan tu bat ky lane nao dang co data.

Select duoc xay tren mot counting semaphore: moi message put vao lane
release semaphore dung mot lan, nen sau khi acquire() chac chan co it nhat
mot message dang nam trong mot trong hai lanes.
"""

import queue
import random
import threading
from enum import Enum
from typing import Any, Callable, Optional, Sequence, Tuple

from core.counting.frequency_table import Pair


class Lane(Enum):
    """Hai transport lanes cua channel."""

    RESULTS = "results"
    COMPLETIONS = "completions"


# Policy chon lane khi ca hai deu ready
LanePolicy = Callable[[Sequence[Lane]], Lane]


class ChannelClosedError(RuntimeError):
    """Send tren channel da close."""


def random_lane(ready: Sequence[Lane]) -> Lane:
    """Default policy: chon ngau nhien, khong uu tien lane nao."""
    return random.choice(list(ready))


def prefer_completions(ready: Sequence[Lane]) -> Lane:
    """Luon chon completion lane neu ready (worst case cho drain)."""
    if Lane.COMPLETIONS in ready:
        return Lane.COMPLETIONS
    return ready[0]


class FanInChannel:
    """
    Bounded multi-producer / single-consumer channel voi 2 lanes.

    Usage:
        channel = FanInChannel(capacity=len(paths))

        # producer thread
        for pair in table.pairs():
            channel.send_pair(pair)
        channel.send_done()

        # consumer thread
        lane, item = channel.select()
        pair = channel.try_recv_pair()  # non-blocking, None neu rong
    """

    def __init__(self, capacity: int):
        """
        Args:
            capacity: Buffer size cua moi lane (>= 1)

        Raises:
            ValueError: Neu capacity < 1
        """
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")

        self.capacity = capacity
        self._results: "queue.Queue[Pair]" = queue.Queue(maxsize=capacity)
        self._completions: "queue.Queue[None]" = queue.Queue(maxsize=capacity)
        self._ready = threading.Semaphore(0)
        self._closed = threading.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def _check_open(self) -> None:
        if self._closed.is_set():
            raise ChannelClosedError("send on closed channel")

    def send_pair(self, pair: Pair) -> None:
        """Gui mot Pair; block neu results lane dang day."""
        self._check_open()
        self._results.put(pair)
        self._ready.release()

    def send_done(self) -> None:
        """Gui completion signal (unit marker, khong payload)."""
        self._check_open()
        self._completions.put(None)
        self._ready.release()

    def select(self, policy: LanePolicy = random_lane) -> Tuple[Lane, Any]:
        """
        Block cho den khi co message tren mot lane, roi nhan no.

        Args:
            policy: Ham chon lane khi ca hai deu co data

        Returns:
            (lane, item) - item la Pair hoac None (completion)
        """
        self._ready.acquire()
        while True:
            ready = self._ready_lanes()
            if not ready:
                # Chi xay ra khi try_recv_pair() lay mat message
                # cua permit nay; khong co trong luong aggregator thuong.
                self._ready.acquire()
                continue
            lane = policy(ready)
            source = self._results if lane is Lane.RESULTS else self._completions
            try:
                return lane, source.get_nowait()
            except queue.Empty:
                continue

    def try_recv_pair(self) -> Optional[Pair]:
        """
        Non-blocking receive tren results lane.

        Returns:
            Pair neu co san trong buffer, None neu khong
        """
        try:
            pair = self._results.get_nowait()
        except queue.Empty:
            return None
        # Permit cua message nay khong con can cho select()
        self._ready.acquire(blocking=False)
        return pair

    def _ready_lanes(self) -> Sequence[Lane]:
        ready = []
        if not self._results.empty():
            ready.append(Lane.RESULTS)
        if not self._completions.empty():
            ready.append(Lane.COMPLETIONS)
        return ready

    def close(self) -> None:
        """Dong channel; send sau do se raise ChannelClosedError."""
        self._closed.set()
