"""
Concurrent Aggregator - Fan-out mot scanning task moi file, fan-in qua channel.

State machine: IDLE -> SPAWNING -> COLLECTING -> DRAINING -> DONE

AN TOAN RACE CONDITION:
- Moi task so huu private FrequencyTable cua no, khong task nao khac doc/ghi
- Task chi gui Pair (immutable) qua channel, khong cham vao shared table
- Chi aggregator (single writer) mutate shared table -> khong can lock

DRAIN SWEEP (bat buoc):
Select khong uu tien lane nao, nen completion signal cua mot task co the duoc
nhan truoc cac Pair cua chinh task do van con nam trong buffer. Sau khi
live-task counter ve 0, aggregator quet non-blocking results lane cho den khi
rong. Bo buoc nay se mat counts.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Union

from core.counting.channel import FanInChannel, Lane, LanePolicy, random_lane
from core.counting.file_scanner import FileScanner
from core.counting.frequency_table import FrequencyTable
from core.logging_config import log_debug, log_error, log_info

PathLike = Union[str, Path]
Scanner = Callable[[PathLike], FrequencyTable]


class AggregatorState(Enum):
    """Cac trang thai cua mot aggregation run."""

    IDLE = "idle"
    SPAWNING = "spawning"
    COLLECTING = "collecting"
    DRAINING = "draining"
    DONE = "done"


@dataclass
class AggregateStats:
    """Thong ke cua mot aggregation run"""

    files: int = 0
    pairs_collected: int = 0
    pairs_drained: int = 0
    completions: int = 0


class ConcurrentAggregator:
    """
    Dem words tren nhieu files song song, merge vao mot shared table.

    Usage:
        aggregator = ConcurrentAggregator(paths)
        table = aggregator.run()
        print(aggregator.stats)

    Moi instance chi run mot lan.
    """

    def __init__(
        self,
        paths: Sequence[PathLike],
        scanner: Optional[Scanner] = None,
        capacity: int = 0,
        max_workers: int = 0,
        lane_policy: LanePolicy = random_lane,
    ):
        """
        Args:
            paths: Danh sach files can dem
            scanner: Callable path -> FrequencyTable (default: FileScanner())
            capacity: Buffer size moi lane; luon >= so files
            max_workers: So threads; 0 = mot thread cho moi file
            lane_policy: Chon lane khi ca hai deu ready
        """
        self.paths: List[PathLike] = list(paths)
        self.scanner: Scanner = scanner if scanner is not None else FileScanner()
        self.capacity = max(len(self.paths), capacity, 1)
        self.max_workers = max_workers
        self.lane_policy = lane_policy

        self.state = AggregatorState.IDLE
        self.stats = AggregateStats(files=len(self.paths))
        self.table = FrequencyTable()
        self.channel = FanInChannel(self.capacity)

    def run(self) -> FrequencyTable:
        """
        Chay toan bo pipeline va tra ve shared table.

        Returns:
            FrequencyTable chua union cua counts tu tat ca files

        Raises:
            RuntimeError: Neu instance da run truoc do
        """
        if self.state is not AggregatorState.IDLE:
            raise RuntimeError(f"aggregator already ran (state={self.state.value})")

        if not self.paths:
            self.channel.close()
            self.state = AggregatorState.DONE
            return self.table

        num_workers = self.max_workers or len(self.paths)
        log_debug(
            f"[Aggregator] {len(self.paths)} files, {num_workers} workers, "
            f"capacity {self.capacity}"
        )

        with ThreadPoolExecutor(
            max_workers=num_workers, thread_name_prefix="wordtally-scan"
        ) as executor:
            self.state = AggregatorState.SPAWNING
            # Submit tat ca tasks truoc khi await bat ky task nao
            for path in self.paths:
                executor.submit(self._scan_task, path)

            self.collect(len(self.paths))
            self.drain()
            self.channel.close()

        self.state = AggregatorState.DONE
        log_info(
            f"[Aggregator] {self.stats.files} files -> {len(self.table)} distinct "
            f"words ({self.stats.pairs_collected} collected, "
            f"{self.stats.pairs_drained} drained)"
        )
        return self.table

    def _scan_task(self, path: PathLike) -> None:
        """
        Worker function - scan 1 file va gui ket qua qua channel.

        Completion signal duoc gui trong finally de aggregator
        khong bao gio bi treo vi mot task loi.
        """
        try:
            private = self.scanner(path)
            for pair in private.pairs():
                self.channel.send_pair(pair)
        except Exception as e:
            # Scanner tu xu ly I/O errors; day la loi khong mong doi
            log_error(f"[Aggregator] Scan task for {path} failed", e)
        finally:
            self.channel.send_done()

    def collect(self, live: int) -> None:
        """
        Collecting phase: select tren 2 lanes cho den khi nhan du completions.

        Args:
            live: So tasks con dang chay (so completion signals can nhan)
        """
        self.state = AggregatorState.COLLECTING
        while live > 0:
            lane, item = self.channel.select(self.lane_policy)
            if lane is Lane.RESULTS:
                self.table.add(item.word, item.count)
                self.stats.pairs_collected += 1
            else:
                live -= 1
                self.stats.completions += 1

    def drain(self) -> int:
        """
        Draining phase: non-blocking sweep cac Pair con trong buffer.

        Returns:
            So Pair thu hoi duoc
        """
        self.state = AggregatorState.DRAINING
        drained = 0
        while True:
            pair = self.channel.try_recv_pair()
            if pair is None:
                break
            self.table.add(pair.word, pair.count)
            drained += 1
        self.stats.pairs_drained += drained
        if drained:
            log_debug(f"[Aggregator] Drain sweep recovered {drained} pairs")
        return drained


def aggregate(paths: Sequence[PathLike], **kwargs) -> FrequencyTable:
    """
    Convenience wrapper: ConcurrentAggregator(paths, **kwargs).run().

    Args:
        paths: Danh sach files can dem
        **kwargs: scanner, capacity, max_workers, lane_policy

    Returns:
        FrequencyTable tong hop
    """
    return ConcurrentAggregator(paths, **kwargs).run()
