"""
FrequencyTable - Mapping word -> occurrence count.

Table chi tang, khong co removal. Moi table chi co mot writer tai mot thoi diem:
- FileScanner so huu private table trong luc scan
- ConcurrentAggregator so huu shared table sau khi scan bat dau

Pair la don vi van chuyen (immutable) giua scanner task va aggregator.
"""

from typing import Dict, Iterator, List, NamedTuple, Optional, Tuple


class Pair(NamedTuple):
    """Transport tuple (word, count) gui tu scanning task toi aggregator."""

    word: str
    count: int


class FrequencyTable:
    """
    Mutable mapping tu lowercase word sang so lan xuat hien.

    Khong thread-safe: ownership duoc structure de chi co mot writer,
    khong dung lock.
    """

    __slots__ = ("_counts",)

    def __init__(self, counts: Optional[Dict[str, int]] = None):
        self._counts: Dict[str, int] = {}
        if counts:
            for word, count in counts.items():
                self.add(word, count)

    def increment(self, word: str) -> None:
        """Tang count cua word them 1, tao entry neu chua co."""
        self._counts[word] = self._counts.get(word, 0) + 1

    def add(self, word: str, count: int) -> None:
        """
        Cong count vao entry cua word.

        Raises:
            ValueError: Neu count am (table chi tang)
        """
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        self._counts[word] = self._counts.get(word, 0) + count

    def merge(self, other: "FrequencyTable") -> "FrequencyTable":
        """
        Cong tat ca entries cua other vao table nay.

        Snapshot items truoc de merge(self) cho ket qua gap doi
        thay vi loi "dict changed size during iteration".

        Returns:
            Chinh table nay (da bi mutate)
        """
        for word, count in list(other.items()):
            self.add(word, count)
        return self

    def get(self, word: str, default: int = 0) -> int:
        return self._counts.get(word, default)

    def __getitem__(self, word: str) -> int:
        return self._counts.get(word, 0)

    def __contains__(self, word: object) -> bool:
        return word in self._counts

    def __len__(self) -> int:
        return len(self._counts)

    def __iter__(self) -> Iterator[str]:
        return iter(self._counts)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FrequencyTable):
            return self._counts == other._counts
        if isinstance(other, dict):
            return self._counts == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"FrequencyTable({self._counts!r})"

    def items(self) -> List[Tuple[str, int]]:
        return list(self._counts.items())

    def pairs(self) -> Iterator[Pair]:
        """Chuyen moi entry thanh Pair de gui qua channel."""
        for word, count in self._counts.items():
            yield Pair(word, count)
