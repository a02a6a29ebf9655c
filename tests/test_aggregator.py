"""
Unit tests cho core/counting/aggregator.py

Test cac case:
- Concurrent aggregation == sequential scan + merge
- Disjoint vocabularies
- Missing file khong anh huong files khac
- Drain sweep thu hoi Pairs con trong buffer (regression)
- Scanner loi khong lam treo aggregator
- State machine
"""

import logging
import threading
import time

import pytest

from core.counting.aggregator import (
    AggregatorState,
    ConcurrentAggregator,
    aggregate,
)
from core.counting.channel import prefer_completions
from core.counting.file_scanner import scan_file
from core.counting.frequency_table import FrequencyTable, Pair


def _write(tmp_path, name, text):
    f = tmp_path / name
    f.write_text(text, encoding="utf-8")
    return f


class TestAggregate:
    """Test ket qua aggregation."""

    def test_no_paths(self):
        aggregator = ConcurrentAggregator([])
        assert len(aggregator.run()) == 0
        assert aggregator.state is AggregatorState.DONE

    def test_concurrent_equals_sequential(self, tmp_path):
        f1 = _write(tmp_path, "a.txt", "The dog and the cat.\nA dog!")
        f2 = _write(tmp_path, "b.txt", "the owl, THE dog; cats & dogs")

        expected = scan_file(f1).merge(scan_file(f2))
        assert aggregate([f1, f2]) == expected
        assert aggregate([f2, f1]) == expected

    def test_disjoint_vocabularies(self, tmp_path):
        vocabularies = [
            {"alpha": 3, "beta": 1},
            {"gamma": 2},
            {"delta": 1, "epsilon": 4, "zeta": 2},
        ]
        paths = []
        for i, vocab in enumerate(vocabularies):
            words = " ".join(w for w, n in vocab.items() for _ in range(n))
            paths.append(_write(tmp_path, f"f{i}.txt", words))

        table = aggregate(paths)

        assert len(table) == sum(len(v) for v in vocabularies)
        for vocab in vocabularies:
            for word, count in vocab.items():
                assert table[word] == count

    def test_missing_file(self, tmp_path, caplog):
        good = _write(tmp_path, "good.txt", "hello hello world")
        missing = tmp_path / "nope.txt"

        with caplog.at_level(logging.ERROR, logger="wordtally"):
            table = aggregate([good, missing])

        assert table == {"hello": 2, "world": 1}
        assert "nope.txt" in caplog.text

    def test_file_with_invalid_bytes(self, tmp_path):
        """File bat dau bang byte khong phai UTF-8 van dong gop words."""
        latin = tmp_path / "latin.txt"
        latin.write_bytes(b"\xff first line\nhello world\n")
        plain = _write(tmp_path, "plain.txt", "hello")

        assert aggregate([latin]) == {"first": 1, "line": 1, "hello": 1, "world": 1}
        assert aggregate([latin, plain])["hello"] == 2

    def test_many_files_small_capacity_workers(self, tmp_path):
        """Nhieu Pairs hon capacity va it workers hon files: khong deadlock."""
        vocab = [a + b for a in "abcdef" for b in "ghijkl"]
        paths = [
            _write(tmp_path, f"f{i}.txt", " ".join(vocab)) for i in range(12)
        ]
        aggregator = ConcurrentAggregator(paths, max_workers=3)
        table = aggregator.run()

        assert aggregator.capacity == 12
        assert table == {word: 12 for word in vocab}
        stats = aggregator.stats
        assert stats.pairs_collected + stats.pairs_drained == 12 * len(vocab)
        assert stats.completions == 12

    def test_prefer_completions_end_to_end(self, tmp_path):
        paths = [
            _write(tmp_path, f"f{i}.txt", "apple banana cherry " * (i + 1))
            for i in range(5)
        ]
        table = aggregate(paths, lane_policy=prefer_completions)
        assert table == {"apple": 15, "banana": 15, "cherry": 15}


class TestDrainSweep:
    """Regression: completions duoc nhan truoc Pairs van con trong buffer."""

    def _prefilled(self, tasks, pairs_per_task):
        aggregator = ConcurrentAggregator(
            [f"file{i}" for i in range(tasks)],
            capacity=tasks * pairs_per_task,
            lane_policy=prefer_completions,
        )
        # Moi "task" gui het Pairs roi completion, truoc khi aggregator chay
        for i in range(tasks):
            for j in range(pairs_per_task):
                aggregator.channel.send_pair(Pair(f"word{j}", i + 1))
            aggregator.channel.send_done()
        return aggregator

    def test_collect_alone_misses_buffered_pairs(self):
        aggregator = self._prefilled(tasks=3, pairs_per_task=4)
        aggregator.collect(3)
        assert aggregator.stats.completions == 3
        assert len(aggregator.table) == 0

    def test_drain_recovers_every_pair(self):
        aggregator = self._prefilled(tasks=3, pairs_per_task=4)
        aggregator.collect(3)
        drained = aggregator.drain()

        assert drained == 12
        assert aggregator.stats.pairs_drained == 12
        assert aggregator.state is AggregatorState.DRAINING
        # count moi word = 1 + 2 + 3
        assert aggregator.table == {f"word{j}": 6 for j in range(4)}

    def test_drain_on_empty_channel(self):
        aggregator = ConcurrentAggregator(["x"])
        assert aggregator.drain() == 0


class TestTaskFailures:
    """Scanner raise exception: van co completion signal."""

    def test_failing_scanner_does_not_hang(self, caplog):
        def scanner(path):
            if path == "bad":
                raise RuntimeError("boom")
            return FrequencyTable({"ok": 1})

        with caplog.at_level(logging.ERROR, logger="wordtally"):
            table = aggregate(["good", "bad", "good2"], scanner=scanner)

        assert table == {"ok": 2}
        assert "boom" in caplog.text


class TestStateMachine:
    """Test state transitions."""

    def test_collecting_while_tasks_blocked(self, tmp_path):
        f = _write(tmp_path, "a.txt", "hello world")
        gate = threading.Event()

        def scanner(path):
            gate.wait(timeout=5)
            return scan_file(path)

        aggregator = ConcurrentAggregator([f], scanner=scanner)
        assert aggregator.state is AggregatorState.IDLE

        worker = threading.Thread(target=aggregator.run)
        worker.start()
        for _ in range(500):
            if aggregator.state is AggregatorState.COLLECTING:
                break
            time.sleep(0.01)
        assert aggregator.state is AggregatorState.COLLECTING

        gate.set()
        worker.join(timeout=5)
        assert aggregator.state is AggregatorState.DONE
        assert aggregator.table == {"hello": 1, "world": 1}

    def test_run_twice_rejected(self):
        aggregator = ConcurrentAggregator([])
        aggregator.run()
        with pytest.raises(RuntimeError):
            aggregator.run()
