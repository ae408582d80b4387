"""
queue.py — Min Priority Queue
=============================
Binary heap of (distance, seq, node_id).

Design decisions:
  - `seq` is a monotonically increasing insertion counter, so equal
    distances pop in insertion order and two runs over the same graph
    produce identical traces.
  - Lazy deletion: the queue happily holds several entries for one node.
    It never removes anything except via pop(); deciding that a popped
    entry is stale is the caller's job (the engine checks its visited set).
"""

import heapq
import itertools
from typing import List, NamedTuple, Tuple


class QueueEntry(NamedTuple):
    node_id:  str
    distance: float


class MinQueue:
    def __init__(self):
        self._heap: List[Tuple[float, int, str]] = []
        self._seq = itertools.count()

    def push(self, node_id: str, distance: float) -> None:
        heapq.heappush(self._heap, (distance, next(self._seq), node_id))

    def pop(self) -> QueueEntry:
        """Remove and return the smallest entry.  IndexError when empty."""
        distance, _, node_id = heapq.heappop(self._heap)
        return QueueEntry(node_id, distance)

    def peek(self) -> QueueEntry:
        distance, _, node_id = self._heap[0]
        return QueueEntry(node_id, distance)

    def snapshot(self) -> Tuple[QueueEntry, ...]:
        """Every entry (stale ones included) in pop order."""
        return tuple(QueueEntry(n, d) for d, _, n in sorted(self._heap))

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __repr__(self) -> str:
        return f"MinQueue({list(self.snapshot())})"
