"""
Indexed binary min-heap over integer items with decrease-key.

Items are dense integers in [0, capacity) (grid cell indices). A position
table maps each item to its heap slot so membership checks are O(1) and
decrease_key is O(log n). Entries with equal keys pop in insertion order.
"""
from typing import List, Tuple


class IndexedMinHeap:
    """Priority queue of integer items keyed by int cost."""

    def __init__(self, capacity: int):
        if capacity < 0:
            raise ValueError("capacity must be non-negative")
        self._capacity = capacity
        self._heap: List[int] = []
        self._position: List[int] = [-1] * capacity
        self._key: List[int] = [0] * capacity
        self._order: List[int] = [0] * capacity
        self._counter = 0

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __contains__(self, item: int) -> bool:
        return 0 <= item < self._capacity and self._position[item] != -1

    def key_of(self, item: int) -> int:
        """Current key of an item in the heap."""
        if item not in self:
            raise KeyError(item)
        return self._key[item]

    def push(self, item: int, key: int) -> None:
        """Insert an item that is not yet in the heap."""
        if not 0 <= item < self._capacity:
            raise IndexError(f"item {item} outside capacity {self._capacity}")
        if item in self:
            raise ValueError(f"item {item} already in heap")
        self._key[item] = key
        self._order[item] = self._counter
        self._counter += 1
        self._heap.append(item)
        self._position[item] = len(self._heap) - 1
        self._sift_up(len(self._heap) - 1)

    def decrease_key(self, item: int, key: int) -> None:
        """Lower the key of an item already in the heap."""
        if item not in self:
            raise KeyError(item)
        if key > self._key[item]:
            raise ValueError(f"new key {key} is greater than current key {self._key[item]}")
        self._key[item] = key
        self._sift_up(self._position[item])

    def pop(self) -> Tuple[int, int]:
        """Remove and return (item, key) with the smallest key."""
        if not self._heap:
            raise IndexError("pop from empty heap")
        top = self._heap[0]
        last = self._heap.pop()
        self._position[top] = -1
        if self._heap:
            self._heap[0] = last
            self._position[last] = 0
            self._sift_down(0)
        return top, self._key[top]

    def _less(self, a: int, b: int) -> bool:
        if self._key[a] != self._key[b]:
            return self._key[a] < self._key[b]
        return self._order[a] < self._order[b]

    def _swap(self, i: int, j: int) -> None:
        heap = self._heap
        heap[i], heap[j] = heap[j], heap[i]
        self._position[heap[i]] = i
        self._position[heap[j]] = j

    def _sift_up(self, slot: int) -> None:
        while slot > 0:
            parent = (slot - 1) // 2
            if not self._less(self._heap[slot], self._heap[parent]):
                break
            self._swap(slot, parent)
            slot = parent

    def _sift_down(self, slot: int) -> None:
        size = len(self._heap)
        while True:
            left = 2 * slot + 1
            if left >= size:
                break
            smallest = left
            right = left + 1
            if right < size and self._less(self._heap[right], self._heap[left]):
                smallest = right
            if not self._less(self._heap[smallest], self._heap[slot]):
                break
            self._swap(slot, smallest)
            slot = smallest
