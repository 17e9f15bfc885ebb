"""
Tests for the indexed min-heap used as the A* open set.
"""
import pytest

from utils.indexed_heap import IndexedMinHeap


class TestIndexedMinHeap:

    @pytest.fixture
    def heap(self):
        return IndexedMinHeap(capacity=10)

    def test_pops_in_key_order(self, heap):
        for item, key in [(3, 7), (1, 2), (8, 5), (0, 9)]:
            heap.push(item, key)

        assert len(heap) == 4
        assert [heap.pop() for _ in range(4)] == [(1, 2), (8, 5), (3, 7), (0, 9)]
        assert not heap

    def test_equal_keys_pop_in_insertion_order(self, heap):
        for item in (5, 2, 9, 0):
            heap.push(item, 4)
        assert [heap.pop()[0] for _ in range(4)] == [5, 2, 9, 0]

    def test_decrease_key_moves_item_forward(self, heap):
        heap.push(1, 10)
        heap.push(2, 20)
        heap.push(3, 30)

        heap.decrease_key(3, 5)

        assert heap.key_of(3) == 5
        assert heap.pop() == (3, 5)
        assert heap.pop() == (1, 10)

    def test_membership_tracks_push_and_pop(self, heap):
        heap.push(4, 1)
        assert 4 in heap
        assert 5 not in heap
        assert 42 not in heap

        heap.pop()
        assert 4 not in heap

    def test_item_can_be_pushed_again_after_pop(self, heap):
        heap.push(4, 1)
        heap.pop()
        heap.push(4, 3)
        assert heap.pop() == (4, 3)

    def test_errors(self, heap):
        with pytest.raises(IndexError):
            heap.pop()
        with pytest.raises(IndexError):
            heap.push(10, 1)
        heap.push(1, 5)
        with pytest.raises(ValueError):
            heap.push(1, 3)
        with pytest.raises(ValueError):
            heap.decrease_key(1, 6)
        with pytest.raises(KeyError):
            heap.decrease_key(2, 1)
        with pytest.raises(KeyError):
            heap.key_of(2)

    def test_many_items_sorted(self):
        heap = IndexedMinHeap(capacity=100)
        keys = [(i * 37) % 101 for i in range(100)]
        for item, key in enumerate(keys):
            heap.push(item, key)
        popped = [heap.pop()[1] for _ in range(100)]
        assert popped == sorted(keys)
