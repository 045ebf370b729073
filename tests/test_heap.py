from durparse.heap import MaxHeap, top_k


def test_max_heap_pops_largest_first():
    heap = MaxHeap(lambda a, b: a - b)
    for value in [5, 1, 8, 3, 8, 2]:
        heap.push(value)
    assert len(heap) == 6
    assert heap.peek() == 8
    assert [heap.pop() for _ in range(6)] == [8, 8, 5, 3, 2, 1]
    assert heap.pop() is None
    assert heap.peek() is None
    assert heap.is_empty()


def test_max_heap_uses_comparator():
    heap = MaxHeap(lambda a, b: len(b) - len(a))
    for word in ["weeks", "h", "min"]:
        heap.push(word)
    assert heap.pop() == "h"


def test_top_k_returns_smallest_in_order():
    assert top_k([5, 1, 4, 1, 3], 3, key=lambda x: x) == [1, 1, 3]
    assert top_k([5, 1, 4], 10, key=lambda x: x) == [1, 4, 5]
    assert top_k([5, 1, 4], 0, key=lambda x: x) == []
    assert top_k([], 2, key=lambda x: x) == []


def test_top_k_is_stable_for_ties():
    words = ["bb", "aa", "c", "dd", "ee"]
    assert top_k(words, 3, key=len) == ["c", "bb", "aa"]
    assert top_k(words, 4, key=len) == sorted(words, key=len)[:4]
