"""Binary max-heap and a bounded top-K selector built on it."""

from typing import Callable, Generic, Iterable, List, Optional, Tuple, TypeVar

T = TypeVar("T")

Comparator = Callable[[T, T], int]


class MaxHeap(Generic[T]):
    """Array-backed binary heap keeping the largest item at the root.

    Ordering comes from ``comparator(a, b)``, which returns a positive
    number when ``a`` ranks above ``b``, zero when they tie and a negative
    number otherwise.
    """

    def __init__(self, comparator: Comparator) -> None:
        self._comparator = comparator
        self._heap: List[T] = []

    def __len__(self) -> int:
        return len(self._heap)

    def is_empty(self) -> bool:
        return not self._heap

    def peek(self) -> Optional[T]:
        return self._heap[0] if self._heap else None

    def push(self, item: T) -> None:
        self._heap.append(item)
        self._bubble_up(len(self._heap) - 1)

    def pop(self) -> Optional[T]:
        if not self._heap:
            return None
        top = self._heap[0]
        last = self._heap.pop()
        if self._heap:
            self._heap[0] = last
            self._sink_down(0)
        return top

    def _bubble_up(self, index: int) -> None:
        heap = self._heap
        while index > 0:
            parent = (index - 1) // 2
            if self._comparator(heap[index], heap[parent]) <= 0:
                break
            heap[index], heap[parent] = heap[parent], heap[index]
            index = parent

    def _sink_down(self, index: int) -> None:
        heap = self._heap
        length = len(heap)
        while True:
            largest = index
            left, right = 2 * index + 1, 2 * index + 2
            if left < length and self._comparator(heap[left], heap[largest]) > 0:
                largest = left
            if right < length and self._comparator(heap[right], heap[largest]) > 0:
                largest = right
            if largest == index:
                return
            heap[index], heap[largest] = heap[largest], heap[index]
            index = largest


def _compare(a: Tuple, b: Tuple) -> int:
    return (a > b) - (a < b)


def top_k(items: Iterable[T], k: int, key: Callable[[T], float]) -> List[T]:
    """Return the ``k`` items with the smallest ``key`` in ascending order.

    Equal keys keep their input order. Only ``k`` entries are held at a
    time: the heap root is the worst of the current best, and it is
    evicted whenever a better candidate arrives.
    """
    if k <= 0:
        return []
    heap: MaxHeap[Tuple[float, int, T]] = MaxHeap(
        lambda a, b: _compare(a[:2], b[:2])
    )
    for index, item in enumerate(items):
        entry = (key(item), index, item)
        if len(heap) < k:
            heap.push(entry)
            continue
        worst = heap.peek()
        if entry[:2] < worst[:2]:
            heap.pop()
            heap.push(entry)

    ranked = []
    while not heap.is_empty():
        ranked.append(heap.pop()[2])
    ranked.reverse()
    return ranked
