# flapsim/tests/helpers.py
from typing import List, Tuple


class FixedRandom:
    """randrange stub: always answers `value`, and remembers what it was asked."""
    def __init__(self, value: int):
        self.value = value
        self.calls: List[Tuple[int, int]] = []

    def randrange(self, start: int, stop: int) -> int:
        self.calls.append((start, stop))
        assert start <= self.value < stop, f"{self.value} outside [{start}, {stop})"
        return self.value
