"""7-bag randomizer module"""
import random
from collections import deque
from typing import List, Optional

from blocks_piece import KINDS


class SevenBag:
    """
    Every aligned group of 7 draws is a shuffled permutation of all kinds,
    so no kind goes missing for more than 12 pieces in a row.

    The queue is topped up with a whole new bag whenever fewer than 7 kinds
    are waiting, which keeps a full bag visible to `peek`.
    """
    PIECES = KINDS

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random()
        self.queue = deque()
        self._refill()

    def _refill(self):
        bag = list(self.PIECES)
        self.rng.shuffle(bag)
        self.queue.extend(bag)

    def next_piece(self) -> str:
        t = self.queue.popleft()
        if len(self.queue) < len(self.PIECES):
            self._refill()
        return t

    def peek(self, n: int = 1) -> List[str]:
        while len(self.queue) < n:
            self._refill()
        return list(self.queue)[:n]
