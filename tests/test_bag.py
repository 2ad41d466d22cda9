import random

from blocks_bag import SevenBag
from blocks_piece import KINDS


def test_every_window_of_seven_is_a_permutation():
    bag = SevenBag(random.Random(7))
    draws = [bag.next_piece() for _ in range(7 * 30)]
    for i in range(0, len(draws), 7):
        assert sorted(draws[i:i + 7]) == sorted(KINDS)


def test_peek_does_not_consume():
    bag = SevenBag(random.Random(3))
    ahead = bag.peek(5)
    assert bag.peek(5) == ahead
    assert [bag.next_piece() for _ in range(5)] == ahead


def test_peek_past_the_queue():
    bag = SevenBag(random.Random(3))
    ahead = bag.peek(20)
    assert len(ahead) == 20
    assert [bag.next_piece() for _ in range(20)] == ahead


def test_queue_keeps_a_full_bag_ahead():
    bag = SevenBag(random.Random(5))
    for _ in range(50):
        bag.next_piece()
        assert len(bag.queue) >= 7


def test_seeded_bags_agree():
    a = SevenBag(random.Random(42))
    b = SevenBag(random.Random(42))
    assert [a.next_piece() for _ in range(21)] == [b.next_piece() for _ in range(21)]
