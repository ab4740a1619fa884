import pytest

from vrf_raffle.draw import pick_winner, pick_winner_index
from vrf_raffle.errors import InvariantViolation


@pytest.mark.parametrize(
    "words,size,expected",
    [([5], 1, 0), ([7], 4, 3), ([8, 1], 4, 0), ([2**256 - 1], 10, 5)],
)
def test_index_is_first_word_mod_pool(words, size, expected):
    assert pick_winner_index(words, size) == expected


def test_pick_winner_is_reproducible():
    players = ["a", "b", "a", "c"]
    assert pick_winner(players, [6]) == (2, "a")
    assert pick_winner(players, [6]) == pick_winner(list(players), [6, 99])


def test_empty_words_rejected():
    with pytest.raises(ValueError):
        pick_winner_index([], 3)


def test_empty_pool_is_invariant_violation():
    with pytest.raises(InvariantViolation):
        pick_winner([], [1])
