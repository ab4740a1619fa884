from __future__ import annotations

from typing import List, Sequence, Tuple

from .errors import InvariantViolation


def pick_winner_index(random_words: Sequence[int], pool_size: int) -> int:
    if not random_words:
        raise ValueError("At least one random word is required.")
    if pool_size <= 0:
        raise InvariantViolation("Cannot pick a winner from an empty pool.")
    return int(random_words[0]) % pool_size


def pick_winner(players: List[str], random_words: Sequence[int]) -> Tuple[int, str]:
    idx = pick_winner_index(random_words, len(players))
    return idx, players[idx]
