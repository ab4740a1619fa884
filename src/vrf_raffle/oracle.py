from __future__ import annotations

from typing import Protocol

# Blocks the coordinator waits before answering a request
REQUEST_CONFIRMATIONS = 3

# Random values asked for per round; only the first one picks the winner
NUM_WORDS = 1


class RandomnessOracle(Protocol):
    """What the raffle needs from a VRF coordinator.

    `request_random_words` returns an opaque request id. The coordinator later
    answers exactly once by calling `consumer.fulfill_random_words(request_id,
    words, sender=coordinator.address)`.
    """

    address: str

    def request_random_words(
        self,
        key_hash: str,
        subscription_id: int,
        request_confirmations: int,
        callback_gas_limit: int,
        num_words: int,
        consumer: str,
    ) -> int:
        ...
