"""
Local stand-in for the VRF coordinator, plus the development deploy flow.

The mock answers nothing on its own: the test driver (or operator) calls
`fulfill_random_words` with the request id, optionally choosing the words.
"""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .config import RaffleConfig, Settings
from .errors import InvalidSubscription, NonexistentRequest
from .ledger import Ledger
from .project_constants import VRF_SUB_FUND_AMOUNT
from .raffle import Raffle

log = logging.getLogger(__name__)


@dataclass
class PendingWords:
    subscription_id: int
    consumer: str
    num_words: int
    callback_gas_limit: int


@dataclass
class CoordinatorStorage:
    next_request_id: int = 1
    next_subscription_id: int = 1
    subscriptions: Dict[int, int] = field(default_factory=dict)
    requests: Dict[int, PendingWords] = field(default_factory=dict)


def derive_random_words(request_id: int, num_words: int) -> List[int]:
    out: List[int] = []
    for i in range(num_words):
        preimage = request_id.to_bytes(32, "big") + i.to_bytes(32, "big")
        out.append(int.from_bytes(hashlib.sha256(preimage).digest(), "big"))
    return out


class MockVRFCoordinator:
    def __init__(self, ledger: Ledger) -> None:
        self._ledger = ledger
        self.storage = CoordinatorStorage()
        self.address = ledger.register_contract(self)

    def create_subscription(self) -> int:
        with self._ledger.transaction() as ledger:
            sub_id = self.storage.next_subscription_id
            self.storage.next_subscription_id += 1
            self.storage.subscriptions[sub_id] = 0
            ledger.emit(self.address, "SubscriptionCreated", sub_id=sub_id)
        return sub_id

    def fund_subscription(self, subscription_id: int, amount: int) -> None:
        with self._ledger.transaction() as ledger:
            if subscription_id not in self.storage.subscriptions:
                raise InvalidSubscription(subscription_id)
            old = self.storage.subscriptions[subscription_id]
            self.storage.subscriptions[subscription_id] = old + amount
            ledger.emit(
                self.address,
                "SubscriptionFunded",
                sub_id=subscription_id,
                old_balance=old,
                new_balance=old + amount,
            )

    def get_subscription_balance(self, subscription_id: int) -> int:
        if subscription_id not in self.storage.subscriptions:
            raise InvalidSubscription(subscription_id)
        return self.storage.subscriptions[subscription_id]

    def request_random_words(
        self,
        key_hash: str,
        subscription_id: int,
        request_confirmations: int,
        callback_gas_limit: int,
        num_words: int,
        consumer: str,
    ) -> int:
        with self._ledger.transaction() as ledger:
            if subscription_id not in self.storage.subscriptions:
                raise InvalidSubscription(subscription_id)
            request_id = self.storage.next_request_id
            self.storage.next_request_id += 1
            self.storage.requests[request_id] = PendingWords(
                subscription_id, consumer, num_words, callback_gas_limit
            )
            ledger.emit(
                self.address,
                "RandomWordsRequested",
                key_hash=key_hash,
                request_id=request_id,
                sub_id=subscription_id,
                minimum_request_confirmations=request_confirmations,
                callback_gas_limit=callback_gas_limit,
                num_words=num_words,
                sender=consumer,
            )
        log.debug("Request %d registered for %s", request_id, consumer)
        return request_id

    def fulfill_random_words(
        self,
        request_id: int,
        consumer: str,
        words: Optional[Sequence[int]] = None,
    ) -> Any:
        with self._ledger.transaction() as ledger:
            pending = self.storage.requests.get(request_id)
            if pending is None:
                raise NonexistentRequest(request_id)
            if words is None:
                words = derive_random_words(request_id, pending.num_words)
            result = ledger.contract_at(consumer).fulfill_random_words(
                request_id, list(words), sender=self.address
            )
            # Forgotten only once the consumer accepted the answer.
            del self.storage.requests[request_id]
            ledger.emit(self.address, "RandomWordsFulfilled", request_id=request_id, success=True)
        return result

    def last_request_id(self) -> int:
        return self.storage.next_request_id - 1


def deploy_development_raffle(
    ledger: Ledger,
    settings: Settings,
    fund_amount: int = VRF_SUB_FUND_AMOUNT,
) -> Tuple[Raffle, MockVRFCoordinator]:
    if not settings.is_development:
        raise RuntimeError(f"Network {settings.network!r} is not a development chain.")

    coordinator = MockVRFCoordinator(ledger)
    subscription_id = coordinator.create_subscription()
    coordinator.fund_subscription(subscription_id, fund_amount)

    base = settings.raffle
    config = RaffleConfig(
        entrance_fee=base.entrance_fee,
        interval=base.interval,
        key_hash=base.key_hash,
        subscription_id=subscription_id,
        callback_gas_limit=base.callback_gas_limit,
    )
    raffle = Raffle(ledger, coordinator, config)
    log.info("Development raffle %s uses mock coordinator %s", raffle.address, coordinator.address)
    return raffle, coordinator
