"""
The raffle state machine.

Players pay the entrance fee to join the pool. Once the interval has
passed and the pool holds players and funds, the keeper closes the round
and a random value is requested from the VRF coordinator. The coordinator
answers through `fulfill_random_words`, which picks the winner, reopens
the round and pays out the whole balance.

Every mutating call runs inside `Ledger.transaction()`, so a rejected call
leaves no trace.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, List, Optional, Sequence, Tuple

from .config import RaffleConfig
from .draw import pick_winner
from .errors import (
    IndexOutOfRange,
    InsufficientBalance,
    InvariantViolation,
    NotEnoughFunds,
    NotOpen,
    OnlyCoordinatorCanFulfill,
    TransferFailed,
    UnknownRequest,
    UpkeepNotNeeded,
)
from .ledger import Ledger
from .oracle import NUM_WORDS, REQUEST_CONFIRMATIONS, RandomnessOracle

log = logging.getLogger(__name__)


class RaffleState(IntEnum):
    OPEN = 0
    CALCULATING = 1


@dataclass
class RaffleStorage:
    last_timestamp: int
    state: RaffleState = RaffleState.OPEN
    players: List[str] = field(default_factory=list)
    pending_request_id: Optional[int] = None
    recent_winner: Optional[str] = None
    recent_balance: int = 0


@dataclass(frozen=True)
class UpkeepStatus:
    is_open: bool
    time_passed: bool
    has_players: bool
    has_balance: bool

    @property
    def upkeep_needed(self) -> bool:
        return self.is_open and self.time_passed and self.has_players and self.has_balance

    def as_dict(self) -> Dict[str, bool]:
        return {
            "is_open": self.is_open,
            "time_passed": self.time_passed,
            "has_players": self.has_players,
            "has_balance": self.has_balance,
        }


@dataclass(frozen=True)
class Settlement:
    request_id: int
    random_words: Tuple[int, ...]
    players: Tuple[str, ...]
    winner_index: int
    winner: str
    amount: int
    settled_at: int


class Raffle:
    def __init__(
        self,
        ledger: Ledger,
        vrf_coordinator: RandomnessOracle,
        config: RaffleConfig,
    ) -> None:
        self._ledger = ledger
        self._coordinator = vrf_coordinator
        self._config = config
        self.storage = RaffleStorage(last_timestamp=ledger.now())
        self.address = ledger.register_contract(self)
        log.info(
            "Raffle deployed at %s (fee=%d wei, interval=%ds)",
            self.address,
            config.entrance_fee,
            config.interval,
        )

    # Entry

    def enter(self, sender: str, value: int) -> None:
        with self._ledger.transaction() as ledger:
            if value < self._config.entrance_fee:
                raise NotEnoughFunds(value, self._config.entrance_fee)
            if self.storage.state != RaffleState.OPEN:
                raise NotOpen()
            if not ledger.transfer(sender, self.address, value):
                raise InsufficientBalance(sender, ledger.balance_of(sender), value)
            self.storage.players.append(sender)
            ledger.emit(self.address, "RaffleEntered", player=sender)
        log.info("Player %s entered with %d wei", sender, value)

    # Upkeep

    def check_upkeep(self) -> Tuple[bool, UpkeepStatus]:
        """Read-only. Safe to poll as often as the keeper likes."""
        s = self.storage
        status = UpkeepStatus(
            is_open=s.state == RaffleState.OPEN,
            time_passed=self._ledger.now() - s.last_timestamp >= self._config.interval,
            has_players=len(s.players) > 0,
            has_balance=self.get_balance() > 0,
        )
        return status.upkeep_needed, status

    def perform_upkeep(self) -> int:
        with self._ledger.transaction() as ledger:
            upkeep_needed, status = self.check_upkeep()
            if not upkeep_needed:
                raise UpkeepNotNeeded(
                    self.get_balance(),
                    len(self.storage.players),
                    int(self.storage.state),
                    status.as_dict(),
                )
            self.storage.state = RaffleState.CALCULATING
            request_id = self._coordinator.request_random_words(
                self._config.key_hash,
                self._config.subscription_id,
                REQUEST_CONFIRMATIONS,
                self._config.callback_gas_limit,
                NUM_WORDS,
                self.address,
            )
            self.storage.pending_request_id = request_id
            ledger.emit(self.address, "RequestedRaffleWinner", request_id=request_id)
        log.info(
            "Round closed with %d players, requested randomness (request %s)",
            len(self.storage.players),
            request_id,
        )
        return request_id

    # Fulfillment

    def fulfill_random_words(
        self, request_id: int, random_words: Sequence[int], sender: str
    ) -> Settlement:
        with self._ledger.transaction() as ledger:
            if sender != self._coordinator.address:
                raise OnlyCoordinatorCanFulfill(sender, self._coordinator.address)
            s = self.storage
            if s.pending_request_id is None or request_id != s.pending_request_id:
                raise UnknownRequest(request_id, s.pending_request_id)
            if s.state != RaffleState.CALCULATING:
                raise InvariantViolation(f"Request {request_id} pending while {s.state.name}")

            players = list(s.players)
            winner_index, winner = pick_winner(players, random_words)

            s.players = []
            s.pending_request_id = None
            s.state = RaffleState.OPEN
            s.last_timestamp = ledger.now()

            amount = self.get_balance()
            s.recent_winner = winner
            s.recent_balance = amount

            if not ledger.transfer(self.address, winner, amount):
                log.error(
                    "Payout of %d wei to %s failed; round %s stays CALCULATING",
                    amount,
                    winner,
                    request_id,
                )
                raise TransferFailed(winner, amount)
            ledger.emit(self.address, "WinnerPicked", winner=winner)

        log.info("Winner %s picked (index %d of %d), paid %d wei", winner, winner_index, len(players), amount)
        return Settlement(
            request_id=request_id,
            random_words=tuple(int(w) for w in random_words),
            players=tuple(players),
            winner_index=winner_index,
            winner=winner,
            amount=amount,
            settled_at=ledger.now(),
        )

    # Accessors

    def get_entrance_fee(self) -> int:
        return self._config.entrance_fee

    def get_interval(self) -> int:
        return self._config.interval

    def get_raffle_state(self) -> RaffleState:
        return self.storage.state

    def get_num_players(self) -> int:
        return len(self.storage.players)

    def get_player(self, index: int) -> str:
        players = self.storage.players
        if index < 0 or index >= len(players):
            raise IndexOutOfRange(index, len(players))
        return players[index]

    def get_latest_timestamp(self) -> int:
        return self.storage.last_timestamp

    def get_recent_winner(self) -> Optional[str]:
        return self.storage.recent_winner

    def get_recent_balance(self) -> int:
        return self.storage.recent_balance

    def get_pending_request_id(self) -> Optional[int]:
        return self.storage.pending_request_id

    def get_balance(self) -> int:
        return self._ledger.balance_of(self.address)

    def get_vrf_coordinator(self) -> str:
        return self._coordinator.address

    def get_key_hash(self) -> str:
        return self._config.key_hash

    def get_subscription_id(self) -> int:
        return self._config.subscription_id

    def get_callback_gas_limit(self) -> int:
        return self._config.callback_gas_limit

    def get_request_confirmations(self) -> int:
        return REQUEST_CONFIRMATIONS

    def get_num_words(self) -> int:
        return NUM_WORDS

    def get_config(self) -> RaffleConfig:
        return self._config
