"""
In-process execution environment.

Supplies what the raffle needs from a chain. Transfers report failure
instead of raising, and `transaction()` undoes every effect of a call
that raises.
"""

from __future__ import annotations

import copy
import logging
import secrets
import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Set

import base58

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Event:
    index: int
    address: str
    name: str
    args: Dict[str, Any] = field(default_factory=dict)
    timestamp: int = 0


def generate_address() -> str:
    return base58.b58encode(secrets.token_bytes(32)).decode("ascii")


def is_address(value: str) -> bool:
    try:
        return len(base58.b58decode(value)) == 32
    except ValueError:
        return False


class Ledger:
    def __init__(self, start_time: Optional[int] = None) -> None:
        self._time = int(time.time()) if start_time is None else int(start_time)
        self._balances: Dict[str, int] = {}
        self._rejecting: Set[str] = set()
        self._contracts: Dict[str, Any] = {}
        self._events: List[Event] = []
        # Held for the whole of a transaction; calls are totally ordered.
        self._lock = threading.RLock()

    # Accounts

    def new_account(self, balance: int = 0, accepts_funds: bool = True) -> str:
        address = generate_address()
        with self._lock:
            self._balances[address] = int(balance)
            if not accepts_funds:
                self._rejecting.add(address)
        return address

    def set_balance(self, address: str, balance: int) -> None:
        if balance < 0:
            raise ValueError(f"Balance cannot be negative: {balance}")
        with self._lock:
            self._balances[address] = int(balance)

    def balance_of(self, address: str) -> int:
        with self._lock:
            return self._balances.get(address, 0)

    def set_accepts_funds(self, address: str, accepts: bool) -> None:
        with self._lock:
            if accepts:
                self._rejecting.discard(address)
            else:
                self._rejecting.add(address)

    # Contracts

    def register_contract(self, contract: Any) -> str:
        if not hasattr(contract, "storage"):
            raise TypeError(f"{type(contract).__name__} has no storage to snapshot")
        address = generate_address()
        with self._lock:
            self._contracts[address] = contract
            self._balances.setdefault(address, 0)
        log.debug("Registered %s at %s", type(contract).__name__, address)
        return address

    def contract_at(self, address: str) -> Any:
        try:
            return self._contracts[address]
        except KeyError:
            raise LookupError(f"No contract at {address}")

    # Clock

    def now(self) -> int:
        with self._lock:
            return self._time

    def increase_time(self, seconds: int) -> int:
        if seconds < 0:
            raise ValueError(f"Time cannot move backwards ({seconds}s)")
        with self._lock:
            self._time += int(seconds)
            return self._time

    # Value

    def transfer(self, src: str, dst: str, amount: int) -> bool:
        """Moves `amount` from src to dst. Returns False and changes nothing on failure."""
        if amount < 0:
            raise ValueError(f"Transfer amount cannot be negative: {amount}")
        with self._lock:
            if self.balance_of(src) < amount:
                return False
            if dst in self._rejecting:
                return False
            self._balances[src] = self.balance_of(src) - amount
            self._balances[dst] = self.balance_of(dst) + amount
            return True

    # Events

    def emit(self, address: str, name: str, **args: Any) -> Event:
        with self._lock:
            event = Event(len(self._events), address, name, dict(args), self._time)
            self._events.append(event)
            return event

    def events(self, address: Optional[str] = None, name: Optional[str] = None) -> List[Event]:
        with self._lock:
            return [
                e
                for e in self._events
                if (address is None or e.address == address) and (name is None or e.name == name)
            ]

    # Atomicity

    @contextmanager
    def transaction(self) -> Iterator["Ledger"]:
        with self._lock:
            balances = dict(self._balances)
            rejecting = set(self._rejecting)
            n_events = len(self._events)
            storages = {addr: copy.deepcopy(c.storage) for addr, c in self._contracts.items()}
            try:
                yield self
            except BaseException:
                self._balances = balances
                self._rejecting = rejecting
                del self._events[n_events:]
                for addr, snapshot in storages.items():
                    self._contracts[addr].storage = snapshot
                raise
