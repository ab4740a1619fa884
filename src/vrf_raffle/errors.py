from __future__ import annotations

from typing import Any, Dict


class RaffleError(RuntimeError):
    """Rejection of a raffle operation. The operation left no state behind."""


class NotEnoughFunds(RaffleError):
    def __init__(self, value: int, entrance_fee: int) -> None:
        super().__init__(f"Sent {value} wei, entrance fee is {entrance_fee} wei")
        self.value = value
        self.entrance_fee = entrance_fee


class NotOpen(RaffleError):
    def __init__(self) -> None:
        super().__init__("Raffle is not open")


class UpkeepNotNeeded(RaffleError):
    def __init__(self, balance: int, num_players: int, state: int, flags: Dict[str, bool]) -> None:
        super().__init__(
            f"Upkeep not needed (balance={balance}, players={num_players}, "
            f"state={state}, flags={flags})"
        )
        self.balance = balance
        self.num_players = num_players
        self.state = state
        self.flags = flags


class UnknownRequest(RaffleError):
    def __init__(self, request_id: Any, pending: Any) -> None:
        super().__init__(f"Request {request_id} is not pending (pending={pending})")
        self.request_id = request_id
        self.pending = pending


class OnlyCoordinatorCanFulfill(RaffleError):
    def __init__(self, sender: str, coordinator: str) -> None:
        super().__init__(f"Only coordinator {coordinator} can fulfill, got {sender}")
        self.sender = sender
        self.coordinator = coordinator


class TransferFailed(RaffleError):
    def __init__(self, recipient: str, amount: int) -> None:
        super().__init__(f"Transfer of {amount} wei to {recipient} failed")
        self.recipient = recipient
        self.amount = amount


class IndexOutOfRange(RaffleError, IndexError):
    def __init__(self, index: int, size: int) -> None:
        super().__init__(f"Index {index} out of range for {size} players")
        self.index = index
        self.size = size


class InvariantViolation(RaffleError):
    """State that earlier checks should have made impossible."""


class LedgerError(RuntimeError):
    pass


class InsufficientBalance(LedgerError):
    def __init__(self, account: str, balance: int, amount: int) -> None:
        super().__init__(f"Account {account} holds {balance} wei, needs {amount} wei")
        self.account = account
        self.balance = balance
        self.amount = amount


class NonexistentRequest(LedgerError):
    def __init__(self, request_id: int) -> None:
        super().__init__(f"nonexistent request {request_id}")
        self.request_id = request_id


class InvalidSubscription(LedgerError):
    def __init__(self, subscription_id: int) -> None:
        super().__init__(f"Invalid subscription {subscription_id}")
        self.subscription_id = subscription_id
