"""
Network-level parameters for the VRF raffle.

These values define the public rules of a deployment.
Changing them changes who can enter and when a round can close,
so they MUST be publicly announced.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict

# Native currency uses 18 decimals (wei)
NATIVE_DECIMALS = 18

# Networks where the coordinator is the local mock
DEVELOPMENT_CHAINS = ("hardhat", "localhost")

# Amount the local mock subscription is funded with on deploy
VRF_SUB_FUND_AMOUNT = 30 * (10**NATIVE_DECIMALS)


def parse_ether(amount: str | int | Decimal) -> int:
    wei = Decimal(str(amount)) * (10**NATIVE_DECIMALS)
    if wei != wei.to_integral_value():
        raise ValueError(f"Amount {amount} has more than {NATIVE_DECIMALS} decimals")
    return int(wei)


def to_ether(raw_amount: int) -> float:
    return round(raw_amount / (10**NATIVE_DECIMALS), 6)


# Per-network raffle parameters. Live networks take the coordinator address
# and subscription id from the environment.
NETWORK_CONFIG: Dict[str, Dict[str, Any]] = {
    "hardhat": {
        "entrance_fee": parse_ether("0.02"),
        "key_hash": "0xd89b2bf150e3b9e13446986e571fb9cab24b13cea0a43ea20a6049a85cc807cc",
        "callback_gas_limit": 500_000,
        "interval": 30,
        "subscription_id": 0,
    },
    "localhost": {
        "entrance_fee": parse_ether("0.02"),
        "key_hash": "0xd89b2bf150e3b9e13446986e571fb9cab24b13cea0a43ea20a6049a85cc807cc",
        "callback_gas_limit": 500_000,
        "interval": 30,
        "subscription_id": 0,
    },
    "sepolia": {
        "entrance_fee": parse_ether("0.01"),
        "key_hash": "0x787d74caea10b2b357790d5b5247c2f63d1d91572a9846f780606e4d953677ae",
        "callback_gas_limit": 500_000,
        "interval": 30,
        "subscription_id": 0,
    },
}
