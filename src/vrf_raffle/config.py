from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import InvalidOperation
from dotenv import load_dotenv

from .project_constants import DEVELOPMENT_CHAINS, NETWORK_CONFIG, parse_ether


@dataclass(frozen=True)
class RaffleConfig:
    entrance_fee: int
    interval: int
    key_hash: str
    subscription_id: int
    callback_gas_limit: int

    def __post_init__(self) -> None:
        if self.entrance_fee <= 0:
            raise ValueError(f"entrance_fee must be positive, got {self.entrance_fee}")
        if self.interval <= 0:
            raise ValueError(f"interval must be positive, got {self.interval}")
        if self.callback_gas_limit <= 0:
            raise ValueError(
                f"callback_gas_limit must be positive, got {self.callback_gas_limit}"
            )


@dataclass(frozen=True)
class Settings:
    network: str
    raffle: RaffleConfig
    vrf_coordinator: str | None = None

    @property
    def is_development(self) -> bool:
        return self.network in DEVELOPMENT_CHAINS

    @staticmethod
    def from_env(network_override: str | None = None) -> "Settings":
        load_dotenv()

        network = network_override or os.getenv("NETWORK", "").strip() or "hardhat"
        if network not in NETWORK_CONFIG:
            raise RuntimeError(
                f"Unknown network {network!r}. Known: {', '.join(sorted(NETWORK_CONFIG))}"
            )
        base = NETWORK_CONFIG[network]

        raffle = RaffleConfig(
            entrance_fee=_env_ether("RAFFLE_ENTRANCE_FEE", base["entrance_fee"]),
            interval=_env_int("RAFFLE_INTERVAL", base["interval"]),
            key_hash=os.getenv("VRF_KEY_HASH", "").strip() or base["key_hash"],
            subscription_id=_env_int("VRF_SUBSCRIPTION_ID", base["subscription_id"]),
            callback_gas_limit=_env_int("VRF_CALLBACK_GAS_LIMIT", base["callback_gas_limit"]),
        )

        if network in DEVELOPMENT_CHAINS:
            return Settings(network=network, raffle=raffle)

        coordinator = os.getenv("VRF_COORDINATOR", "").strip()
        if not coordinator:
            raise RuntimeError(
                f"Network {network!r} needs VRF_COORDINATOR. Put it in .env or export it."
            )
        return Settings(network=network, raffle=raffle, vrf_coordinator=coordinator)


def _env_ether(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return int(default)
    try:
        return parse_ether(raw)
    except (InvalidOperation, ValueError):
        raise RuntimeError(f"{name} must be an ether amount, got {raw!r}")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return int(default)
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}")
