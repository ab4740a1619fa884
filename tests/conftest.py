import pytest

from vrf_raffle.config import RaffleConfig, Settings
from vrf_raffle.ledger import Ledger
from vrf_raffle.mocks import deploy_development_raffle
from vrf_raffle.project_constants import parse_ether

START_TIME = 1_700_000_000
ENTRANCE_FEE = parse_ether("0.02")
INTERVAL = 30


@pytest.fixture
def settings():
    return Settings(
        network="hardhat",
        raffle=RaffleConfig(
            entrance_fee=ENTRANCE_FEE,
            interval=INTERVAL,
            key_hash="0x" + "ab" * 32,
            subscription_id=0,
            callback_gas_limit=500_000,
        ),
    )


@pytest.fixture
def ledger():
    return Ledger(start_time=START_TIME)


@pytest.fixture
def deployed(ledger, settings):
    return deploy_development_raffle(ledger, settings)


@pytest.fixture
def raffle(deployed):
    return deployed[0]


@pytest.fixture
def coordinator(deployed):
    return deployed[1]


@pytest.fixture
def accounts(ledger):
    return [ledger.new_account(balance=parse_ether("10")) for _ in range(5)]


@pytest.fixture
def player(accounts):
    return accounts[0]


@pytest.fixture
def ready_raffle(raffle, ledger, player):
    """One entrant and the interval elapsed: upkeep is needed."""
    raffle.enter(player, value=raffle.get_entrance_fee())
    ledger.increase_time(raffle.get_interval() + 1)
    return raffle
