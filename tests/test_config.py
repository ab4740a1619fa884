import pytest

from vrf_raffle import config as config_module
from vrf_raffle.config import Settings
from vrf_raffle.project_constants import NETWORK_CONFIG, parse_ether, to_ether

ENV_VARS = (
    "NETWORK",
    "VRF_COORDINATOR",
    "RAFFLE_ENTRANCE_FEE",
    "RAFFLE_INTERVAL",
    "VRF_KEY_HASH",
    "VRF_SUBSCRIPTION_ID",
    "VRF_CALLBACK_GAS_LIMIT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # Keep a developer's .env out of the tests.
    monkeypatch.setattr(config_module, "load_dotenv", lambda: False)


def test_defaults_to_hardhat():
    settings = Settings.from_env()
    assert settings.network == "hardhat"
    assert settings.is_development
    assert settings.raffle.entrance_fee == NETWORK_CONFIG["hardhat"]["entrance_fee"]
    assert settings.raffle.interval == 30
    assert settings.vrf_coordinator is None


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("RAFFLE_ENTRANCE_FEE", "0.5")
    monkeypatch.setenv("RAFFLE_INTERVAL", "120")
    monkeypatch.setenv("VRF_SUBSCRIPTION_ID", "42")
    settings = Settings.from_env(network_override="localhost")
    assert settings.network == "localhost"
    assert settings.raffle.entrance_fee == parse_ether("0.5")
    assert settings.raffle.interval == 120
    assert settings.raffle.subscription_id == 42


def test_bad_integer_env(monkeypatch):
    monkeypatch.setenv("RAFFLE_INTERVAL", "soon")
    with pytest.raises(RuntimeError):
        Settings.from_env()


@pytest.mark.parametrize("fee", ["abc", "0.0000000000000000001"])
def test_bad_fee_env(monkeypatch, fee):
    monkeypatch.setenv("RAFFLE_ENTRANCE_FEE", fee)
    with pytest.raises(RuntimeError, match="RAFFLE_ENTRANCE_FEE"):
        Settings.from_env()


def test_unknown_network():
    with pytest.raises(RuntimeError):
        Settings.from_env(network_override="nowhere")


def test_live_network_requires_coordinator(monkeypatch):
    monkeypatch.setenv("NETWORK", "sepolia")
    with pytest.raises(RuntimeError):
        Settings.from_env()
    monkeypatch.setenv("VRF_COORDINATOR", "0xcoordinator")
    settings = Settings.from_env()
    assert not settings.is_development
    assert settings.vrf_coordinator == "0xcoordinator"


def test_ether_helpers():
    assert parse_ether("0.02") == 20_000_000_000_000_000
    assert parse_ether(1) == 10**18
    assert to_ether(parse_ether("1.5")) == 1.5
    with pytest.raises(ValueError):
        parse_ether("0.0000000000000000001")
