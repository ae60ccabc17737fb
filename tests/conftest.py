from types import SimpleNamespace

import pytest

from fantasy_deployment.networks import ExplorerUrls, NetworkProfile
from fantasy_deployment.verification import Transient

MANTLE_GAS_LIMIT = 10_000_000
DEPLOYED_ADDRESS = "0xabc" + "0" * 34 + "123"


class FakeContainer:
    def __init__(self, name="FantasyFootballToken"):
        self.contract_type = SimpleNamespace(name=name)


class FakeAccount:
    address = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"

    def __init__(self, deployed_address=DEPLOYED_ADDRESS):
        self.deployed_address = deployed_address
        self.calls = []

    def deploy(self, container, *args, **kwargs):
        self.calls.append((container, args, kwargs))
        return SimpleNamespace(address=self.deployed_address)


class ScriptedVerifier:
    """Returns queued outcomes in order, repeating the last one."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    def verify(self, address, constructor_arguments):
        self.calls.append((address, list(constructor_arguments)))
        if len(self.outcomes) > 1:
            return self.outcomes.pop(0)
        return self.outcomes[0]


def fake_get(payload, calls):
    """Stands in for `requests.get` against an explorer API."""

    def get(url, params=None):
        calls.append((url, params))
        return SimpleNamespace(raise_for_status=lambda: None, json=lambda: payload)

    return get


class FakeSleep:
    def __init__(self):
        self.delays = []

    def __call__(self, seconds):
        self.delays.append(seconds)


@pytest.fixture
def sepolia_profile():
    return NetworkProfile(
        name="sepolia",
        rpc_url="https://eth-sepolia.g.alchemy.com/v2/key",
        credential="0x" + "11" * 32,
        chain_id=11155111,
        explorer_api_key="etherscan-key",
        explorer_urls=ExplorerUrls(
            api_url="https://api-sepolia.etherscan.io/api",
            browser_url="https://sepolia.etherscan.io",
        ),
        network_choice="ethereum:sepolia:node",
    )


@pytest.fixture
def mantle_profile():
    return NetworkProfile(
        name="mantleTestnet",
        rpc_url="https://rpc.testnet.mantle.xyz",
        credential="0x" + "11" * 32,
        chain_id=5001,
        gas_limit=MANTLE_GAS_LIMIT,
    )


@pytest.fixture
def fake_account():
    return FakeAccount()


@pytest.fixture
def container():
    return FakeContainer()


@pytest.fixture
def fake_sleep():
    return FakeSleep()


@pytest.fixture
def transient():
    return Transient(RuntimeError("Fail - Unable to verify"))


@pytest.fixture
def params_filepath(tmp_path):
    filepath = tmp_path / "network-params.csv"
    filepath.write_text(
        "sepolia,1000,MyToken\n"
        "mantleTestnet, 2000 , MantleToken \n"
        "chiado,3000,,ChiadoToken\n"
    )
    return filepath


@pytest.fixture
def deployments_filepath(tmp_path):
    return tmp_path / "deployments.md"
