from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from scubr_deploy.config import DeploymentParams
from scubr_deploy.constants import ENGAGEMENT_TOKEN, VIDEO_TOKEN
from scubr_deploy.deployer import Deployer

# EIP-55 checksum test vectors
DEPLOYER_ADDRESS = "0x52908400098527886E0F7030069857D2E4169EE7"
ADDRESSES = [
    "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed",
    "0xfB6916095ca1df60bB79Ce92cE3Ea74c37c5d359",
    "0xdbF03B407c01E7cD3CBea99509d93f8DDDC8C6FB",
    "0xD1220A0cf47c7B9Be7A2E6BA89F429762e7b9aDb",
]
SEPOLIA_CHAIN_ID = 11155111


def make_instance(contract_name, address):
    return SimpleNamespace(address=address, contract_type=SimpleNamespace(name=contract_name))


class FakeContainer:
    def __init__(self, contract_name, inputs=()):
        self.contract_type = SimpleNamespace(name=contract_name)
        abi_inputs = [SimpleNamespace(name=name, type=type_) for name, type_ in inputs]
        self.constructor = SimpleNamespace(abi=SimpleNamespace(inputs=abi_inputs))
        self.deployments = []


class FakeDeployer:
    """Deployment handle that hands out preset addresses and records every call."""

    def __init__(self, addresses, fail_on=()):
        self._addresses = {name: list(values) for name, values in addresses.items()}
        self._fail_on = set(fail_on)
        self._instances = {}
        self.calls = []

    def deploy(self, contract_name, *args):
        self.calls.append(("deploy", contract_name, list(args)))
        if contract_name in self._fail_on:
            raise Deployer.Failed(f"Deployment of {contract_name} failed: execution reverted")
        instance = make_instance(contract_name, self._addresses[contract_name].pop(0))
        self._instances[contract_name] = instance
        return instance

    def deployed(self, contract_name):
        self.calls.append(("deployed", contract_name, []))
        try:
            return self._instances[contract_name]
        except KeyError:
            raise Deployer.Failed(f"{contract_name} has not been deployed.")

    def deployed_names(self):
        return [name for action, name, _ in self.calls if action == "deploy"]


@pytest.fixture
def registry_filepath(tmp_path):
    return tmp_path / "artifacts" / "local.json"


@pytest.fixture
def token_params(registry_filepath):
    return DeploymentParams(
        name="scubr-local",
        chain_id=1337,
        registry_filepath=registry_filepath,
        contracts=[ENGAGEMENT_TOKEN, VIDEO_TOKEN],
    )


@pytest.fixture
def containers(monkeypatch):
    containers = {
        ENGAGEMENT_TOKEN: FakeContainer(ENGAGEMENT_TOKEN),
        VIDEO_TOKEN: FakeContainer(VIDEO_TOKEN, inputs=[("_engagementToken", "address")]),
    }

    def get_contract_container(contract_name):
        try:
            return containers[contract_name]
        except KeyError:
            raise ValueError(f"No compiled contract named '{contract_name}'")

    monkeypatch.setattr("scubr_deploy.deployer.get_contract_container", get_contract_container)
    return containers


@pytest.fixture
def account():
    addresses = iter(ADDRESSES)

    def deploy(container, *args, **kwargs):
        instance = make_instance(container.contract_type.name, next(addresses))
        container.deployments.append(instance)
        return instance

    account = MagicMock()
    account.address = DEPLOYER_ADDRESS
    account.deploy.side_effect = deploy
    return account


@pytest.fixture
def offline(monkeypatch):
    """Keeps Deployer from touching the connected provider."""
    monkeypatch.setattr("scubr_deploy.deployer.check_plugins", lambda: None)
    monkeypatch.setattr("scubr_deploy.deployer.check_target_network", lambda params: None)
    monkeypatch.setattr(Deployer, "_print_deployment_info", lambda self: None)


@pytest.fixture
def make_deployer(containers, account, offline, token_params):
    def _make_deployer(params=None, verify=False, autosign=True):
        return Deployer(
            params=params or token_params,
            verify=verify,
            account=account,
            autosign=autosign,
        )

    return _make_deployer


@pytest.fixture
def answers(monkeypatch):
    """Scripted answers for interactive prompts."""
    answers = []
    monkeypatch.setattr("builtins.input", lambda prompt="": answers.pop(0))
    return answers


@pytest.fixture
def live_network(monkeypatch):
    network = SimpleNamespace(chain_id=SEPOLIA_CHAIN_ID, name="sepolia")
    monkeypatch.setattr("scubr_deploy.config.is_local_network", lambda: False)
    monkeypatch.setattr(
        "scubr_deploy.config.networks", SimpleNamespace(provider=SimpleNamespace(network=network))
    )
    return network


@pytest.fixture
def local_network(monkeypatch):
    monkeypatch.setattr("scubr_deploy.config.is_local_network", lambda: True)
