import json
import os
from pathlib import Path
from typing import List

from ape import networks, project
from ape.contracts import ContractContainer, ContractInstance

from scubr_deploy.constants import ARTIFACTS_DIR
from scubr_deploy.networks import is_local_network


def load_json(filepath: Path) -> dict:
    with open(filepath, "r") as file:
        return json.load(file)


def _require_env(envvars: List[str], what: str) -> None:
    if not any(os.environ.get(envvar) for envvar in envvars):
        raise ValueError(f"No {what} found in environment variables: {', '.join(envvars)}")


def check_plugins() -> None:
    """
    Live deployments publish through ape-etherscan and, when the provider is infura,
    connect through ape-infura. Both need their API keys in the environment.
    """
    if is_local_network():
        return

    print("Checking plugins...")
    try:
        from ape_etherscan.utils import API_KEY_ENV_KEY_MAP
    except ImportError:
        raise ImportError("Please install the ape-etherscan plugin to deploy to live networks.")
    explorer_envvar = API_KEY_ENV_KEY_MAP.get(networks.provider.network.ecosystem.name)
    if explorer_envvar:
        _require_env([explorer_envvar], "block explorer API key")

    if networks.provider.name == "infura":
        try:
            from ape_infura.provider import _ENVIRONMENT_VARIABLE_NAMES
        except ImportError:
            raise ImportError("Please install the ape-infura plugin to use the infura provider.")
        _require_env(list(_ENVIRONMENT_VARIABLE_NAMES), "Infura API key")


def get_contract_container(contract_name: str) -> ContractContainer:
    """Returns the compiled contract of this project with the given name."""
    try:
        return getattr(project, contract_name)
    except AttributeError:
        raise ValueError(
            f"No compiled contract named '{contract_name}'; "
            f"its source belongs in {project.contracts_folder}."
        )


def verify_contracts(contracts: List[ContractInstance]) -> None:
    explorer = networks.provider.network.explorer
    for instance in contracts:
        print(f"(i) Verifying {instance.contract_type.name} at {instance.address}...")
        explorer.publish_contract(instance.address)


def registry_filepath_from_network(network_name: str) -> Path:
    filepath = ARTIFACTS_DIR / f"{network_name}.json"
    if not filepath.exists():
        raise ValueError(f"No registry found for network '{network_name}'")
    return filepath


def get_chain_name(chain_id: int) -> str:
    """Returns '<ecosystem> <network>' for a known chain ID."""
    for ecosystem_name, ecosystem in networks.ecosystems.items():
        for network_name, network in ecosystem.networks.items():
            if network.chain_id == chain_id:
                return f"{ecosystem_name} {network_name}"
    raise ValueError(f"Chain ID {chain_id} not found in networks.")
