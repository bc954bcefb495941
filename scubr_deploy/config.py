from pathlib import Path
from typing import Dict, List, NamedTuple

import yaml
from ape import networks

from scubr_deploy.constants import ARTIFACTS_DIR, CONSTRUCTOR_PARAMS_DIR
from scubr_deploy.networks import is_local_network
from scubr_deploy.utils import load_json


class DeploymentParams(NamedTuple):
    """Where a deployment goes and what it may deploy, as read from a params YAML."""

    name: str
    chain_id: int
    registry_filepath: Path
    contracts: List[str]

    @classmethod
    def from_yaml(cls, filepath: Path) -> "DeploymentParams":
        with open(filepath, "r") as file:
            config = yaml.safe_load(file) or {}
        return cls.from_config(config)

    @classmethod
    def from_config(cls, config: Dict) -> "DeploymentParams":
        deployment = config.get("deployment")
        if not deployment:
            raise ValueError("deployment is not set in params file.")
        if not deployment.get("chain_id"):
            raise ValueError("chain_id is not set in params file.")

        contracts = config.get("contracts")
        if not contracts:
            raise ValueError("params file is missing the 'contracts' field.")
        if not all(isinstance(contract, str) for contract in contracts):
            raise ValueError("'contracts' must list contract names only.")

        artifacts = config.get("artifacts") or {}
        if not artifacts.get("filename"):
            raise ValueError("artifact filename is not set in params file.")
        registry_dir = Path(artifacts.get("dir", ARTIFACTS_DIR))

        return cls(
            name=deployment.get("name", ""),
            chain_id=int(deployment["chain_id"]),
            registry_filepath=registry_dir / artifacts["filename"],
            contracts=list(contracts),
        )


def check_target_network(params: DeploymentParams) -> None:
    """
    On live networks, the params must target the connected chain and that chain must
    not be in the registry yet. Local chains are disposable, so neither is checked there.
    """
    if is_local_network():
        return

    connected_chain_id = networks.provider.network.chain_id
    if params.chain_id != connected_chain_id:
        raise ValueError(
            f"chain_id in params file ({params.chain_id}) does not match "
            f"chain_id of current network ({connected_chain_id})."
        )

    if params.registry_filepath.exists():
        published = {int(chain_id) for chain_id in load_json(params.registry_filepath)}
        if params.chain_id in published:
            raise ValueError(f"Deployment is already published for chain_id {params.chain_id}.")


def params_filepath_from_network(network_name: str) -> Path:
    filepath = CONSTRUCTOR_PARAMS_DIR / f"{network_name}.yml"
    if not filepath.exists():
        raise ValueError(f"No deployment parameters found for network '{network_name}'")
    return filepath
