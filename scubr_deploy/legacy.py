import os
from pathlib import Path
from typing import Iterator, NamedTuple

import requests
from eth_typing import ChecksumAddress
from eth_utils import to_checksum_address

from scubr_deploy.constants import (
    ETHERSCAN_API_HOSTS,
    ETHERSCAN_API_KEY_ENVVAR,
    TRUFFLE_MIGRATIONS_CONTRACT,
)
from scubr_deploy.registry import ChainId, RegistryEntry, write_registry
from scubr_deploy.utils import load_json


class CreationInfo(NamedTuple):
    tx_hash: str
    block_number: int
    deployer: ChecksumAddress


class TruffleDeployment(NamedTuple):
    name: str
    abi: list
    address: ChecksumAddress
    tx_hash: str  # empty when the artifact does not record it


def get_creation_info(api_key: str, chain_id: ChainId, address: ChecksumAddress) -> CreationInfo:
    """Looks up the creation transaction of a contract: the first transaction Etherscan lists."""
    try:
        subdomain_suffix, explorer = ETHERSCAN_API_HOSTS[chain_id]
    except KeyError:
        raise ValueError(f"No Etherscan API known for chain_id {chain_id}")

    response = requests.get(
        f"https://api{subdomain_suffix}.{explorer}/api",
        params={
            "module": "account",
            "action": "txlist",
            "address": address,
            "page": 1,
            "sort": "asc",
            "apikey": api_key,
        },
    )
    response.raise_for_status()
    data = response.json()
    if data["status"] != "1" or not data["result"]:
        raise ValueError(f"Could not find contract creation transaction for {address}")

    creation_tx = data["result"][0]
    return CreationInfo(
        tx_hash=creation_tx["hash"],
        block_number=int(creation_tx["blockNumber"]),
        deployer=to_checksum_address(creation_tx["from"]),
    )


def truffle_deployments(directory: Path, chain_id: ChainId) -> Iterator[TruffleDeployment]:
    """
    Yields the contracts of a Truffle build directory that were deployed on a chain,
    leaving out Truffle's own Migrations contract.
    """
    for filepath in sorted(directory.glob("*.json")):
        artifact = load_json(filepath)
        name = artifact.get("contractName", filepath.stem)
        network = artifact.get("networks", {}).get(str(chain_id)) or {}
        if name == TRUFFLE_MIGRATIONS_CONTRACT or not network.get("address"):
            continue
        yield TruffleDeployment(
            name=name,
            abi=artifact["abi"],
            address=to_checksum_address(network["address"]),
            tx_hash=network.get("transactionHash", ""),
        )


def convert_truffle_artifacts(directory: Path, chain_id: ChainId, output_filepath: Path) -> Path:
    """
    Converts the deployments in a Truffle build directory into a registry for one chain.
    Transaction hash, block number and deployer all come from the same Etherscan
    transaction, which must be the one Truffle recorded when it recorded one.
    """
    if output_filepath.exists():
        raise FileExistsError(f"Registry already exists at {output_filepath}")
    if not directory.exists():
        raise FileNotFoundError(f"Directory not found at {directory}")

    api_key = os.environ.get(ETHERSCAN_API_KEY_ENVVAR)
    if not api_key:
        raise ValueError(f"Please set the {ETHERSCAN_API_KEY_ENVVAR} environment variable.")

    entries = list()
    for deployment in truffle_deployments(directory, chain_id):
        creation = get_creation_info(api_key, chain_id, deployment.address)
        if deployment.tx_hash and deployment.tx_hash.lower() != creation.tx_hash.lower():
            raise ValueError(
                f"Truffle recorded {deployment.tx_hash} as the creation transaction of "
                f"{deployment.name}, but Etherscan reports {creation.tx_hash}."
            )
        entries.append(
            RegistryEntry(
                chain_id=chain_id,
                name=deployment.name,
                address=deployment.address,
                abi=deployment.abi,
                tx_hash=creation.tx_hash,
                block_number=creation.block_number,
                deployer=creation.deployer,
            )
        )

    if not entries:
        raise ValueError(f"No Truffle deployments found for chain_id {chain_id} in {directory}")

    output_filepath = write_registry(entries=entries, filepath=output_filepath)
    print(f"Converted Truffle artifacts to {output_filepath}")
    return output_filepath
