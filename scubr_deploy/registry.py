import json
from pathlib import Path
from typing import Dict, Iterable, List, NamedTuple, Tuple

from ape.contracts import ContractInstance
from eth_typing import ABI, ChecksumAddress
from eth_utils import to_checksum_address

from scubr_deploy.utils import get_contract_container, load_json

ChainId = int
ContractName = str


class RegistryEntry(NamedTuple):
    """A deployed contract as recorded in a registry file."""

    chain_id: ChainId
    name: ContractName
    address: ChecksumAddress
    abi: ABI
    tx_hash: str
    block_number: int
    deployer: str


def _registry_data(entries: Iterable[RegistryEntry]) -> Dict[str, Dict[str, dict]]:
    """Lays entries out as {chain id: {name: record}}, sorted so registries diff cleanly."""
    data = dict()
    for entry in sorted(entries, key=lambda e: (str(e.chain_id), e.name)):
        data.setdefault(str(entry.chain_id), dict())[entry.name] = {
            "address": entry.address,
            "abi": sorted(entry.abi, key=lambda item: (item["type"], item.get("name", ""))),
            "tx_hash": entry.tx_hash,
            "block_number": int(entry.block_number),
            "deployer": entry.deployer,
        }
    return data


def _dump(data: dict, filepath: Path) -> None:
    filepath.parent.mkdir(parents=True, exist_ok=True)
    temp_filepath = filepath.with_suffix(".tmp")
    with open(temp_filepath, "w") as file:
        json.dump(data, file, indent=4)
    temp_filepath.replace(filepath)


def read_registry(filepath: Path) -> List[RegistryEntry]:
    return [
        RegistryEntry(chain_id=int(chain_id), name=name, **record)
        for chain_id, contracts in load_json(filepath).items()
        for name, record in contracts.items()
    ]


def write_registry(entries: List[RegistryEntry], filepath: Path) -> Path:
    """
    Writes entries to a registry file. An existing registry is extended with the new
    chains, unless it already has one of them; then the entries go to
    <name>.unmerged.json instead. Returns the path actually written.
    """
    if not entries:
        print("No registry entries to write.")
        return filepath

    data = _registry_data(entries)
    if filepath.exists():
        existing_data = load_json(filepath)
        if set(existing_data) & set(data):
            filepath = filepath.with_suffix(".unmerged.json")
            print(f"Registry already has some of these chains; writing to {filepath} instead.")
        else:
            print(f"Adding chain(s) {', '.join(data)} to registry at {filepath}.")
            data = {**existing_data, **data}
    else:
        print(f"Creating new registry at {filepath}.")

    _dump(data, filepath)
    return filepath


def registry_from_deployments(
    deployments: List[ContractInstance], output_filepath: Path
) -> Path:
    """Records contracts deployed through ape in a registry file."""
    entries = list()
    for instance in deployments:
        receipt = instance.receipt
        entries.append(
            RegistryEntry(
                chain_id=receipt.chain_id,
                name=instance.contract_type.name,
                address=to_checksum_address(instance.address),
                abi=[
                    item.model_dump(mode="json", by_alias=True)
                    for item in instance.contract_type.abi
                ],
                tx_hash=receipt.txn_hash,
                block_number=receipt.block_number,
                deployer=receipt.transaction.sender,
            )
        )
    output_filepath = write_registry(entries=entries, filepath=output_filepath)
    print(f"(i) Registry written to {output_filepath}!")
    return output_filepath


def _choose_entry(
    entry_1: RegistryEntry, filepath_1: Path, entry_2: RegistryEntry, filepath_2: Path
) -> RegistryEntry:
    print(f"\n! {entry_1.name} differs on chain id {entry_1.chain_id}:")
    print(f"[1]: {entry_1.address} from {filepath_1}")
    print(f"[2]: {entry_2.address} from {filepath_2}")
    choices = {"1": entry_1, "2": entry_2}
    answer = None
    while answer not in choices:
        answer = input("Keep [1] or [2], or [A]bort? ").strip()
        if answer.upper() == "A":
            print("Merge Aborted!")
            exit(-1)
    return choices[answer]


def merge_registries(
    registry_1_filepath: Path,
    registry_2_filepath: Path,
    output_filepath: Path,
    deprecated_contracts: Iterable[ContractName] = (),
) -> Path:
    """
    Merges two registries, dropping deprecated contracts. When both hold a different
    entry for the same contract on the same chain, the operator picks one.
    """
    deprecated_contracts = set(deprecated_contracts)
    merged: Dict[Tuple[ChainId, ContractName], RegistryEntry] = dict()
    for filepath in (registry_1_filepath, registry_2_filepath):
        for entry in read_registry(filepath):
            if entry.name in deprecated_contracts:
                continue
            key = (entry.chain_id, entry.name)
            kept = merged.get(key)
            if kept is not None and kept != entry:
                entry = _choose_entry(kept, registry_1_filepath, entry, registry_2_filepath)
            merged[key] = entry

    _dump(_registry_data(merged.values()), output_filepath)
    print(f"Merged registry output to {output_filepath}")
    return output_filepath


def normalize_registry(filepath: Path) -> None:
    """Rewrites a registry file in the standard order and format."""
    _dump(_registry_data(read_registry(filepath)), filepath)
    print(f"Successfully normalized registry at {filepath}.")


def contracts_from_registry(filepath: Path, chain_id: ChainId) -> Dict[str, ContractInstance]:
    """Returns contract instances, by name, for one chain of a registry."""
    return {
        entry.name: get_contract_container(entry.name).at(entry.address)
        for entry in read_registry(filepath)
        if entry.chain_id == chain_id
    }
