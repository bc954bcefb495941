#!/usr/bin/python3

import click
from ape import networks
from ape.cli import ConnectedProviderCommand

from scubr_deploy.options import registry_filepath_option, registry_network_option
from scubr_deploy.registry import contracts_from_registry
from scubr_deploy.utils import registry_filepath_from_network, verify_contracts


@click.command(cls=ConnectedProviderCommand)
@click.option(
    "--contract-name",
    "-c",
    "contract_names",
    help="Contract to verify; all contracts of the chain when omitted",
    multiple=True,
)
@registry_network_option
@registry_filepath_option
def cli(contract_names, registry_network, registry_filepath):
    """Publish the sources of registry contracts on the connected chain."""
    if bool(registry_network) == bool(registry_filepath):
        raise click.UsageError("Provide exactly one of --registry-network or --registry-filepath.")

    registry_filepath = registry_filepath or registry_filepath_from_network(registry_network)
    chain_id = networks.provider.network.chain_id
    contracts = contracts_from_registry(registry_filepath, chain_id=chain_id)

    unknown = sorted(set(contract_names) - set(contracts))
    if unknown:
        raise click.BadParameter(
            f"{', '.join(unknown)} not in {registry_filepath} for chain {chain_id}",
            param_hint="--contract-name",
        )
    verify_contracts([contracts[name] for name in contract_names or contracts])


if __name__ == "__main__":
    cli()
