#!/usr/bin/python3
from itertools import groupby
from pathlib import Path

import click

from scubr_deploy.constants import SUPPORTED_NETWORKS
from scubr_deploy.legacy import convert_truffle_artifacts
from scubr_deploy.options import registry_network_option
from scubr_deploy.registry import merge_registries, normalize_registry, read_registry
from scubr_deploy.utils import get_chain_name, registry_filepath_from_network

existing_file = click.Path(dir_okay=False, exists=True, path_type=Path)
new_file = click.Path(dir_okay=False, path_type=Path)


@click.group()
def cli():
    """Inspect and maintain contract registry files."""


@cli.command(name="list")
@registry_network_option
def list_contracts(registry_network):
    """List registry contracts grouped by chain; all networks unless one is given."""
    for network_name in [registry_network] if registry_network else SUPPORTED_NETWORKS:
        try:
            entries = read_registry(registry_filepath_from_network(network_name))
        except ValueError:
            if registry_network:
                raise
            continue  # nothing published there yet

        click.secho(f"\n{network_name.capitalize()} Registry", fg="green")
        for chain_id, chain_entries in groupby(entries, key=lambda e: e.chain_id):
            try:
                chain_name = "/".join(w.capitalize() for w in get_chain_name(chain_id).split())
            except ValueError:
                chain_name = f"Chain {chain_id}"
            click.secho(f"    {chain_name}", fg="yellow")
            for index, entry in enumerate(chain_entries, start=1):
                click.secho(f"        {index}. {entry.name} {entry.address}", fg="cyan")


@cli.command()
@click.argument("registry_1", type=existing_file)
@click.argument("registry_2", type=existing_file)
@click.option("--output-registry", "-o", type=new_file, required=True)
@click.option(
    "--deprecated-contract",
    "-d",
    "deprecated_contracts",
    help="Contract to leave out of the merged registry",
    multiple=True,
)
def merge(registry_1, registry_2, output_registry, deprecated_contracts):
    """Merge two registries into one."""
    merge_registries(registry_1, registry_2, output_registry, deprecated_contracts)


@cli.command()
@click.argument("registry", type=existing_file)
def normalize(registry):
    """Rewrite a registry in the standard order and format."""
    normalize_registry(registry)


@cli.command(name="convert-truffle")
@click.argument("build_dir", type=click.Path(file_okay=False, exists=True, path_type=Path))
@click.option("--chain-id", "-c", type=int, required=True, help="Chain of the Truffle deployment")
@click.option("--output-registry", "-o", type=new_file, required=True)
def convert_truffle(build_dir, chain_id, output_registry):
    """Build a registry from a Truffle build directory (build/contracts)."""
    convert_truffle_artifacts(build_dir, chain_id, output_registry)


if __name__ == "__main__":
    cli()
