from pathlib import Path

import click

from scubr_deploy.constants import SUPPORTED_NETWORKS

params_filepath_option = click.option(
    "--params-filepath",
    "-p",
    help="Deployment parameters YAML; defaults to the file for the connected network.",
    type=click.Path(dir_okay=False, exists=True, path_type=Path),
    required=False,
)

verify_option = click.option(
    "--verify/--no-verify",
    help="Publish contract sources to the block explorer after deployment.",
    default=False,
)

autosign_option = click.option(
    "--autosign",
    help="Sign transactions without prompting for each one.",
    is_flag=True,
    default=False,
)

registry_network_option = click.option(
    "--registry-network",
    "-n",
    help="Network whose registry should be used",
    type=click.Choice(SUPPORTED_NETWORKS),
    required=False,
)

registry_filepath_option = click.option(
    "--registry-filepath",
    "-f",
    type=click.Path(dir_okay=False, exists=True, path_type=Path),
    help="Registry filepath if the contract is not part of a network registry",
    required=False,
)
