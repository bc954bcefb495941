#!/usr/bin/python3

import click
from ape import networks
from ape.cli import ConnectedProviderCommand

from scubr_deploy.options import autosign_option, params_filepath_option, verify_option
from scubr_deploy.tokens import deploy_and_publish


@click.command(cls=ConnectedProviderCommand, name="deploy-tokens")
@params_filepath_option
@verify_option
@autosign_option
def cli(params_filepath, verify, autosign):
    """
    Deploys ScubrEngagementToken and ScubrVideoToken, then writes the registry.

    ape run deploy_tokens --network ethereum:sepolia:infura
    """
    deploy_and_publish(
        network_name=networks.provider.network.name,
        params_filepath=params_filepath,
        verify=verify,
        autosign=autosign,
    )


if __name__ == "__main__":
    cli()
