from pathlib import Path
from typing import List, Optional

from ape.contracts import ContractInstance

from scubr_deploy.config import params_filepath_from_network
from scubr_deploy.constants import ENGAGEMENT_TOKEN, VIDEO_TOKEN
from scubr_deploy.deployer import Deployer


def deploy_tokens(deployer) -> List[ContractInstance]:
    """
    Deploys the Scubr engagement token, then the video token wired to it.

    The video token's constructor takes the engagement token address, so it is only
    deployed once the engagement token is deployed and its address is known. Failures
    propagate as is; nothing is retried and a half-finished deployment is left in place.
    Every call deploys new instances.
    """
    deployer.deploy(ENGAGEMENT_TOKEN)
    engagement_token = deployer.deployed(ENGAGEMENT_TOKEN)

    video_token = deployer.deploy(VIDEO_TOKEN, engagement_token.address)

    return [engagement_token, video_token]


def deploy_and_publish(
    network_name: str,
    params_filepath: Optional[Path] = None,
    verify: bool = False,
    autosign: bool = False,
) -> List[ContractInstance]:
    """Runs deploy_tokens with the network's params file and records the result."""
    params_filepath = params_filepath or params_filepath_from_network(network_name)
    deployer = Deployer.from_yaml(filepath=params_filepath, verify=verify, autosign=autosign)

    deployments = deploy_tokens(deployer)

    deployer.finalize(deployments=deployments)
    return deployments
