from pathlib import Path

import scubr_deploy

#
# Filesystem
#

DEPLOYMENT_DIR = Path(scubr_deploy.__file__).parent
CONSTRUCTOR_PARAMS_DIR = DEPLOYMENT_DIR / "constructor_params"
ARTIFACTS_DIR = DEPLOYMENT_DIR / "artifacts"

#
# Networks
#

LOCAL = "local"
SEPOLIA = "sepolia"
MAINNET = "mainnet"

LOCAL_NETWORKS = [LOCAL]
SUPPORTED_NETWORKS = [LOCAL, SEPOLIA, MAINNET]

#
# Contracts
#

ENGAGEMENT_TOKEN = "ScubrEngagementToken"
VIDEO_TOKEN = "ScubrVideoToken"

# Truffle's own bookkeeping contract; never part of a registry
TRUFFLE_MIGRATIONS_CONTRACT = "Migrations"

#
# Block explorers
#

ETHERSCAN_API_KEY_ENVVAR = "ETHERSCAN_API_KEY"

ETHERSCAN_API_HOSTS = {
    # chain id -> (subdomain suffix, explorer)
    1: ("", "etherscan.io"),
    11155111: ("-sepolia", "etherscan.io"),
}
