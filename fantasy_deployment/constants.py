from pathlib import Path

import fantasy_deployment

#
# Filesystem
#

DEPLOYMENT_DIR = Path(fantasy_deployment.__file__).parent
PROJECT_ROOT = DEPLOYMENT_DIR.parent
NETWORKS_FILEPATH = DEPLOYMENT_DIR / "networks.yml"
NETWORK_PARAMS_FILEPATH = PROJECT_ROOT / "scripts" / "network-params.csv"
DEPLOYMENTS_FILEPATH = PROJECT_ROOT / "deployments.md"
APE_CONFIG_FILEPATH = PROJECT_ROOT / "ape-config.yaml"

#
# Contracts
#

CONTRACT_NAME = "FantasyFootballToken"

#
# Networks
#

LOCAL_NETWORKS = ["local", "hardhat"]
LOCAL_CHAIN_IDS = [1337, 31337]

#
# Accounts
#

DEPLOYER_ACCOUNT_ALIAS = "fantasy-deployer"
DEPLOYER_PASSPHRASE_ENVVAR = "DEPLOYER_PASSPHRASE"

#
# Verification
#

MAX_VERIFICATION_ATTEMPTS = 12
VERIFICATION_RETRY_DELAY = 5  # seconds
ALREADY_VERIFIED_MARKER = "already verified"
