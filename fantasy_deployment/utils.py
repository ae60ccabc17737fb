import os
from pathlib import Path
from typing import MutableMapping, Optional

import yaml
from ape import accounts, project
from ape.api import AccountAPI
from ape.contracts import ContractContainer
from ape_accounts import import_account_from_private_key

from fantasy_deployment.constants import DEPLOYER_ACCOUNT_ALIAS, DEPLOYER_PASSPHRASE_ENVVAR


def _load_yaml(filepath: Path) -> dict:
    """Loads a YAML file."""
    with open(filepath, "r") as file:
        return yaml.safe_load(file)


def export_explorer_api_key(
    profile, environ: MutableMapping[str, str] = os.environ
) -> Optional[str]:
    """
    Exports the profile's explorer API key under the variable name ape-etherscan
    reads for the profile's ecosystem. Returns that variable name.
    """
    from ape_etherscan.utils import API_KEY_ENV_KEY_MAP

    ecosystem_name = profile.ecosystem_name
    explorer_envvar = API_KEY_ENV_KEY_MAP.get(ecosystem_name)
    if not explorer_envvar:
        print(f"(i) No explorer API key variable known for ecosystem '{ecosystem_name}'")
        return None
    if profile.explorer_api_key:
        environ[explorer_envvar] = profile.explorer_api_key
    if not environ.get(explorer_envvar):
        print(f"WARNING: {explorer_envvar} is not set; verification is likely to fail.")
    return explorer_envvar


def check_etherscan_plugin(profile) -> None:
    """Checks that the ape-etherscan plugin is installed and exports the explorer API key."""
    if profile.is_local:
        # unnecessary for local deployment
        return
    try:
        import ape_etherscan  # noqa: F401
    except ImportError:
        raise ImportError("Please install the ape-etherscan plugin to use this script.")
    export_explorer_api_key(profile)


def check_plugins(profile, verify: bool) -> None:
    print("Checking plugins...")
    if verify:
        check_etherscan_plugin(profile)


def get_contract_container(contract: str) -> ContractContainer:
    try:
        return getattr(project, contract)
    except AttributeError:
        raise ValueError(f"No contract found with name '{contract}'.")


def _import_credential(private_key: str) -> AccountAPI:
    """Imports the profile's signing key into the ape keystore, unlocking it for autosign."""
    passphrase = os.environ.get(DEPLOYER_PASSPHRASE_ENVVAR)
    if not passphrase:
        raise ValueError(
            f"{DEPLOYER_PASSPHRASE_ENVVAR} must be set to use the configured signing credential."
        )
    if DEPLOYER_ACCOUNT_ALIAS in accounts.aliases:
        account = accounts.load(DEPLOYER_ACCOUNT_ALIAS)
    else:
        account = import_account_from_private_key(DEPLOYER_ACCOUNT_ALIAS, passphrase, private_key)
        print(f"Account imported: {account.address}")
    account.set_autosign(True, passphrase=passphrase)
    return account


def get_deployer_account(profile, alias: Optional[str] = None) -> AccountAPI:
    """
    Resolves the deploying account: an explicit keystore alias, the first
    test account on local networks, or the profile's signing credential.
    """
    if alias:
        return accounts.load(alias)
    if profile.is_local:
        return accounts.test_accounts[0]
    if not profile.credential:
        raise ValueError(
            f"No signing credential configured for '{profile.name}'; "
            "set PRIVATE_KEY or pass --account."
        )
    return _import_credential(profile.credential)
