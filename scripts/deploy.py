#!/usr/bin/python3

import click
from ape import networks

from fantasy_deployment.deployer import Deployer
from fantasy_deployment.networks import get_network_profile, validate_profile
from fantasy_deployment.options import (
    account_option,
    autosign_option,
    contract_name_option,
    deployments_filepath_option,
    max_attempts_option,
    network_name_option,
    params_filepath_option,
)
from fantasy_deployment.utils import check_plugins, get_contract_container, get_deployer_account
from fantasy_deployment.workflow import run_deployment


@click.command()
@network_name_option
@contract_name_option
@params_filepath_option
@deployments_filepath_option
@account_option
@autosign_option
@max_attempts_option
@click.option(
    "--verify/--no-verify",
    help="Verify the contract source on the network's block explorer",
    default=True,
    show_default=True,
)
def cli(
    network_name,
    contract_name,
    params_filepath,
    deployments_filepath,
    account,
    autosign,
    max_attempts,
    verify,
):
    """
    Deploy a contract with the constructor arguments listed for a network,
    verify it on the network's block explorer and record the explorer link.

    ape run deploy --network-name sepolia
    """
    profile = get_network_profile(network_name)
    verify = verify and not profile.is_local

    with networks.parse_network_choice(
        profile.get_network_choice(), provider_settings=profile.get_provider_settings()
    ):
        validate_profile(profile, chain_id=networks.provider.chain_id)
        check_plugins(profile, verify=verify)

        container = get_contract_container(contract_name)
        deployer = Deployer(
            profile=profile,
            account=get_deployer_account(profile, alias=account),
            autosign=autosign,
        )
        deployer.print_deployment_info(contract_name)

        record = run_deployment(
            deployer=deployer,
            container=container,
            params_filepath=params_filepath,
            deployments_filepath=deployments_filepath,
            verify=verify,
            max_attempts=max_attempts,
        )

    if record:
        click.secho(f"{record.network}: {record.verification_url}", fg="green")


if __name__ == "__main__":
    cli()
