#!/usr/bin/python3

import click
from ape import networks

from fantasy_deployment.explorer import ExplorerClient
from fantasy_deployment.networks import get_network_profile, validate_profile
from fantasy_deployment.options import (
    ChecksumAddress,
    deployments_filepath_option,
    max_attempts_option,
    network_name_option,
    params_filepath_option,
)
from fantasy_deployment.params import read_constructor_arguments
from fantasy_deployment.utils import check_etherscan_plugin
from fantasy_deployment.verification import ApeExplorerVerifier
from fantasy_deployment.workflow import verify_and_record


def _print_status(profile, address):
    if not profile.explorer_urls:
        raise click.BadOptionUsage(
            option_name="--status-only",
            message=f"No explorer API configured for '{profile.name}'",
        )
    client = ExplorerClient(profile.explorer_urls, api_key=profile.explorer_api_key)
    if client.is_verified(address):
        click.secho(f"Verified: {client.get_address_url(address)}", fg="green")
    else:
        click.secho(f"{address} is not verified on {profile.name}", fg="yellow")


@click.command()
@network_name_option
@click.option(
    "--address",
    help="Address of the deployed contract",
    type=ChecksumAddress(),
    required=True,
)
@params_filepath_option
@deployments_filepath_option
@max_attempts_option
@click.option(
    "--status-only",
    help="Only query the explorer for the verification status",
    is_flag=True,
    default=False,
)
def cli(network_name, address, params_filepath, deployments_filepath, max_attempts, status_only):
    """Verify an already deployed contract and record the explorer link."""
    profile = get_network_profile(network_name)
    if status_only:
        _print_status(profile, address)
        return

    constructor_arguments = read_constructor_arguments(network_name, params_filepath)
    with networks.parse_network_choice(
        profile.get_network_choice(), provider_settings=profile.get_provider_settings()
    ):
        validate_profile(profile, chain_id=networks.provider.chain_id)
        check_etherscan_plugin(profile)
        record = verify_and_record(
            network=network_name,
            address=address,
            constructor_arguments=constructor_arguments,
            verifier=ApeExplorerVerifier(profile),
            deployments_filepath=deployments_filepath,
            max_attempts=max_attempts,
        )

    if record:
        click.secho(f"{record.network}: {record.verification_url}", fg="green")


if __name__ == "__main__":
    cli()
