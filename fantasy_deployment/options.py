from pathlib import Path

import click
from eth_utils import to_checksum_address

from fantasy_deployment.constants import (
    CONTRACT_NAME,
    DEPLOYMENTS_FILEPATH,
    MAX_VERIFICATION_ATTEMPTS,
    NETWORK_PARAMS_FILEPATH,
)
from fantasy_deployment.networks import supported_network_names


class MinInt(click.ParamType):
    name = "minint"

    def __init__(self, min_value):
        self.min_value = min_value

    def convert(self, value, param, ctx):
        try:
            ivalue = int(value)
        except ValueError:
            self.fail(f"{value} is not a valid integer", param, ctx)
        if ivalue < self.min_value:
            self.fail(
                f"{value} is less than the minimum allowed value of {self.min_value}", param, ctx
            )
        return ivalue


class ChecksumAddress(click.ParamType):
    name = "checksum_address"

    def convert(self, value, param, ctx):
        try:
            value = to_checksum_address(value=value)
        except ValueError:
            self.fail("Invalid ethereum address", param, ctx)
        else:
            return value


network_name_option = click.option(
    "--network-name",
    "-n",
    help="Network name from the network registry",
    type=click.Choice(supported_network_names()),
    required=True,
)

contract_name_option = click.option(
    "--contract-name",
    "-c",
    help="Contract to deploy",
    type=click.STRING,
    default=CONTRACT_NAME,
    show_default=True,
)

params_filepath_option = click.option(
    "--params-filepath",
    "-p",
    help="CSV table of constructor arguments keyed by network name",
    type=click.Path(dir_okay=False, path_type=Path),
    default=NETWORK_PARAMS_FILEPATH,
    show_default=True,
)

deployments_filepath_option = click.option(
    "--deployments-filepath",
    "-o",
    help="Markdown file recording verification links",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEPLOYMENTS_FILEPATH,
    show_default=True,
)

account_option = click.option(
    "--account",
    "-a",
    help="Alias of the ape account to deploy from",
    type=click.STRING,
    required=False,
)

autosign_option = click.option(
    "--autosign",
    help="Skip interactive confirmations",
    is_flag=True,
    default=False,
)

max_attempts_option = click.option(
    "--max-attempts",
    help="Verification attempts before giving up",
    type=MinInt(1),
    default=MAX_VERIFICATION_ATTEMPTS,
    show_default=True,
)
