#!/usr/bin/python3

import click

from fantasy_deployment.networks import load_network_registry
from fantasy_deployment.options import deployments_filepath_option, params_filepath_option
from fantasy_deployment.params import read_constructor_argument_rows
from fantasy_deployment.records import read_deployment_records


@click.command(name="list-networks")
@params_filepath_option
@deployments_filepath_option
def cli(params_filepath, deployments_filepath):
    """List registry networks with their constructor arguments and verification links."""
    registry = load_network_registry()

    arguments = dict()
    if params_filepath.exists():
        for row in read_constructor_argument_rows(params_filepath):
            arguments.setdefault(row.network_name, row.args)
    links = dict()
    for record in read_deployment_records(deployments_filepath):
        links[record.network] = record.verification_url

    for name, profile in registry.items():
        chain_id = profile.chain_id if profile.chain_id is not None else "?"
        click.secho(f"\n{name} (chain {chain_id})", fg="green")
        if profile.gas_limit is not None:
            click.secho(f"    gas limit override: {profile.gas_limit}", fg="yellow")
        if name in arguments:
            click.secho(f"    arguments: {', '.join(arguments[name]) or '-'}", fg="cyan")
        if name in links:
            click.secho(f"    verified: {links[name]}", fg="cyan")


if __name__ == "__main__":
    cli()
