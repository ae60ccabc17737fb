#!/usr/bin/python3

from pathlib import Path

import click
import yaml

from fantasy_deployment.constants import APE_CONFIG_FILEPATH
from fantasy_deployment.networks import build_ape_network_config, load_network_registry
from fantasy_deployment.utils import _load_yaml


@click.command(name="update-ape-config")
@click.option(
    "--config-filepath",
    help="ape project config to update",
    type=click.Path(dir_okay=False, path_type=Path),
    default=APE_CONFIG_FILEPATH,
    show_default=True,
)
def cli(config_filepath):
    """Declare the registry's custom networks and their explorers in ape-config.yaml."""
    config = _load_yaml(config_filepath) if config_filepath.exists() else dict()
    config = config or dict()
    config.update(build_ape_network_config(load_network_registry()))

    with open(config_filepath, "w") as file:
        yaml.safe_dump(config, file, sort_keys=False)
    click.secho(f"Updated {config_filepath}", fg="green")


if __name__ == "__main__":
    cli()
