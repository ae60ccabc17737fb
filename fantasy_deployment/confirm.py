from typing import List

from ape.utils import ZERO_ADDRESS


def _confirm_deployment(contract_name: str, network: str) -> None:
    """Asks the user to confirm the deployment of a single contract."""
    answer = input(f"Deploy {contract_name} on {network} Y/N? ")
    if answer.lower().strip() == "n":
        print("Aborting deployment!")
        exit(-1)


def _confirm_dropped_fields() -> None:
    answer = input("Empty constructor arguments were dropped; Continue? Y/N? ")
    if answer.lower().strip() == "n":
        print("Aborting deployment!")
        exit(-1)


def _confirm_zero_address() -> None:
    answer = input("Zero Address detected for deployment parameter; Continue? Y/N? ")
    if answer.lower().strip() == "n":
        print("Aborting deployment!")
        exit(-1)


def _confirm_resolution(
    constructor_arguments: List[str], contract_name: str, network: str, dropped_fields: bool
) -> None:
    """Asks the user to confirm the constructor arguments resolved for a network."""
    if len(constructor_arguments) == 0:
        print(f"\n(i) No constructor arguments for {contract_name} on {network}")
        _confirm_deployment(contract_name, network)
        return

    print(f"\nConstructor arguments for {contract_name} on {network}")
    for position, value in enumerate(constructor_arguments):
        print(f"\t{position}={value}")
    _confirm_deployment(contract_name, network)
    if dropped_fields:
        _confirm_dropped_fields()
    if ZERO_ADDRESS in constructor_arguments:
        _confirm_zero_address()
