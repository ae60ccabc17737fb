import typing
from typing import Any, List

from ape import networks
from ape.api import AccountAPI
from ape.contracts import ContractContainer, ContractInstance

from fantasy_deployment.confirm import _confirm_resolution
from fantasy_deployment.networks import NetworkProfile


class Deployer:
    """
    Represents an ape account plus the profile of the network being
    deployed to, plus annotated contract deployment.
    """

    def __init__(
        self,
        profile: NetworkProfile,
        account: AccountAPI,
        autosign: bool = False,
    ):
        self.profile = profile
        self._account = account
        if autosign:
            print("WARNING: Autosign is enabled. Deployment will proceed without confirmation.")
        self._autosign = autosign

    def get_account(self) -> AccountAPI:
        """Returns the deployer account."""
        return self._account

    def _get_kwargs(self) -> typing.Dict[str, Any]:
        """Returns the deployment kwargs."""
        # verification is retried separately once the deployment is mined
        kwargs = {"publish": False}
        kwargs.update(self.profile.get_overrides())
        return kwargs

    def deploy(
        self,
        container: ContractContainer,
        constructor_arguments: List[str],
        dropped_fields: bool = False,
    ) -> ContractInstance:
        contract_name = container.contract_type.name
        if not self._autosign:
            _confirm_resolution(
                constructor_arguments,
                contract_name=contract_name,
                network=self.profile.name,
                dropped_fields=dropped_fields,
            )

        kwargs = self._get_kwargs()
        if "gas_limit" in kwargs:
            print(f"(i) Using gas limit override of {kwargs['gas_limit']} on {self.profile.name}")

        instance = self._account.deploy(container, *constructor_arguments, **kwargs)
        print(f"Contract deployed to address: {instance.address}")
        return instance

    def print_deployment_info(self, contract_name: str) -> None:
        print(
            f"Account: {self.get_account().address}",
            f"Contract: {contract_name}",
            f"Network: {self.profile.name}",
            f"Ecosystem: {networks.provider.network.ecosystem.name}",
            f"Chain ID: {networks.provider.network.chain_id}",
            f"Gas Limit Override: {self.profile.gas_limit or 'none'}",
            f"Gas Price: {networks.provider.gas_price}",
            sep="\n",
        )
