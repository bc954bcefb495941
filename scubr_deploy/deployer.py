import typing
from pathlib import Path
from typing import Any, List, Sequence

from ape import networks
from ape.api import AccountAPI
from ape.cli.choices import select_account
from ape.contracts.base import ContractContainer, ContractInstance
from ape.exceptions import ApeException
from web3.auto import w3

from scubr_deploy.config import DeploymentParams, check_target_network
from scubr_deploy.confirm import confirm_deployment, confirm_start
from scubr_deploy.registry import registry_from_deployments
from scubr_deploy.utils import check_plugins, get_contract_container, verify_contracts


def _validate_constructor_args(contract_name: str, abi_inputs: List[Any], args: Sequence[Any]):
    """Checks constructor arguments position by position against the constructor ABI."""
    if len(args) != len(abi_inputs):
        raise Deployer.Invalid(
            f"{contract_name} constructor takes {len(abi_inputs)} argument(s), got {len(args)}."
        )
    for position, (abi_input, arg) in enumerate(zip(abi_inputs, args)):
        if not w3.is_encodable(abi_input.type, arg):
            raise Deployer.Invalid(
                f"{contract_name} constructor argument #{position} ({abi_input.name or 'unnamed'}) "
                f"has a value '{arg}' that is not a valid '{abi_input.type}'."
            )


class Deployer:
    """
    Deployment handle: an ape account plus the contracts a params file allows,
    with confirmation prompts around every deployment.
    """

    class Failed(Exception):
        """Raised when a deployment action fails"""

    class Invalid(Exception):
        """Raised when constructor arguments do not fit the constructor ABI"""

    def __init__(
        self,
        params: DeploymentParams,
        verify: bool,
        account: typing.Optional[AccountAPI] = None,
        autosign: bool = False,
    ):
        self.account = account or select_account()
        if autosign:
            print("WARNING: Autosign is enabled. Transactions will be signed automatically.")
        self.account.set_autosign(autosign)
        self._autosign = autosign

        check_plugins()
        check_target_network(params)
        self.params = params
        self.verify = verify

        # resolve every artifact up front so a missing one fails before any transaction
        self._containers: typing.Dict[str, ContractContainer] = {
            name: get_contract_container(name) for name in params.contracts
        }
        self._deployments: typing.Dict[str, ContractInstance] = {}

        self._print_deployment_info()
        if not autosign:
            confirm_start()

    @classmethod
    def from_yaml(cls, filepath: Path, **kwargs) -> "Deployer":
        return cls(params=DeploymentParams.from_yaml(filepath), **kwargs)

    def deploy(self, contract_name: str, *args) -> ContractInstance:
        """Deploys a contract listed in the params file with the given constructor arguments."""
        try:
            container = self._containers[contract_name]
        except KeyError:
            raise ValueError(f"{contract_name} is not listed in the '{self.params.name}' params.")

        abi_inputs = container.constructor.abi.inputs
        _validate_constructor_args(contract_name, abi_inputs, args)
        if not self._autosign:
            confirm_deployment(contract_name, abi_inputs, args)

        try:
            instance = self.account.deploy(container, *args, publish=self.verify)
        except ApeException as e:
            raise self.Failed(f"Deployment of {contract_name} failed: {e}") from e

        print(f"(i) {contract_name} deployed at {instance.address}")
        self._deployments[contract_name] = instance
        return instance

    def deployed(self, contract_name: str) -> ContractInstance:
        """
        Returns the instance of a contract deployed in this run or, failing that,
        the latest deployment ape knows of on the connected network.
        """
        if contract_name in self._deployments:
            return self._deployments[contract_name]

        known_deployments = get_contract_container(contract_name).deployments
        if not known_deployments:
            raise self.Failed(f"{contract_name} has not been deployed.")
        return known_deployments[-1]

    def finalize(self, deployments: List[ContractInstance]) -> None:
        """Writes the registry, then publishes sources when verification is on."""
        registry_from_deployments(
            deployments=deployments, output_filepath=self.params.registry_filepath
        )
        if self.verify:
            verify_contracts(contracts=deployments)

    def _print_deployment_info(self):
        network = networks.provider.network
        print(
            f"Deployment: {self.params.name}",
            f"Account: {self.account.address}",
            f"Contracts: {', '.join(self.params.contracts)}",
            f"Registry: {self.params.registry_filepath}",
            f"Verify: {self.verify}",
            f"Network: {network.ecosystem.name}:{network.name} (chain ID {network.chain_id})",
            f"Gas Price: {networks.provider.gas_price}",
            sep="\n",
        )
