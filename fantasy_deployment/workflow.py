import time
from pathlib import Path
from typing import Callable, List, Optional

from ape.contracts import ContractContainer

from fantasy_deployment.constants import MAX_VERIFICATION_ATTEMPTS, VERIFICATION_RETRY_DELAY
from fantasy_deployment.deployer import Deployer
from fantasy_deployment.params import has_dropped_fields, read_constructor_arguments
from fantasy_deployment.records import DeploymentRecord, save_verification_url
from fantasy_deployment.verification import ApeExplorerVerifier, verify_with_retries


def verify_and_record(
    network: str,
    address: str,
    constructor_arguments: List[str],
    verifier,
    deployments_filepath: Path,
    max_attempts: int = MAX_VERIFICATION_ATTEMPTS,
    delay: float = VERIFICATION_RETRY_DELAY,
    sleep: Callable[[float], None] = time.sleep,
    log: Callable[[str], None] = print,
) -> Optional[DeploymentRecord]:
    """Verifies a deployed contract and records its link; returns None if no link was obtained."""
    result = verify_with_retries(
        network=network,
        address=address,
        constructor_arguments=constructor_arguments,
        verifier=verifier,
        max_attempts=max_attempts,
        delay=delay,
        sleep=sleep,
        log=log,
    )
    if not result.url:
        log("The verification process did not provide a URL.")
        return None

    save_verification_url(result.url, network, filepath=deployments_filepath)
    return DeploymentRecord(network=network, verification_url=result.url)


def run_deployment(
    deployer: Deployer,
    container: ContractContainer,
    params_filepath: Path,
    deployments_filepath: Path,
    verify: bool = True,
    verifier=None,
    max_attempts: int = MAX_VERIFICATION_ATTEMPTS,
    delay: float = VERIFICATION_RETRY_DELAY,
    sleep: Callable[[float], None] = time.sleep,
    log: Callable[[str], None] = print,
) -> Optional[DeploymentRecord]:
    """
    Deploys a contract to the deployer's network with the constructor arguments
    listed for that network, then verifies it and records the explorer link.

    Deployment errors propagate; verification problems only mean that no
    record is written.
    """
    network = deployer.profile.name
    constructor_arguments = read_constructor_arguments(network, params_filepath)
    dropped_fields = has_dropped_fields(network, params_filepath)
    if dropped_fields:
        log(f"WARNING: empty constructor arguments for {network} were dropped.")

    instance = deployer.deploy(container, constructor_arguments, dropped_fields=dropped_fields)

    if not verify:
        log("(i) Skipping verification")
        return None

    verifier = verifier or ApeExplorerVerifier(deployer.profile)
    return verify_and_record(
        network=network,
        address=instance.address,
        constructor_arguments=constructor_arguments,
        verifier=verifier,
        deployments_filepath=deployments_filepath,
        max_attempts=max_attempts,
        delay=delay,
        sleep=sleep,
        log=log,
    )
