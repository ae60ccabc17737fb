import re
import time
from enum import Enum
from typing import Callable, List, NamedTuple, Optional, Union

from ape import networks
from ape.api import ExplorerAPI
from ape.exceptions import ProviderNotConnectedError

from fantasy_deployment.constants import (
    ALREADY_VERIFIED_MARKER,
    MAX_VERIFICATION_ATTEMPTS,
    VERIFICATION_RETRY_DELAY,
)
from fantasy_deployment.explorer import address_url
from fantasy_deployment.networks import NetworkProfile

URL_PATTERN = re.compile(r"(https://\S+)")

#
# Verification outcomes
#


class Success(NamedTuple):
    url: str = ""


class AlreadyVerified(NamedTuple):
    url: str = ""


class Transient(NamedTuple):
    error: Exception


class Fatal(NamedTuple):
    error: Exception


VerificationOutcome = Union[Success, AlreadyVerified, Transient, Fatal]


class VerificationState(Enum):
    SUCCEEDED = "succeeded"
    ALREADY_VERIFIED = "already verified"
    EXHAUSTED_RETRIES = "exhausted retries"
    FAILED = "failed"


class VerificationResult(NamedTuple):
    state: VerificationState
    url: str
    attempts: int


def extract_url(message: str) -> str:
    """Returns the first https link embedded in a message, or an empty string."""
    match = URL_PATTERN.search(message)
    if not match:
        return ""
    return match.group(1)


class ApeExplorerVerifier:
    """
    Publishes contract source through the connected network's ape explorer
    plugin and maps the result onto a verification outcome.
    """

    def __init__(self, profile: NetworkProfile, explorer: Optional[ExplorerAPI] = None):
        self.profile = profile
        self._explorer = explorer

    @property
    def explorer(self) -> Optional[ExplorerAPI]:
        if self._explorer is None:
            self._explorer = networks.provider.network.explorer
        return self._explorer

    def get_address_url(self, address: str) -> str:
        if self.profile.explorer_urls:
            return address_url(self.profile.explorer_urls, address)
        return self.explorer.get_address_url(address)

    def verify(self, address: str, constructor_arguments: List[str]) -> VerificationOutcome:
        # the explorer plugin recovers constructor arguments from the creation transaction
        try:
            explorer = self.explorer
        except ProviderNotConnectedError as error:
            return Fatal(error)
        if explorer is None:
            return Fatal(ValueError(f"No explorer configured for network '{self.profile.name}'."))

        try:
            explorer.publish_contract(address)
        except NotImplementedError as error:
            return Fatal(error)
        except Exception as error:
            message = str(error)
            if ALREADY_VERIFIED_MARKER in message.lower():
                return AlreadyVerified(url=extract_url(message))
            return Transient(error)

        return Success(url=self.get_address_url(address))


def verify_with_retries(
    network: str,
    address: str,
    constructor_arguments: List[str],
    verifier,
    max_attempts: int = MAX_VERIFICATION_ATTEMPTS,
    delay: float = VERIFICATION_RETRY_DELAY,
    sleep: Callable[[float], None] = time.sleep,
    log: Callable[[str], None] = print,
) -> VerificationResult:
    """
    Verifies a deployed contract, retrying transient failures with a fixed delay.
    Gives up with an empty URL after `max_attempts` attempts.
    """
    attempts = 0
    while attempts < max_attempts:
        attempts += 1
        outcome = verifier.verify(address, constructor_arguments)

        if isinstance(outcome, Success):
            log("Verification complete!")
            return VerificationResult(VerificationState.SUCCEEDED, outcome.url, attempts)

        if isinstance(outcome, AlreadyVerified):
            log(f"Contract at {address} is already verified on {network}.")
            return VerificationResult(VerificationState.ALREADY_VERIFIED, outcome.url, attempts)

        if isinstance(outcome, Fatal):
            log(f"Verification on {network} failed: {outcome.error}")
            return VerificationResult(VerificationState.FAILED, "", attempts)

        if attempts < max_attempts:
            log(f"Attempt {attempts}: Verification failed. Retrying in {delay} seconds...")
            sleep(delay)

    log(f"Verification on {network} did not succeed after {attempts} attempts.")
    return VerificationResult(VerificationState.EXHAUSTED_RETRIES, "", attempts)
