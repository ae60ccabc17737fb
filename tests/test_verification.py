import pytest
from eth_utils import to_checksum_address

from fantasy_deployment.verification import (
    AlreadyVerified,
    ApeExplorerVerifier,
    Fatal,
    Success,
    Transient,
    VerificationState,
    extract_url,
    verify_with_retries,
)
from tests.conftest import DEPLOYED_ADDRESS, ScriptedVerifier

ALREADY_VERIFIED_MESSAGE = (
    "Contract source code already verified: "
    "https://sepolia.etherscan.io/address/0xabc#code (see explorer)"
)


class FakeExplorer:
    def __init__(self, error=None):
        self.error = error
        self.published = []

    def publish_contract(self, address):
        self.published.append(address)
        if self.error:
            raise self.error

    def get_address_url(self, address):
        return f"https://explorer.example/address/{address}"


def test_success_on_first_attempt(fake_sleep):
    verifier = ScriptedVerifier(Success(url="https://sepolia.etherscan.io/address/0xabc#code"))
    result = verify_with_retries("sepolia", DEPLOYED_ADDRESS, ["1000"], verifier, sleep=fake_sleep)

    assert result.state == VerificationState.SUCCEEDED
    assert result.url == "https://sepolia.etherscan.io/address/0xabc#code"
    assert result.attempts == 1
    assert fake_sleep.delays == []
    assert verifier.calls == [(DEPLOYED_ADDRESS, ["1000"])]


def test_exhausts_after_twelve_attempts(fake_sleep, transient):
    verifier = ScriptedVerifier(transient)
    messages = []
    result = verify_with_retries(
        "sepolia", DEPLOYED_ADDRESS, [], verifier, sleep=fake_sleep, log=messages.append
    )

    assert result.state == VerificationState.EXHAUSTED_RETRIES
    assert result.url == ""
    assert result.attempts == 12
    assert len(verifier.calls) == 12
    assert fake_sleep.delays == [5] * 11
    assert sum(fake_sleep.delays) >= 55
    assert messages[0] == "Attempt 1: Verification failed. Retrying in 5 seconds..."


def test_retries_until_success(fake_sleep, transient):
    verifier = ScriptedVerifier(transient, transient, Success(url="https://x/address/0xabc"))
    result = verify_with_retries("sepolia", DEPLOYED_ADDRESS, [], verifier, sleep=fake_sleep)

    assert result.state == VerificationState.SUCCEEDED
    assert result.attempts == 3
    assert fake_sleep.delays == [5, 5]


def test_already_verified_stops_immediately(fake_sleep, transient):
    url = "https://sepolia.etherscan.io/address/0xabc#code"
    verifier = ScriptedVerifier(transient, AlreadyVerified(url=url), Success())
    result = verify_with_retries("sepolia", DEPLOYED_ADDRESS, [], verifier, sleep=fake_sleep)

    assert result.state == VerificationState.ALREADY_VERIFIED
    assert result.url == url
    assert result.attempts == 2


def test_fatal_stops_without_url(fake_sleep):
    verifier = ScriptedVerifier(Fatal(ValueError("No explorer configured")))
    result = verify_with_retries("xdc", DEPLOYED_ADDRESS, [], verifier, sleep=fake_sleep)

    assert result.state == VerificationState.FAILED
    assert result.url == ""
    assert result.attempts == 1
    assert fake_sleep.delays == []


def test_custom_attempt_ceiling(fake_sleep, transient):
    verifier = ScriptedVerifier(transient)
    result = verify_with_retries(
        "sepolia", DEPLOYED_ADDRESS, [], verifier, max_attempts=3, delay=1, sleep=fake_sleep
    )
    assert result.attempts == 3
    assert fake_sleep.delays == [1, 1]


@pytest.mark.parametrize(
    "message, url",
    [
        (ALREADY_VERIFIED_MESSAGE, "https://sepolia.etherscan.io/address/0xabc#code"),
        ("already verified", ""),
        ("see http://insecure.example and https://secure.example/x", "https://secure.example/x"),
    ],
)
def test_extract_url(message, url):
    assert extract_url(message) == url


def test_explorer_success_builds_address_url(sepolia_profile):
    explorer = FakeExplorer()
    verifier = ApeExplorerVerifier(sepolia_profile, explorer=explorer)

    outcome = verifier.verify(DEPLOYED_ADDRESS, ["1000"])

    assert explorer.published == [DEPLOYED_ADDRESS]
    checksum_address = to_checksum_address(DEPLOYED_ADDRESS)
    assert outcome == Success(url=f"https://sepolia.etherscan.io/address/{checksum_address}#code")


def test_explorer_success_without_configured_urls(mantle_profile):
    verifier = ApeExplorerVerifier(mantle_profile, explorer=FakeExplorer())
    outcome = verifier.verify(DEPLOYED_ADDRESS, [])
    assert outcome == Success(url=f"https://explorer.example/address/{DEPLOYED_ADDRESS}")


def test_explorer_already_verified(sepolia_profile):
    explorer = FakeExplorer(error=RuntimeError(ALREADY_VERIFIED_MESSAGE))
    outcome = ApeExplorerVerifier(sepolia_profile, explorer=explorer).verify(DEPLOYED_ADDRESS, [])
    assert outcome == AlreadyVerified(url="https://sepolia.etherscan.io/address/0xabc#code")


def test_explorer_transient_failure(sepolia_profile):
    error = RuntimeError("Unable to locate ContractCode")
    explorer = FakeExplorer(error=error)
    outcome = ApeExplorerVerifier(sepolia_profile, explorer=explorer).verify(DEPLOYED_ADDRESS, [])
    assert isinstance(outcome, Transient)
    assert outcome.error is error


def test_explorer_without_verification_support(sepolia_profile):
    explorer = FakeExplorer(error=NotImplementedError("publishing not supported"))
    outcome = ApeExplorerVerifier(sepolia_profile, explorer=explorer).verify(DEPLOYED_ADDRESS, [])
    assert isinstance(outcome, Fatal)
