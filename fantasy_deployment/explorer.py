from typing import Optional

import requests
from eth_utils import to_checksum_address

from fantasy_deployment.networks import ExplorerUrls


def address_url(explorer_urls: ExplorerUrls, address: str) -> str:
    """Link to the verified source of a contract on the explorer's website."""
    browser_url = explorer_urls.browser_url.rstrip("/")
    return f"{browser_url}/address/{to_checksum_address(address)}#code"


class ExplorerClient:
    """Read-only client for an Etherscan-compatible explorer API."""

    def __init__(self, explorer_urls: ExplorerUrls, api_key: Optional[str] = None):
        self.explorer_urls = explorer_urls
        self.api_key = api_key

    def get_address_url(self, address: str) -> str:
        return address_url(self.explorer_urls, address)

    def get_source_code(self, address: str) -> dict:
        params = {
            "module": "contract",
            "action": "getsourcecode",
            "address": to_checksum_address(address),
        }
        if self.api_key:
            params["apikey"] = self.api_key

        response = requests.get(self.explorer_urls.api_url, params=params)
        response.raise_for_status()

        data = response.json()
        result = data.get("result")
        if not isinstance(result, list) or not result:
            # explorers answer errors with a message string in "result"
            return dict()
        return result[0]

    def is_verified(self, address: str) -> bool:
        source = self.get_source_code(address)
        return bool(source.get("SourceCode"))
