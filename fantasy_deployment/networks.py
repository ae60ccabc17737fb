import os
import re
from pathlib import Path
from string import Template
from typing import Dict, List, Mapping, NamedTuple, Optional, Tuple

from dotenv import load_dotenv

from fantasy_deployment.constants import LOCAL_CHAIN_IDS, LOCAL_NETWORKS, NETWORKS_FILEPATH
from fantasy_deployment.utils import _load_yaml

DEFAULT_ECOSYSTEM = "ethereum"
PLACEHOLDER_PATTERN = re.compile(r"\$\{(\w+)\}")


class NetworkConfigError(ValueError):
    pass


class ExplorerUrls(NamedTuple):
    api_url: str
    browser_url: str


class NetworkProfile(NamedTuple):
    """Connection and explorer parameters for a single named network."""

    name: str
    rpc_url: Optional[str]
    credential: Optional[str]
    chain_id: Optional[int] = None
    explorer_api_key: Optional[str] = None
    explorer_urls: Optional[ExplorerUrls] = None
    gas_limit: Optional[int] = None
    network_choice: Optional[str] = None
    custom: bool = False

    @property
    def is_local(self) -> bool:
        return self.name in LOCAL_NETWORKS or self.chain_id in LOCAL_CHAIN_IDS

    @property
    def ecosystem_name(self) -> str:
        return self._ape_network()[0]

    @property
    def ape_network_name(self) -> str:
        return self._ape_network()[1]

    def _ape_network(self) -> Tuple[str, str]:
        if not self.network_choice or "://" in self.network_choice:
            # ad-hoc connections to an RPC URL
            return DEFAULT_ECOSYSTEM, "custom"
        ecosystem, network, *_ = self.network_choice.split(":") + [""]
        return ecosystem, network

    def get_network_choice(self) -> str:
        """Returns the ape network choice used to connect to this network."""
        if self.network_choice:
            return self.network_choice
        if not self.rpc_url:
            raise NetworkConfigError(f"No RPC URL or network choice configured for '{self.name}'.")
        return self.rpc_url

    def get_provider_settings(self) -> Dict[str, str]:
        if self.network_choice and self.rpc_url:
            return {"uri": self.rpc_url}
        return {}

    def get_overrides(self) -> Dict[str, int]:
        """Transaction overrides applied when deploying on this network."""
        if self.gas_limit is None:
            return {}
        return {"gas_limit": self.gas_limit}


def _interpolate(value, environ: Mapping[str, str]) -> Optional[str]:
    """
    Substitutes ${VAR} placeholders from the environment.
    Returns None if any placeholder cannot be resolved.
    """
    if value is None:
        return None
    value = str(value).strip()
    for variable in PLACEHOLDER_PATTERN.findall(value):
        if not environ.get(variable):
            return None
    return Template(value).safe_substitute(environ)


def _parse_explorer(
    network_name: str, explorer: Optional[Dict], environ: Mapping[str, str]
) -> Tuple[Optional[str], Optional[ExplorerUrls]]:
    if not explorer:
        return None, None
    if not isinstance(explorer, dict):
        raise NetworkConfigError(f"Malformed explorer config for '{network_name}'.")

    api_key = _interpolate(explorer.get("api_key"), environ)
    api_url = _interpolate(explorer.get("api_url"), environ)
    browser_url = _interpolate(explorer.get("browser_url"), environ)
    if bool(api_url) != bool(browser_url):
        raise NetworkConfigError(
            f"Explorer for '{network_name}' needs both 'api_url' and 'browser_url'."
        )

    urls = ExplorerUrls(api_url=api_url, browser_url=browser_url) if api_url else None
    return api_key, urls


def _parse_profile(
    network_name: str, data: Dict, defaults: Dict, environ: Mapping[str, str]
) -> NetworkProfile:
    if not isinstance(data, dict):
        raise NetworkConfigError(f"Malformed network config for '{network_name}'.")

    merged = dict(defaults)
    merged.update(data)

    chain_id = merged.get("chain_id")
    gas_limit = merged.get("gas_limit")
    explorer_api_key, explorer_urls = _parse_explorer(
        network_name, merged.get("explorer"), environ
    )
    profile = NetworkProfile(
        name=network_name,
        rpc_url=_interpolate(merged.get("rpc_url"), environ),
        credential=_interpolate(merged.get("credential"), environ),
        chain_id=int(chain_id) if chain_id is not None else None,
        explorer_api_key=explorer_api_key,
        explorer_urls=explorer_urls,
        gas_limit=int(gas_limit) if gas_limit is not None else None,
        network_choice=merged.get("network_choice"),
        custom=bool(merged.get("custom", False)),
    )
    return profile


def load_network_registry(
    filepath: Path = NETWORKS_FILEPATH, environ: Optional[Mapping[str, str]] = None
) -> Dict[str, NetworkProfile]:
    """Loads the network registry YAML, interpolating secrets from the environment."""
    if environ is None:
        load_dotenv()
        environ = os.environ

    config = _load_yaml(filepath) or dict()
    networks_config = config.get("networks")
    if not networks_config:
        raise NetworkConfigError(f"No networks defined in {filepath}.")
    defaults = config.get("defaults") or dict()

    registry = dict()
    for network_name, data in networks_config.items():
        registry[network_name] = _parse_profile(network_name, data, defaults, environ)
    return registry


def get_network_profile(
    network_name: str, registry: Optional[Dict[str, NetworkProfile]] = None
) -> NetworkProfile:
    registry = registry if registry is not None else load_network_registry()
    try:
        return registry[network_name]
    except KeyError:
        raise NetworkConfigError(
            f"Unknown network '{network_name}'; expected one of {', '.join(sorted(registry))}."
        )


def supported_network_names(filepath: Path = NETWORKS_FILEPATH) -> List[str]:
    """Network names in registry order, without resolving any secrets."""
    config = _load_yaml(filepath) or dict()
    return list(config.get("networks") or dict())


def validate_profile(profile: NetworkProfile, chain_id: Optional[int] = None) -> None:
    """
    Checks that a profile is usable for a live deployment and that it
    matches the chain the provider is connected to.
    """
    if profile.is_local:
        return
    if not profile.rpc_url:
        raise NetworkConfigError(
            f"RPC URL for '{profile.name}' is not set; check the provider API key variables."
        )
    chain_mismatch = (
        chain_id is not None and profile.chain_id is not None and chain_id != profile.chain_id
    )
    if chain_mismatch:
        raise NetworkConfigError(
            f"chain_id in network registry ({profile.chain_id}) does not match "
            f"chain_id of current network ({chain_id})."
        )


def build_ape_network_config(registry: Dict[str, NetworkProfile]) -> Dict:
    """
    Builds the ape-config.yaml sections declaring the registry's custom
    networks and pointing ape-etherscan at their explorer endpoints.
    """
    custom_networks = list()
    explorers = dict()
    for profile in registry.values():
        if not profile.custom:
            continue
        if profile.chain_id is None:
            raise NetworkConfigError(f"Custom network '{profile.name}' needs a chain_id.")
        custom_networks.append(
            {
                "name": profile.ape_network_name,
                "chain_id": profile.chain_id,
                "ecosystem": profile.ecosystem_name,
                "default_provider": "node",
            }
        )
        if profile.explorer_urls:
            ecosystem_explorers = explorers.setdefault(profile.ecosystem_name, dict())
            ecosystem_explorers[profile.ape_network_name] = {
                "uri": profile.explorer_urls.browser_url,
                "api_uri": profile.explorer_urls.api_url,
            }

    return {"networks": {"custom": custom_networks}, "etherscan": explorers}
