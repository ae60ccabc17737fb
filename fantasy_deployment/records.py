import re
from pathlib import Path
from typing import List, NamedTuple

from fantasy_deployment.constants import DEPLOYMENTS_FILEPATH

RECORD_PATTERN = re.compile(r"^\[(?P<label>[^\]]+)\]\((?P<url>.*)\)$")


class DeploymentRecord(NamedTuple):
    """A verified deployment, persisted as a markdown link."""

    network: str
    verification_url: str


def _format_label(network: str) -> str:
    return network[:1].upper() + network[1:]


def format_record(record: DeploymentRecord) -> str:
    return f"[{_format_label(record.network)}]({record.verification_url})"


def _network_pattern(network: str) -> re.Pattern:
    return re.compile(rf"^\[{re.escape(network)}\]\(.*\)$", re.IGNORECASE | re.MULTILINE)


def _read_content(filepath: Path) -> str:
    if not filepath.exists():
        return ""
    return filepath.read_text(encoding="utf-8").strip()


def save_verification_url(
    verification_url: str, network: str, filepath: Path = DEPLOYMENTS_FILEPATH
) -> Path:
    """
    Writes the network's verification link to the deployments file, replacing
    the existing line for that network or appending a new one.
    """
    filepath = Path(filepath)
    content = _read_content(filepath)
    record = DeploymentRecord(network=network, verification_url=verification_url)
    markdown_link = format_record(record)

    pattern = _network_pattern(network)
    if pattern.search(content):
        content = pattern.sub(lambda match: markdown_link, content, count=1)
    else:
        content += ("\n" if content else "") + markdown_link

    filepath.write_text(content + "\n", encoding="utf-8")
    print(f"Saved verification URL to {filepath.name}: {verification_url}")
    return filepath


def read_deployment_records(filepath: Path = DEPLOYMENTS_FILEPATH) -> List[DeploymentRecord]:
    """Parses the link lines of a deployments file; other lines are ignored."""
    records = list()
    for line in _read_content(Path(filepath)).splitlines():
        match = RECORD_PATTERN.match(line.strip())
        if not match:
            continue
        label = match.group("label")
        network = label[:1].lower() + label[1:]
        records.append(DeploymentRecord(network=network, verification_url=match.group("url")))
    return records
