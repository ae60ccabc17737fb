from pathlib import Path
from typing import List, NamedTuple, Optional

FIELD_SEPARATOR = ","


class ConstructorArgumentRow(NamedTuple):
    """A single network's line of the constructor arguments table."""

    network_name: str
    args: List[str]


def _parse_line(line: str) -> Optional[ConstructorArgumentRow]:
    if not line.strip():
        return None
    network_name, *fields = line.split(FIELD_SEPARATOR)
    # empty positional fields are dropped, not kept as ""
    args = [field.strip() for field in fields]
    return ConstructorArgumentRow(network_name=network_name.strip(), args=[a for a in args if a])


def read_constructor_argument_rows(filepath: Path) -> List[ConstructorArgumentRow]:
    """Parses every row of a network constructor arguments table."""
    with open(filepath, "r", encoding="utf-8") as file:
        content = file.read()

    rows = list()
    for line in content.splitlines():
        row = _parse_line(line)
        if row is not None:
            rows.append(row)
    return rows


def read_constructor_arguments(network: str, filepath: Path) -> List[str]:
    """
    Returns the constructor arguments listed for `network`, or an empty list
    if the table has no row for it. The first matching row wins.
    """
    for row in read_constructor_argument_rows(filepath):
        if row.network_name == network:
            return row.args
    return []


def has_dropped_fields(network: str, filepath: Path) -> bool:
    """True if the network's row contains empty interior fields that were dropped."""
    with open(filepath, "r", encoding="utf-8") as file:
        for line in file.read().splitlines():
            network_name, *fields = line.split(FIELD_SEPARATOR)
            if network_name.strip() != network:
                continue
            stripped = [field.strip() for field in fields]
            while stripped and not stripped[-1]:
                stripped.pop()
            return any(not field for field in stripped)
    return False
