from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Employee:
    manager_number: str
    name: str


def display_name(names: dict[str, str], manager_number: str) -> str:
    """Name for reports; unknown employees fall back to their number."""
    return names.get(str(manager_number)) or f"#{manager_number}"
