from __future__ import annotations

from typing import Iterable


def namespace_name(owner: str, suffix: str, existing_names: Iterable[str] = ()) -> str:
    """Name of the namespace holding the generated code of ``owner``.

    The name only depends on the owner and on the names already bound in the
    module, so the same input always yields the same name.
    """
    base = f"{owner}{suffix}"
    existing = set(existing_names)
    name = base
    counter = 2
    while name in existing:
        name = f"{base}{counter}"
        counter += 1
    return name


def display_name(owner: str, prop: str) -> str:
    return f"{owner}::{prop}"


def argument_name(prop: str) -> str:
    # Applied literally: consecutive underscores give consecutive dashes.
    return prop.replace("_", "-").lower()


def key_path(namespace: str, prop: str) -> str:
    return f"{namespace}.{prop}.Key"
