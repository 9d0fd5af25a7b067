"""Resolved profiles kept in session state, one entry per ENS name."""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any

PROFILES_KEY = "profiles"
SELECTED_NODE_KEY = "selected_node"


def remember_profile(state: MutableMapping, ens_name: str, profile: dict[str, Any] | None) -> None:
    state.setdefault(PROFILES_KEY, {})[ens_name] = profile


def cached_profile(state: MutableMapping, ens_name: str | None) -> dict[str, Any] | None:
    if not ens_name:
        return None
    return state.get(PROFILES_KEY, {}).get(ens_name)


def selected_profile(state: MutableMapping) -> dict[str, Any] | None:
    """Profile of the node picked on the Network page, whatever else was looked up since."""
    return cached_profile(state, state.get(SELECTED_NODE_KEY))
