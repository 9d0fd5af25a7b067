"""Exception hierarchy for ensgraph.

Every subclass carries the HTTP status the API layer answers with.
"""

from __future__ import annotations


class EnsGraphError(Exception):
    """Base exception for all ensgraph errors."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidName(EnsGraphError):
    """ENS name is empty or fails ENSIP-15 normalization."""

    status_code = 400


class InvalidRequest(EnsGraphError):
    """Connection request is missing a name or points a node at itself."""

    status_code = 400


class ResolutionError(EnsGraphError):
    """The name-resolution client could not resolve an address."""

    status_code = 502


class StoreError(EnsGraphError):
    """Connection store operation failed (connectivity, unexpected constraint)."""

    status_code = 500
