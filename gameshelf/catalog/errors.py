"""Exceptions raised while building the game catalog."""
from __future__ import annotations


class CatalogError(Exception):
    """Base class for catalog seeding failures."""


class ExternalError(CatalogError):
    """A call to the Steam APIs did not produce a usable answer."""


class TransientExternalError(ExternalError):
    """The store asked us to slow down (HTTP 429) or temporarily refused (HTTP 403)."""

    def __init__(self, app_id: int, status_code: int) -> None:
        super().__init__(f"app {app_id} returned retryable status {status_code}")
        self.app_id = app_id
        self.status_code = status_code


class PermanentExternalError(ExternalError):
    """The payload is unusable and retrying will not change that."""


class RecordRejected(PermanentExternalError):
    """A detail record is not a standalone catalog game."""

    def __init__(self, reason: str, app_id: int | None = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.app_id = app_id


class UniverseFetchError(ExternalError):
    """The one-time app listing call failed; seeding cannot proceed."""


class PersistenceError(CatalogError):
    """A single catalog row could not be written."""

    def __init__(self, row_id: int, message: str) -> None:
        super().__init__(f"game {row_id}: {message}")
        self.row_id = row_id
