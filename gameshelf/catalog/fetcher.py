"""HTTP access to the Steam app listing and store detail endpoints."""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator, Mapping, Optional

import requests

from ..logging_service import log_manager
from .errors import PermanentExternalError, TransientExternalError, UniverseFetchError

APP_LIST_URL = "https://api.steampowered.com/ISteamApps/GetAppList/v2/"
APP_DETAILS_URL = "https://store.steampowered.com/api/appdetails"

RETRYABLE_STATUSES = frozenset({403, 429})

DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/91.0.4472.124 Safari/537.36"
    ),
    "Accept": "application/json",
}

RawDetailRecord = dict[str, Any]


@dataclass(frozen=True)
class UniverseEntry:
    """One candidate app from the Steam listing."""

    id: int
    name: str


@dataclass(frozen=True)
class RetryPolicy:
    """How often and how patiently a rate-limited lookup is retried."""

    max_attempts: int = 3
    backoff: float = 0.5

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.backoff < 0:
            raise ValueError("backoff cannot be negative")


def _parse_universe(payload: Any) -> list[UniverseEntry]:
    """Extract app entries from either GetAppList response shape."""

    try:
        apps = payload["applist"]["apps"]
    except (KeyError, TypeError) as exc:
        raise UniverseFetchError("app list response is missing applist.apps") from exc
    if isinstance(apps, Mapping):
        # v1 nests the list one level deeper
        apps = apps.get("app", [])
    if not isinstance(apps, list):
        raise UniverseFetchError("app list response has no list of apps")

    entries: list[UniverseEntry] = []
    for app in apps:
        if not isinstance(app, Mapping):
            continue
        app_id = app.get("appid")
        if isinstance(app_id, bool) or not isinstance(app_id, int):
            continue
        entries.append(UniverseEntry(id=app_id, name=str(app.get("name") or "")))
    return entries


class DetailFetcher:
    """Sequential, rate-limited client for the Steam catalog endpoints."""

    def __init__(
        self,
        *,
        session: Optional[requests.Session] = None,
        api_key: str = "",
        retry_policy: Optional[RetryPolicy] = None,
        request_delay: float = 0.5,
        timeout: float = 10,
        sleep: Callable[[float], None] = time.sleep,
        correlation_id: Optional[str] = None,
    ) -> None:
        self.session = session or requests.Session()
        self.api_key = api_key
        self.retry_policy = retry_policy or RetryPolicy()
        self.request_delay = request_delay
        self.timeout = timeout
        self.sleep = sleep
        self.correlation_id = correlation_id

    @classmethod
    def from_config(cls, config: Mapping[str, Any], **overrides: Any) -> "DetailFetcher":
        """Build a fetcher from Flask configuration values."""

        options: dict[str, Any] = {
            "api_key": config.get("STEAM_API_KEY", ""),
            "retry_policy": RetryPolicy(
                max_attempts=config.get("CATALOG_RETRY_ATTEMPTS", 3),
                backoff=config.get("CATALOG_RETRY_BACKOFF", 0.5),
            ),
            "request_delay": config.get("CATALOG_REQUEST_DELAY", 0.5),
            "timeout": config.get("CATALOG_REQUEST_TIMEOUT", 10),
        }
        options.update(overrides)
        return cls(**options)

    def fetch_universe(self) -> list[UniverseEntry]:
        """Return every app the Steam listing knows about.

        Raises :class:`UniverseFetchError` on any failure; there is no
        partial listing.
        """

        params = {"key": self.api_key} if self.api_key else None
        try:
            response = self.session.get(
                APP_LIST_URL, params=params, headers=DEFAULT_HEADERS, timeout=self.timeout
            )
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as exc:
            raise UniverseFetchError(f"app list request failed: {exc}") from exc
        except ValueError as exc:
            raise UniverseFetchError(f"app list response is not JSON: {exc}") from exc
        return _parse_universe(payload)

    def _request_detail(self, app_id: int) -> Optional[RawDetailRecord]:
        try:
            response = self.session.get(
                APP_DETAILS_URL,
                params={"appids": app_id},
                headers=DEFAULT_HEADERS,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise PermanentExternalError(f"request for app {app_id} failed: {exc}") from exc

        if response.status_code in RETRYABLE_STATUSES:
            raise TransientExternalError(app_id, response.status_code)
        if not response.ok:
            raise PermanentExternalError(f"app {app_id} returned HTTP {response.status_code}")

        try:
            payload = response.json()
        except ValueError as exc:
            raise PermanentExternalError(f"app {app_id} returned invalid JSON") from exc

        entry = payload.get(str(app_id)) if isinstance(payload, Mapping) else None
        if not isinstance(entry, Mapping) or not entry.get("success"):
            return None
        data = entry.get("data")
        return dict(data) if isinstance(data, Mapping) else None

    def fetch_detail(self, app_id: int) -> Optional[RawDetailRecord]:
        """Return the store record for ``app_id``, or None when unavailable.

        Rate-limit responses are retried under the retry policy. Every other
        failure, and an exhausted retry budget, yields None; nothing raises.
        """

        policy = self.retry_policy
        attempt = 0
        while True:
            attempt += 1
            try:
                return self._request_detail(app_id)
            except TransientExternalError as exc:
                if attempt >= policy.max_attempts:
                    log_manager.record(
                        component="Seeding",
                        action="fetch-detail",
                        level="warn",
                        result="skipped",
                        title="Store lookup gave up",
                        user_summary=f"App {app_id} stayed rate limited and was skipped.",
                        technical_details=(
                            f"DetailFetcher exhausted {policy.max_attempts} attempts;"
                            f" last status {exc.status_code}."
                        ),
                        correlation_id=self.correlation_id,
                    )
                    return None
                log_manager.record(
                    component="Seeding",
                    action="fetch-detail",
                    level="warn",
                    result="retry",
                    title="Store lookup rate limited",
                    user_summary=f"App {app_id} was rate limited; retrying shortly.",
                    technical_details=(
                        f"status {exc.status_code} on attempt {attempt}/{policy.max_attempts};"
                        f" sleeping {policy.backoff}s."
                    ),
                    correlation_id=self.correlation_id,
                )
                self.sleep(policy.backoff)
            except PermanentExternalError as exc:
                log_manager.record(
                    component="Seeding",
                    action="fetch-detail",
                    level="error",
                    result="skipped",
                    title="Store lookup failed",
                    user_summary=f"App {app_id} could not be fetched and was skipped.",
                    technical_details=f"{exc.__class__.__name__}: {exc}",
                    correlation_id=self.correlation_id,
                )
                return None

    def fetch_many(
        self, entries: Iterable[UniverseEntry]
    ) -> Iterator[tuple[UniverseEntry, Optional[RawDetailRecord]]]:
        """Fetch details one at a time, pausing between successive requests."""

        for position, entry in enumerate(entries):
            if position:
                self.sleep(self.request_delay)
            yield entry, self.fetch_detail(entry.id)
