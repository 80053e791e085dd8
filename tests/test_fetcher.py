"""Tests for the Steam listing and detail client."""

from __future__ import annotations

import pytest
import requests

from gameshelf.catalog.errors import UniverseFetchError
from gameshelf.catalog.fetcher import (
    APP_DETAILS_URL,
    APP_LIST_URL,
    DetailFetcher,
    RetryPolicy,
    UniverseEntry,
)
from gameshelf.logging_service import log_manager
from steam_fakes import FakeResponse, FakeSteamSession, SleepRecorder, detail_response


@pytest.fixture(autouse=True)
def app_context(app):
    with app.app_context():
        yield


def _fetcher(session, **options):
    options.setdefault("sleep", SleepRecorder())
    return DetailFetcher(session=session, **options)


def test_fetch_detail_returns_record_data():
    session = FakeSteamSession()
    fetcher = _fetcher(session)

    record = fetcher.fetch_detail(620)

    assert record["name"] == "Game 620"
    assert session.calls == [(APP_DETAILS_URL, {"appids": 620})]


def test_three_rate_limited_responses_exhaust_the_budget():
    session = FakeSteamSession(details={7: [FakeResponse(429)]})
    sleep = SleepRecorder()
    fetcher = _fetcher(session, sleep=sleep, retry_policy=RetryPolicy(max_attempts=3, backoff=0.5))

    assert fetcher.fetch_detail(7) is None
    assert session.detail_calls(7) == 3
    assert sleep.calls == [0.5, 0.5]

    warnings = log_manager.fetch_logs(level="warn", component="Seeding")
    assert any(entry["title"] == "Store lookup gave up" for entry in warnings)


def test_forbidden_response_is_retried_then_succeeds():
    session = FakeSteamSession(details={7: [FakeResponse(403), detail_response(7)]})
    fetcher = _fetcher(session)

    record = fetcher.fetch_detail(7)

    assert record["steam_appid"] == 7
    assert session.detail_calls(7) == 2


def test_retry_policy_is_configurable():
    session = FakeSteamSession(details={7: [FakeResponse(429)]})
    sleep = SleepRecorder()
    fetcher = _fetcher(session, sleep=sleep, retry_policy=RetryPolicy(max_attempts=5, backoff=2))

    assert fetcher.fetch_detail(7) is None
    assert session.detail_calls(7) == 5
    assert sleep.calls == [2, 2, 2, 2]


@pytest.mark.parametrize(
    "response",
    [
        FakeResponse(500),
        FakeResponse(404),
        FakeResponse(200, invalid_json=True),
        requests.ConnectionError("connection reset"),
    ],
)
def test_other_failures_are_absent_without_retry(response):
    session = FakeSteamSession(details={7: [response]})
    fetcher = _fetcher(session)

    assert fetcher.fetch_detail(7) is None
    assert session.detail_calls(7) == 1
    assert log_manager.fetch_logs(level="error", component="Seeding")


@pytest.mark.parametrize(
    "payload",
    [
        {"7": {"success": False}},
        {"7": {"success": True}},
        {"8": {"success": True, "data": {"name": "Other"}}},
        ["unexpected"],
    ],
)
def test_unsuccessful_payloads_are_absent(payload):
    session = FakeSteamSession(details={7: [FakeResponse(200, payload)]})

    assert _fetcher(session).fetch_detail(7) is None


def test_fetch_many_pauses_between_requests():
    session = FakeSteamSession()
    sleep = SleepRecorder()
    fetcher = _fetcher(session, sleep=sleep, request_delay=0.5)
    entries = [UniverseEntry(id=app_id, name="") for app_id in (1, 2, 3)]

    results = list(fetcher.fetch_many(entries))

    assert [entry.id for entry, _ in results] == [1, 2, 3]
    assert all(record is not None for _, record in results)
    assert sleep.calls == [0.5, 0.5]


def test_fetch_universe_reads_current_shape():
    apps = [{"appid": 10, "name": "Counter-Strike"}, {"appid": 20, "name": "Team Fortress Classic"}]
    session = FakeSteamSession(apps=apps)

    universe = _fetcher(session).fetch_universe()

    assert universe == [
        UniverseEntry(id=10, name="Counter-Strike"),
        UniverseEntry(id=20, name="Team Fortress Classic"),
    ]


def test_fetch_universe_reads_nested_legacy_shape_and_skips_bad_entries():
    payload = {
        "applist": {
            "apps": {
                "app": [
                    {"appid": 10, "name": "Counter-Strike"},
                    {"appid": "oops", "name": "Broken"},
                    {"name": "No id"},
                    "junk",
                    {"appid": 30},
                ]
            }
        }
    }
    session = FakeSteamSession(list_response=FakeResponse(200, payload))

    universe = _fetcher(session).fetch_universe()

    assert universe == [UniverseEntry(id=10, name="Counter-Strike"), UniverseEntry(id=30, name="")]


def test_fetch_universe_sends_api_key():
    session = FakeSteamSession(apps=[])

    _fetcher(session, api_key="secret").fetch_universe()

    assert session.calls == [(APP_LIST_URL, {"key": "secret"})]


@pytest.mark.parametrize(
    "list_response",
    [
        FakeResponse(500),
        FakeResponse(200, invalid_json=True),
        FakeResponse(200, {"unexpected": True}),
        FakeResponse(200, {"applist": {"apps": "none"}}),
        requests.Timeout("timed out"),
    ],
)
def test_fetch_universe_failures_raise(list_response):
    session = FakeSteamSession(list_response=list_response)

    with pytest.raises(UniverseFetchError):
        _fetcher(session).fetch_universe()


def test_from_config_reads_settings(app):
    fetcher = DetailFetcher.from_config(
        {
            "STEAM_API_KEY": "k",
            "CATALOG_RETRY_ATTEMPTS": 4,
            "CATALOG_RETRY_BACKOFF": 1.5,
            "CATALOG_REQUEST_DELAY": 0.25,
            "CATALOG_REQUEST_TIMEOUT": 3,
        },
        session=FakeSteamSession(),
    )

    assert fetcher.api_key == "k"
    assert fetcher.retry_policy == RetryPolicy(max_attempts=4, backoff=1.5)
    assert fetcher.request_delay == 0.25
    assert fetcher.timeout == 3


@pytest.mark.parametrize(("attempts", "backoff"), [(0, 0.5), (3, -1)])
def test_retry_policy_rejects_invalid_values(attempts, backoff):
    with pytest.raises(ValueError):
        RetryPolicy(max_attempts=attempts, backoff=backoff)
