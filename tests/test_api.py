"""Tests for the registered API functions and the HTTP server."""

import orjson
import pytest
from fastapi.testclient import TestClient

from lantern_calendar.api import api_state, call_api, get_api_functions
from lantern_calendar.data import SnapshotStore
from lantern_calendar.services import ServiceContext
from lantern_calendar.services.http import app


@pytest.fixture
def api(context):
    previous = api_state.context
    api_state.use(context)
    yield api_state
    api_state.use(previous)


@pytest.fixture
def client(api):
    return TestClient(app)


def test_registry_lists_engine_functions():
    names = {func.name for func in get_api_functions()}

    assert {
        "calendar_month_grid",
        "calendar_day_agenda",
        "calendar_expand_recurrence",
        "reminders_classify",
        "calendar_solar_term",
        "calendar_solar_terms_for_year",
        "calendar_lunisolar_label",
        "calendar_holidays",
        "list_available_tools",
    } <= names
    schema = next(func for func in get_api_functions() if func.name == "calendar_expand_recurrence").parameter_schema
    assert schema["properties"]["interval"] == {"type": "integer", "default": 1}
    assert schema["required"] == ["anchor", "frequency", "range_start", "range_end"]


def test_month_grid(api):
    result = call_api("calendar_month_grid", month="2025-10", week_start="monday", today="2025-10-15")

    assert result["month"] == "2025-10"
    assert result["first_weekday"] == 0
    assert len(result["days"]) == 35
    assert result["days"][0]["date"] == "2025-09-29"
    assert result["days"][0]["in_month"] is False
    mid_autumn = next(day for day in result["days"] if day["date"] == "2025-10-06")
    assert mid_autumn["holidays"] == ["中秋节"]
    assert mid_autumn["lunar_short"] == "十五"
    assert [event["id"] for event in mid_autumn["events"]] == ["evt-holiday", "evt-standup"]


def test_month_grid_rejects_bad_week_start(api):
    with pytest.raises(ValueError):
        call_api("calendar_month_grid", month="2025-10", week_start="friday")


def test_day_agenda(api):
    result = call_api("calendar_day_agenda", day="2025-10-08", today="2025-10-15")

    assert result["date"] == "2025-10-08"
    assert [(item["kind"], item["reminder_id"]) for item in result["items"]] == [("reminder", "rem-plants")]
    assert result["items"][0]["due"] == "2025-10-08T08:30:00+08:00"


def test_expand_recurrence(api):
    result = call_api(
        "calendar_expand_recurrence",
        anchor="2025-01-15",
        frequency="weekly",
        range_start="2025-06-01",
        range_end="2025-06-30",
        interval=2,
    )

    assert result["rule"] == {"frequency": "weekly", "interval": 2}
    assert result["occurrences"] == ["2025-06-04", "2025-06-18"]


def test_expand_recurrence_with_unknown_frequency(api):
    result = call_api(
        "calendar_expand_recurrence",
        anchor="2025-06-10",
        frequency="hourly",
        range_start="2025-06-01",
        range_end="2025-06-30",
    )

    assert result["rule"] is None
    assert result["occurrences"] == ["2025-06-10"]


def test_reminders_classify(api):
    result = call_api("reminders_classify", today="2025-10-15")

    assert [item["reminder_id"] for item in result["overdue"]] == ["rem-rent", "rem-plants"]
    rent = result["overdue"][0]
    assert rent["priority_text"] == "!!!"
    assert (rent["cycle_start"], rent["cycle_end"]) == ("2025-01-05", "2025-02-04")
    assert [item["reminder_id"] for item in result["one_time"]] == ["rem-visa"]
    assert result["multi_year"] == {}


def test_almanac_functions(api):
    assert call_api("calendar_solar_term", day="2025-02-03")["solar_term"] == "立春"
    assert len(call_api("calendar_solar_terms_for_year", year=2025)["terms"]) == 24
    assert call_api("calendar_holidays", day="2025-01-01", lunar_month=12, lunar_day=2)["holidays"] == ["元旦"]

    leap = call_api("calendar_lunisolar_label", day="2025-07-25")
    assert (leap["short"], leap["full"], leap["is_leap"]) == ("闰六月", "闰六月初一", True)

    outside = call_api("calendar_lunisolar_label", day="2150-01-01")
    assert outside["supported"] is False
    assert outside["short"] is None


def test_call_api_errors():
    with pytest.raises(KeyError):
        call_api("calendar_unknown")
    with pytest.raises(ValueError):
        call_api("calendar_solar_term")
    with pytest.raises(ValueError):
        call_api("calendar_solar_term", day="not-a-date")


def test_http_list_functions(client):
    response = client.get("/api/functions", params={"category": "almanac"})

    assert response.status_code == 200
    names = {item["name"] for item in response.json()["functions"]}
    assert names == {
        "calendar_holidays",
        "calendar_lunisolar_label",
        "calendar_solar_term",
        "calendar_solar_terms_for_year",
    }


def test_http_invoke(client):
    response = client.post("/api/functions/calendar_solar_term", json={"arguments": {"day": "2025-12-21"}})

    assert response.status_code == 200
    assert response.json() == {
        "name": "calendar_solar_term",
        "result": {"date": "2025-12-21", "solar_term": "冬至"},
    }


def test_http_errors(client):
    assert client.post("/api/functions/calendar_unknown", json={}).status_code == 404
    bad = client.post("/api/functions/calendar_solar_term", json={"arguments": {"day": "2025-13-40"}})
    assert bad.status_code == 400
    assert "Invalid ISO date" in bad.json()["detail"]


def test_http_convenience_routes(client):
    month = client.get("/api/months/2025-10", params={"week_start": "sunday"})
    assert month.status_code == 200
    assert month.json()["days"][0]["date"] == "2025-09-28"

    day = client.get("/api/days/2025-10-06")
    assert [item["id"] for item in day.json()["items"]] == ["evt-holiday", "evt-standup"]

    assert client.get("/api/months/October").status_code == 400
    assert client.get("/health").json()["status"] == "ok"


def test_http_malformed_snapshot_is_bad_request(settings, tmp_path, tz):
    path = tmp_path / "broken.json"
    path.write_bytes(orjson.dumps({"events": [{"title": "No id", "start": "2025-10-06T09:00:00+08:00"}]}))
    previous = api_state.context
    api_state.use(ServiceContext(settings=settings, source=SnapshotStore(path, tz=tz)))
    try:
        response = TestClient(app).get("/api/months/2025-10")
    finally:
        api_state.use(previous)

    assert response.status_code == 400
    assert "missing 'id'" in response.json()["detail"]


def test_holidays_respect_leap_flag(api):
    assert call_api("calendar_holidays", day="2025-06-30", lunar_month=5, lunar_day=5)["holidays"] == ["端午节"]
    leap = call_api("calendar_holidays", day="2025-06-30", lunar_month=5, lunar_day=5, is_leap=True)
    assert leap["holidays"] == []
