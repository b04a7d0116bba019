"""Tests for the HTTP endpoints."""

from datetime import datetime, timedelta, timezone

import pytest

from conftest import T0, T0_NS, FakeClock, units
from snooflake import create_app
from snooflake.codec import MAX_ID, MAX_TIME, encode
from snooflake.config import TestingConfig
from snooflake.ids import Generator
from snooflake.utils.errors import FutureEpochError
from snooflake.utils.network import fixed_machine_id


def _client(generator):
    return create_app("testing", generator=generator).test_client()


@pytest.fixture
def client(generator):
    return _client(generator)


@pytest.fixture
def exhausted():
    clock = FakeClock(T0_NS + units(MAX_TIME - 1))
    return Generator(epoch=T0, machine_id=fixed_machine_id(1), clock=clock, sleep=clock.sleep)


def test_next_id_returns_decomposition(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.mimetype == "application/json"
    body = response.get_json()
    assert set(body) == {"id", "msb", "time", "sequence", "machine-id"}
    assert body["time"] == 2
    assert body["sequence"] == 0
    assert body["machine-id"] == 0x0102
    assert body["msb"] == 0
    assert body["id"] == encode(2, 0, 0x0102)


def test_next_id_increases_across_requests(client):
    first = client.get("/").get_json()["id"]
    second = client.get("/").get_json()["id"]
    assert second > first


def test_next_id_overflow_is_a_server_error(exhausted):
    client = _client(exhausted)
    exhausted.next_ids(256)
    response = client.get("/")
    assert response.status_code == 500
    assert response.get_data(as_text=True) == "over the time limit"


def test_batch(client):
    response = client.get("/batch?count=3")
    assert response.status_code == 200
    body = response.get_json()
    assert [item["sequence"] for item in body] == [0, 1, 2]


@pytest.mark.parametrize("query", ["", "?count=abc", "?count=-1", "?count=1001"])
def test_batch_rejects_bad_counts(client, query):
    assert client.get(f"/batch{query}").status_code == 400


def test_batch_partial_failure_keeps_ids(exhausted):
    response = _client(exhausted).get("/batch?count=300")
    assert response.status_code == 500
    body = response.get_json()
    assert body["error"] == "over the time limit"
    assert len(body["ids"]) == 256


def test_decompose(client):
    snowflake = encode(10, 3, 99)
    body = client.get(f"/decompose?id={snowflake}").get_json()
    assert body == {"id": snowflake, "msb": 0, "time": 10, "sequence": 3, "machine-id": 99}


def test_decompose_max_value(client):
    body = client.get(f"/decompose?id={MAX_ID}").get_json()
    assert body["msb"] == 1


@pytest.mark.parametrize("query", ["", "?id=x", "?id=-1", f"?id={MAX_ID + 1}"])
def test_decompose_rejects_bad_ids(client, query):
    assert client.get(f"/decompose{query}").status_code == 400


def test_app_builds_its_generator_from_config():
    client = create_app("testing").test_client()
    assert client.get("/").get_json()["machine-id"] == 1


def test_app_refuses_to_start_with_a_future_epoch(monkeypatch):
    monkeypatch.setattr(TestingConfig, "EPOCH", datetime.now(timezone.utc) + timedelta(hours=1))
    with pytest.raises(FutureEpochError):
        create_app("testing")
