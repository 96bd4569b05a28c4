from __future__ import annotations

import base64
import json

import pytest

from catalog_cache.models import DiscoveryResponse
from catalog_cache.storage.memory import MODEL_CARD_MAX_SERVES

V1_PATH = "/mnist/v1/catalog-info.yaml"
V2_PATH = "/mnist/v2/catalog-info.yaml"


def _upsert(client, key, body=b"", card_key="", card="", token=""):
    payload = {
        "body": base64.b64encode(body).decode("ascii"),
        "modelCardKey": card_key,
        "modelCard": card,
        "lastUpdateTimeSinceEpoch": token,
    }
    return client.post(f"/upsert?key={key}", json=payload)


def test_discovery_empty_store(client):
    response = client.get("/list")
    assert response.status_code == 200
    assert response.get_json() == {"uris": []}


def test_upsert_creates_then_updates_entry(client):
    response = _upsert(client, "mnist_v1", b"create")
    assert response.status_code == 201

    response = client.get(V1_PATH)
    assert response.status_code == 200
    assert response.data == b"create"

    assert _upsert(client, "mnist_v1", b"update").status_code == 201
    assert client.get(V1_PATH).data == b"update"
    assert client.get("/list").get_json() == {"uris": [V1_PATH]}


@pytest.mark.parametrize(
    ("query", "message"),
    [
        ("", "need a 'key' parameter"),
        ("?key=", "need a 'key' parameter"),
        ("?key=mnist", "bad key format"),
        ("?key=_v1", "bad key format"),
        ("?key=mnist_", "bad key format"),
    ],
)
def test_upsert_rejects_missing_or_malformed_key(client, query, message):
    response = client.post(f"/upsert{query}", json={})
    assert response.status_code == 400
    assert message in response.get_json()["error"]
    assert client.get("/list").get_json() == {"uris": []}


@pytest.mark.parametrize(
    "data",
    [b"{not json", b"[1, 2]", json.dumps({"body": "%%%"}).encode()],
)
def test_upsert_rejects_malformed_body(client, state, data):
    response = client.post(
        "/upsert?key=mnist_v1", data=data, content_type="application/json"
    )
    assert response.status_code == 400
    assert "error reading POST body" in response.get_json()["error"]
    assert len(state.catalog) == 0
    assert len(state.model_cards) == 0


def test_delete_unknown_key_succeeds(client):
    _upsert(client, "mnist_v1", b"create")

    response = client.delete("/remove?key=mnist_v2")

    assert response.status_code == 200
    assert client.get("/list").get_json() == {"uris": [V1_PATH]}


def test_delete_hides_entry_but_keeps_others(client, state):
    _upsert(client, "mnist_v1", b"create")
    _upsert(client, "mnist_v2", b"create")

    assert client.delete("/remove?key=mnist_v2").status_code == 200
    assert client.delete("/remove?key=mnist_v2").status_code == 200

    assert client.get("/list").get_json() == {"uris": [V1_PATH]}
    assert client.get(V2_PATH).status_code == 404
    assert client.get(V1_PATH).data == b"create"
    assert len(state.catalog) == 2


@pytest.mark.parametrize("query", ["", "?key=mnist", "?key=_v1", "?key=mnist_"])
def test_delete_rejects_missing_or_malformed_key(client, query):
    assert client.delete(f"/remove{query}").status_code == 400


def test_get_unknown_entry_is_not_found(client):
    assert client.get(V1_PATH).status_code == 404


def test_get_with_other_format_is_not_found(client):
    _upsert(client, "mnist_v1", b"create")
    assert client.get("/mnist/v1/json-array").status_code == 404


def test_get_with_missing_path_segment_is_not_found(client):
    _upsert(client, "mnist_v1", b"create")
    assert client.get("/mnist/v1").status_code == 404


def test_get_returns_json_content_type(client):
    _upsert(client, "mnist_v1", b'{"kind": "Component"}')
    response = client.get(V1_PATH)
    assert response.mimetype == "application/json"


def test_model_card_unknown_key(client):
    assert client.get("/modelcard?key=foo").status_code == 404
    assert client.get("/modelcard").status_code == 404


def test_model_card_throttle_lifecycle(client):
    _upsert(client, "mnist_v1", b"create", card_key="foo", card="# foo", token="t1")

    for _ in range(MODEL_CARD_MAX_SERVES + 1):
        response = client.get("/modelcard?key=foo")
        assert response.status_code == 200
        assert response.get_data(as_text=True) == "# foo"
        assert response.mimetype == "text/markdown"

    response = client.get("/modelcard?key=foo")
    assert response.status_code == 304
    assert response.data == b""

    _upsert(client, "mnist_v1", b"create", card_key="foo", card="# foo 2", token="t2")
    response = client.get("/modelcard?key=foo")
    assert response.status_code == 200
    assert response.get_data(as_text=True) == "# foo 2"


def test_model_card_unchanged_token_keeps_content(client):
    _upsert(client, "mnist_v1", card_key="foo", card="first", token="t1")
    _upsert(client, "mnist_v1", card_key="foo", card="second", token="t1")

    assert client.get("/modelcard?key=foo").get_data(as_text=True) == "first"


def test_responses_carry_request_id(client):
    first = client.get("/list")
    second = client.get("/list")
    assert first.headers["X-Request-Id"]
    assert first.headers["X-Request-Id"] != second.headers["X-Request-Id"]


def test_discovery_serialisation_failure_returns_500(client, state, monkeypatch):
    monkeypatch.setattr(
        state, "discover", lambda: DiscoveryResponse(uris=[b"\x00"])
    )
    response = client.get("/list")
    assert response.status_code == 500
    assert "error" in response.get_json()


@pytest.mark.parametrize(
    "payload",
    [{"modelCardKey": "foo"}, {"body": None, "modelCardKey": "foo"}],
)
def test_upsert_without_document_body_is_rejected(client, state, payload):
    response = client.post("/upsert?key=mnist_v1", json=payload)
    assert response.status_code == 400
    assert "'body' is required" in response.get_json()["error"]
    assert client.get(V1_PATH).status_code == 404
    assert client.get("/list").get_json() == {"uris": []}
    assert len(state.model_cards) == 0
