import base64
import json

from fastapi.testclient import TestClient
from handle_utf8.main import app

client = TestClient(app)

# City assembled from a UTF-8 source, name and tags from Latin-1 sources
MIXED = b'{"city": "Montr\xc3\xa9al", "name": "M\xfcnchen", "tags": ["\xe4\xc4", "ok"]}'


def _content(data):
    return base64.b64decode(data["normalized_json"]["content_b64"])

def test_health():
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"ok": True}

def test_normalize_repairs_mixed_encoding():
    files = {"file": ("mixed.json", MIXED, "application/json")}
    r = client.post("/normalize", files=files)
    assert r.status_code == 200

    data = r.json()
    assert data["normalized_json"]["encoding"] == "utf-8"

    out_bytes = _content(data)
    # Should decode cleanly as utf-8
    document = json.loads(out_bytes.decode("utf-8"))
    assert document == {"city": "Montréal", "name": "München", "tags": ["äÄ", "ok"]}

    summary = data["report"]["summary"]
    assert summary["leaves"] == 4
    assert summary["repaired"] == 2
    assert summary["warnings"] == 0
    assert data["report"]["normalizations"]["encoding"]["direction"] == "input"

def test_normalize_output_direction():
    files = {"file": ("mixed.json", MIXED, "application/json")}
    r = client.post("/normalize", files=files, params={"direction": "output"})
    assert r.status_code == 200

    document = json.loads(_content(r.json()).decode("utf-8"))
    assert document["name"] == "München"

def test_skip_repair_reports_undecodable_leaves():
    files = {"file": ("mixed.json", MIXED, "application/json")}
    r = client.post("/normalize", files=files, params={"skip_repair": "true"})
    assert r.status_code == 200

    data = r.json()
    assert data["report"]["summary"]["repaired"] == 0
    assert [w["leaf"] for w in data["report"]["warnings"]] == [1, 2]
    assert {w["issue"] for w in data["report"]["warnings"]} == {"leaf_not_utf8"}

    document = json.loads(_content(data).decode("utf-8"))
    assert document["city"] == "Montréal"
    assert document["name"] == "M\ufffdnchen"

def test_keys_are_written_back_unchanged():
    raw = b'{"stra\xdfe": "Hauptstra\xdfe"}'
    files = {"file": ("keys.json", raw, "application/json")}
    r = client.post("/normalize", files=files)
    assert r.status_code == 200

    out_bytes = _content(r.json())
    assert b'"stra\xdfe"' in out_bytes
    assert "Hauptstraße".encode("utf-8") in out_bytes

def test_rejects_non_json_upload():
    files = {"file": ("data.csv", b"a,b\n", "text/csv")}
    r = client.post("/normalize", files=files)
    assert r.status_code == 422

def test_rejects_invalid_direction():
    files = {"file": ("mixed.json", MIXED, "application/json")}
    r = client.post("/normalize", files=files, params={"direction": "sideways"})
    assert r.status_code == 422
    assert "invalid direction 'sideways'" in r.json()["detail"]

def test_rejects_malformed_json():
    files = {"file": ("broken.json", b'{"a": ', "application/json")}
    r = client.post("/normalize", files=files)
    assert r.status_code == 422

def test_byte_order_mark_is_stripped():
    raw = b'\xef\xbb\xbf{"name": "M\xfcnchen"}'
    files = {"file": ("bom.json", raw, "application/json")}
    r = client.post("/normalize", files=files)
    assert r.status_code == 200

    out_bytes = _content(r.json())
    assert not out_bytes.startswith(b"\xef\xbb\xbf")
    assert json.loads(out_bytes.decode("utf-8")) == {"name": "München"}
