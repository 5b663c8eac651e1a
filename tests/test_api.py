"""Tests for the properties REST API."""

import tempfile
from pathlib import Path

import yaml
from fastapi.testclient import TestClient

from propreg.config import Settings
from propreg.registry.memory_registry import PropertyRegistry
from propreg.utils.hashing import digest
from web.backend.app.main import create_app


def _client(registry: PropertyRegistry | None = None) -> TestClient:
    if registry is None:
        registry = PropertyRegistry()
    return TestClient(create_app(registry=registry, settings=Settings()))


def _upload(client: TestClient, pid: str = "p1", image: bytes = b"\x01\x02", **form):
    data = {
        "id": pid,
        "category": "RealEstate",
        "description": "lake house",
        "owner": "alice",
    }
    data.update(form)
    return client.post(
        "/api/properties",
        data=data,
        files={"image": ("photo.jpg", image, "image/jpeg")},
    )


def test_upload_and_get():
    client = _client()
    resp = _upload(client)
    assert resp.status_code == 201
    assert resp.json() == {"id": "p1", "image_digest": digest(b"\x01\x02")}

    resp = client.get("/api/properties/p1")
    assert resp.status_code == 200
    assert resp.json() == {
        "id": "p1",
        "category": {"kind": "RealEstate", "label": None},
        "image_digest": digest(b"\x01\x02"),
        "description": "lake house",
        "owner": "alice",
    }


def test_upload_other_category():
    client = _client()
    resp = _upload(client, "boat-1", b"boat", category="Other", label="Boat")
    assert resp.status_code == 201

    body = client.get("/api/properties/boat-1").json()
    assert body["category"] == {"kind": "Other", "label": "Boat"}

    rows = client.get("/api/properties").json()
    assert rows == [
        {"id": "boat-1", "category": 'Other("Boat")', "image_digest": digest(b"boat")}
    ]


def test_upload_empty_image_is_bad_request():
    registry = PropertyRegistry()
    client = _client(registry)
    resp = _upload(client, image=b"")
    assert resp.status_code == 400
    assert "empty" in resp.json()["detail"].lower()
    assert registry.list() == []


def test_upload_unknown_category_rejected():
    client = _client()
    resp = _upload(client, category="Spaceship")
    assert resp.status_code == 422


def test_upload_other_without_label_rejected():
    client = _client()
    resp = _upload(client, category="Other")
    assert resp.status_code == 400


def test_upload_overwrites():
    client = _client()
    _upload(client, "p1", b"first")
    _upload(client, "p1", b"second", category="Car", owner="bob")

    body = client.get("/api/properties/p1").json()
    assert body["image_digest"] == digest(b"second")
    assert body["category"]["kind"] == "Car"
    assert body["owner"] == "bob"
    assert len(client.get("/api/properties").json()) == 1


def test_get_missing_is_404():
    client = _client()
    resp = client.get("/api/properties/nope")
    assert resp.status_code == 404


def test_delete():
    client = _client()
    _upload(client, "p1")

    resp = client.delete("/api/properties/p1")
    assert resp.status_code == 200
    assert resp.json() == {"id": "p1", "deleted": True}
    assert client.get("/api/properties/p1").status_code == 404

    resp = client.delete("/api/properties/p1")
    assert resp.status_code == 200
    assert resp.json() == {"id": "p1", "deleted": False}


def test_list_properties():
    client = _client()
    _upload(client, "a", b"a", category="Art")
    _upload(client, "b", b"b", category="Car")
    _upload(client, "c", b"c")
    client.delete("/api/properties/c")

    rows = {r["id"]: r for r in client.get("/api/properties").json()}
    assert set(rows) == {"a", "b"}
    assert rows["a"] == {"id": "a", "category": "Art", "image_digest": digest(b"a")}
    assert rows["b"]["category"] == "Car"


def test_shared_registry_instance():
    registry = PropertyRegistry()
    client = _client(registry)
    _upload(client, "p1")
    assert registry.get("p1") is not None


class _ExplodingDict(dict):
    def __setitem__(self, key, value):
        raise RuntimeError("storage corrupted")


def test_poisoned_registry_is_service_unavailable():
    registry = PropertyRegistry()
    registry._properties = _ExplodingDict()
    client = TestClient(
        create_app(registry=registry, settings=Settings()), raise_server_exceptions=False
    )

    assert _upload(client).status_code == 500
    assert client.get("/api/properties").status_code == 503
    assert client.get("/api/properties/p1").status_code == 503
    assert client.delete("/api/properties/p1").status_code == 503


def test_root_and_health():
    client = _client()
    assert client.get("/").json()["name"] == "propreg API"

    _upload(client)
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "healthy", "properties": 1}


def test_seed_manifest_loaded_at_startup():
    with tempfile.TemporaryDirectory() as tmpdir:
        (Path(tmpdir) / "car.jpg").write_bytes(b"vroom")
        manifest = Path(tmpdir) / "seed.yaml"
        with open(manifest, "w") as f:
            yaml.dump(
                {"properties": [{"id": "car-1", "category": "Car", "image": "car.jpg"}]}, f
            )

        app = create_app(registry=PropertyRegistry(), settings=Settings(seed_manifest=str(manifest)))
        with TestClient(app) as client:
            body = client.get("/api/properties/car-1").json()
            assert body["image_digest"] == digest(b"vroom")


def test_upload_other_with_empty_label():
    client = _client()
    resp = _upload(client, "thing", b"x", category="Other", label="")
    assert resp.status_code == 201

    body = client.get("/api/properties/thing").json()
    assert body["category"] == {"kind": "Other", "label": ""}
    assert client.get("/api/properties").json()[0]["category"] == 'Other("")'


def test_upload_fixed_category_ignores_empty_label():
    client = _client()
    resp = _upload(client, "car-1", b"x", category="Car", label="")
    assert resp.status_code == 201
    assert client.get("/api/properties/car-1").json()["category"] == {"kind": "Car", "label": None}


def test_upload_empty_id_is_kept():
    registry = PropertyRegistry()
    client = _client(registry)
    resp = _upload(client, "")
    assert resp.status_code == 201
    assert resp.json()["id"] == ""
    assert registry.get("").image_digest == digest(b"\x01\x02")


def test_upload_without_id_rejected():
    client = _client()
    resp = client.post(
        "/api/properties",
        data={"category": "Car"},
        files={"image": ("photo.jpg", b"x", "image/jpeg")},
    )
    assert resp.status_code == 422


def test_id_with_slash_round_trips():
    client = _client()
    assert _upload(client, "lot/42", b"lot").status_code == 201

    resp = client.get("/api/properties/lot/42")
    assert resp.status_code == 200
    assert resp.json()["id"] == "lot/42"

    resp = client.delete("/api/properties/lot/42")
    assert resp.json() == {"id": "lot/42", "deleted": True}
    assert client.get("/api/properties/lot/42").status_code == 404
