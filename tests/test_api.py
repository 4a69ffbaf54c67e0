"""Tests for api.app."""
import os
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

import api.app as api_app
from api import create_app
from config import AppSettings
from tests.conftest import SCENARIO_CONTENT, sha256_hex


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app(AppSettings()))


@pytest.mark.parametrize("url", ["/health", "/api/health"])
def test_health(client: TestClient, url: str) -> None:
    response = client.get(url)
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_scan_scenario(client: TestClient, scenario_tree: Path) -> None:
    response = client.post(
        "/api/scan",
        json={"path": str(scenario_tree), "options": {"fileTypes": [".jpg", ".png", ".gif"], "maxSize": 18}},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["totalFiles"] == 2
    assert body["errors"] == []
    assert len(body["id"]) == 32
    images = {image["path"]: image for image in body["images"]}
    nested = os.path.join("d", "e.gif")
    assert sorted(images) == sorted(["a.jpg", nested])
    assert images["a.jpg"]["hash"] == sha256_hex(SCENARIO_CONTENT["a.jpg"])
    assert images[nested]["size"] == 15
    assert set(images["a.jpg"]) == {"path", "absolutePath", "size", "hash", "created", "modified"}


def test_scan_uses_default_options(client: TestClient, scenario_tree: Path) -> None:
    response = client.post("/api/scan", json={"path": str(scenario_tree)})
    assert response.status_code == 200
    assert response.json()["totalFiles"] == 3


def test_scan_requires_path(client: TestClient) -> None:
    response = client.post("/api/scan", json={"options": {}})
    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_REQUEST"


def test_scan_rejects_invalid_options(client: TestClient, tmp_path: Path) -> None:
    response = client.post("/api/scan", json={"path": str(tmp_path), "options": {"maxSize": -1}})
    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "INVALID_REQUEST"
    assert body["details"]["errors"]


def test_scan_missing_root_is_scan_error(client: TestClient, tmp_path: Path) -> None:
    missing = str(tmp_path / "missing")
    response = client.post("/api/scan", json={"path": missing, "options": {"recursive": False}})
    assert response.status_code == 500
    body = response.json()
    assert body["code"] == "SCAN_ERROR"
    assert body["details"] == {"path": missing, "options": {"recursive": False}}


def test_scan_with_dimensions_enabled(tmp_path: Path) -> None:
    from PIL import Image

    Image.new("RGB", (4, 4)).save(tmp_path / "square.png")
    settings = AppSettings()
    settings.scan.enrich_dimensions = True
    response = TestClient(create_app(settings)).post("/api/scan", json={"path": str(tmp_path)})
    assert response.json()["images"][0]["dimensions"] == {"width": 4, "height": 4}


def test_validate_existing_path(client: TestClient, tmp_path: Path) -> None:
    response = client.post("/api/validate", json={"path": str(tmp_path)})
    assert response.status_code == 200
    assert response.json() == {"valid": True, "path": os.path.abspath(tmp_path)}


def test_validate_missing_path(client: TestClient, tmp_path: Path) -> None:
    missing = str(tmp_path / "missing")
    body = client.post("/api/validate", json={"path": missing}).json()
    assert body["valid"] is False
    assert body["path"] == missing
    assert "No such file or directory" in body["reason"]


def test_validate_requires_path(client: TestClient) -> None:
    response = client.post("/api/validate", json={})
    assert response.status_code == 400


@pytest.mark.skipif(sys.platform != "linux", reason="needs a filesystem that accepts non-UTF-8 names")
def test_scan_survives_undecodable_file_name(client: TestClient, tmp_path: Path) -> None:
    (tmp_path / "good.jpg").write_bytes(b"good")
    with open(os.path.join(os.fsencode(tmp_path), b"bad\xff.jpg"), "wb") as stream:
        stream.write(b"bad")

    response = client.post("/api/scan", json={"path": str(tmp_path)})

    assert response.status_code == 200
    body = response.json()
    assert body["totalFiles"] == 2
    paths = sorted(image["path"] for image in body["images"])
    assert paths == ["bad\ufffd.jpg", "good.jpg"]
    bad = next(image for image in body["images"] if image["path"] == "bad\ufffd.jpg")
    assert bad["hash"] == sha256_hex(b"bad")


@pytest.mark.parametrize("url", ["/api/scan", "/api/validate"])
def test_non_string_path_is_rejected(client: TestClient, url: str) -> None:
    response = client.post(url, json={"path": 123})
    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_REQUEST"


def test_unexpected_error_uses_error_format(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    class ExplodingScanner:
        def __init__(self, *args, **kwargs) -> None:
            pass

        def scan(self, options):
            raise RuntimeError("disk on fire")

    monkeypatch.setattr(api_app, "ImageScanner", ExplodingScanner)
    client = TestClient(create_app(AppSettings()), raise_server_exceptions=False)

    response = client.post("/api/scan", json={"path": str(tmp_path)})

    assert response.status_code == 500
    assert response.headers["content-type"].startswith("application/json")
    assert response.json() == {"code": "INTERNAL_ERROR", "message": "An internal error occurred"}
