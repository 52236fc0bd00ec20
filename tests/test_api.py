"""Tests for the HTTP API."""

import base64

import pytest
from fastapi.testclient import TestClient

from arsenal_scan.adapters.inference.mock_inference import MockInference
from arsenal_scan.adapters.reference.loader import ReferenceLoader
from arsenal_scan.orchestrator import errors
from arsenal_scan.services.api import create_app
from arsenal_scan.services.config import Config

from conftest import JPEG_BYTES, make_grid


def _config(reference_image: str) -> Config:
    return Config(
        api_key=None,
        inference_adapter="mock",
        model="gemini-test",
        base_url="http://fake-gemini",
        timeout=5.0,
        reference_image=reference_image,
    )


@pytest.fixture()
def inference(status) -> MockInference:
    return MockInference(status, counts={"0,0": 2, "1,0": 3, "0,2": 5})


@pytest.fixture()
def client(status, arsenal_file, inference) -> TestClient:
    app = create_app(_config(str(arsenal_file)), inference=inference, status=status)
    return TestClient(app)


def test_health_and_status(client) -> None:
    assert client.get("/health").json()["all_ok"] is True
    data = client.get("/status").json()
    assert data["busy"] is False
    assert data["reference_ready"] is True
    assert data["inference_adapter"] == "mock"
    assert any("reference: ready" in line for line in data["logs"])


def test_status_reports_last_result(client, user_b64) -> None:
    assert client.get("/status").json()["last_result"] is None
    client.post("/analyze", json={"image": user_b64})
    last = client.get("/status").json()["last_result"]
    assert last["ok"] is True
    assert last["aggregated"] == {"SG": 5}
    assert last["summary"].startswith("Found a total of 5")

    # a rejected request does not replace it
    client.post("/analyze", json={})
    assert client.get("/status").json()["last_result"]["aggregated"] == {"SG": 5}


def test_reference_preview(client) -> None:
    data = client.get("/reference").json()
    assert data["ok"] is True
    assert data["data_url"].startswith("data:image/png;base64,")


def test_analyze_json(client, user_b64) -> None:
    data = client.post("/analyze", json={"image": user_b64}).json()
    assert data["ok"] is True
    assert data["aggregated"] == {"SG": 5}
    assert data["results"] == make_grid(r0c0=2, r1c0=3, r0c2=5)
    assert data["total_count"] == 5
    assert data["unique_types"] == 1
    assert data["summary"] == "Found a total of 5 weapon instances across 1 unique weapon type."


def test_analyze_data_url(client, user_b64) -> None:
    data = client.post("/analyze", json={"image": f"data:image/jpeg;base64,{user_b64}"}).json()
    assert data["ok"] is True


def test_analyze_without_image(client, inference) -> None:
    data = client.post("/analyze", json={}).json()
    assert data["ok"] is False
    assert data["error_code"] == errors.ERR_INPUT_MISSING
    assert data["results"] is None
    assert inference.calls == 0


def test_analyze_upload(client) -> None:
    resp = client.post("/analyze/upload", files={"file": ("shot.jpg", JPEG_BYTES, "image/jpeg")})
    data = resp.json()
    assert data["ok"] is True
    assert data["aggregated"] == {"SG": 5}


def test_analyze_upload_non_image(client, inference) -> None:
    resp = client.post("/analyze/upload", files={"file": ("notes.txt", b"hi", "text/plain")})
    assert resp.json()["error_code"] == errors.ERR_INPUT_MISSING
    assert inference.calls == 0


def test_analyze_upload_without_file(client) -> None:
    assert client.post("/analyze/upload").json()["error_code"] == errors.ERR_INPUT_MISSING


def test_inference_error_is_not_leaked(status, arsenal_file, user_b64) -> None:
    class Broken(MockInference):
        def identify(self, arsenal_b64, user_b64):
            raise RuntimeError("secret upstream detail")

    app = create_app(_config(str(arsenal_file)), inference=Broken(status), status=status)
    data = TestClient(app).post("/analyze", json={"image": user_b64}).json()
    assert data["ok"] is False
    assert data["error_code"] == errors.ERR_INFERENCE
    assert "secret" not in data["error"]
    assert any("secret upstream detail" in line for line in status.logs)
    assert status.busy is False


def test_missing_arsenal_disables_analysis(status, tmp_path, inference, user_b64) -> None:
    app = create_app(_config(str(tmp_path / "missing.png")), inference=inference, status=status)
    client = TestClient(app)

    assert client.get("/health").json()["all_ok"] is False
    ref = client.get("/reference").json()
    assert ref["ok"] is False
    assert ref["error"] == errors.MESSAGES[errors.ERR_ASSET_LOAD]

    data = client.post("/analyze", json={"image": user_b64}).json()
    assert data["error_code"] == errors.ERR_ASSET_LOAD
    assert inference.calls == 0


def test_reference_loader_injected(status, arsenal_file, inference, user_b64) -> None:
    loader = ReferenceLoader(status, str(arsenal_file))
    app = create_app(_config("unused"), inference=inference, reference=loader, status=status)
    assert loader.ready
    assert TestClient(app).post("/analyze", json={"image": user_b64}).json()["ok"] is True


def test_mock_adapter_built_from_config(status, arsenal_file, user_b64) -> None:
    app = create_app(_config(str(arsenal_file)), status=status)
    data = TestClient(app).post("/analyze", json={"image": user_b64}).json()
    assert data["ok"] is True
    assert set(data["results"]) == set(make_grid())
