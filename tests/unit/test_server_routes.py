# pylint: disable=missing-module-docstring,missing-function-docstring

from fastapi.testclient import TestClient

from config import AppConfig
from server.app import build_llm_client, create_app


def _client() -> TestClient:
    return TestClient(create_app(AppConfig()))


def test_health() -> None:
    response = _client().get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_commands_for_role() -> None:
    response = _client().get("/commands", params={"user_type": "farmer"})
    body = response.json()

    assert body["role"] == "farmer"
    assert body["routes"]["products"] == "/dashboard/farmer/products"
    assert body["routes"]["home"] == "/"
    assert body["login_path"] == "/login/farmer"
    assert "dashboard" in body["protected"]


def test_commands_infers_role_from_path() -> None:
    body = _client().get("/commands", params={"path": "/dashboard/hub/orders"}).json()

    assert body["role"] == "hub"
    assert body["routes"]["dashboard"] == "/dashboard/hub"


def test_commands_without_context_uses_default_routes() -> None:
    body = _client().get("/commands").json()

    assert body["role"] is None
    assert body["routes"]["dashboard"] == "/dashboard"
    assert body["login_path"] == "/"


def test_websocket_session_flow() -> None:
    with _client().websocket_connect("/ws") as ws:
        init = ws.receive_json()
        assert init["type"] == "SESSION_INIT"

        ws.send_json({"type": "HELLO", "recognition_supported": True, "path": "/"})
        ws.send_json({"type": "MIC_TOGGLE"})

        start = ws.receive_json()
        assert start["type"] == "RECOGNITION_START"
        listening = ws.receive_json()
        assert listening["type"] == "VOICE_STATE"
        assert listening["state"] == "listening"
        assert listening["run_id"] == start["run_id"]

        ws.send_json({
            "type": "RECOGNITION_RESULT",
            "run_id": start["run_id"],
            "transcript": "open help",
        })

        processing = ws.receive_json()
        assert processing["type"] == "VOICE_STATE"
        assert processing["state"] == "processing"
        assert ws.receive_json()["type"] == "SPEECH_CANCEL"

        speak = ws.receive_json()
        assert speak["type"] == "SPEAK"
        assert speak["text"] == "Navigating to help"
        assert speak["lang"] == "en-US"


def test_llm_client_only_built_when_fallback_enabled() -> None:
    assert build_llm_client(AppConfig()) is None
    assert build_llm_client(AppConfig(intent_fallback=True)) is None

    client = build_llm_client(
        AppConfig(intent_fallback=True, llm_provider="groq", groq_api_key="gsk_test")
    )
    assert client is not None
    assert "groq" in str(client.base_url)
