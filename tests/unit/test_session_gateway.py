# pylint: disable=missing-module-docstring,missing-function-docstring

import asyncio
import json
from typing import Any

import pytest

import orchestrator.runtime as runtime_mod
import session.gateway as gateway_mod
import adapters.recognition.browser_bridge as bridge_mod
from config import AppConfig
from session.gateway import SessionGateway


class InstantSleep:
    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
        await asyncio.sleep(0)


class NeverSleep:
    async def __call__(self, delay: float) -> None:
        await asyncio.get_running_loop().create_future()


async def _yield(n: int = 10) -> None:
    for _ in range(n):
        await asyncio.sleep(0)


def _types(messages: tuple[dict[str, Any], ...]) -> list[str]:
    return [m["type"] for m in messages]


async def _send(gw: SessionGateway, payload: dict[str, Any]) -> None:
    await gw.on_json_message(json.dumps(payload))


def test_connect_enqueues_session_init() -> None:
    async def scenario() -> None:
        gw = SessionGateway(config=AppConfig(), sleep=NeverSleep())
        session_id = await gw.on_ws_connect()

        assert gw.session is not None
        init = gw.session.drain_control()
        assert _types(init) == ["SESSION_INIT"]
        assert init[0]["session_id"] == session_id
        assert init[0]["state"] == "idle"
        assert init[0]["recognition"]["lang"] == "en-US"
        assert init[0]["intent_fallback"] is False

        await gw.on_ws_disconnect("test")

    asyncio.run(scenario())


def test_gateway_routes_reducer_logs_via_logger(monkeypatch: pytest.MonkeyPatch) -> None:
    emitted: list[dict[str, Any]] = []
    monkeypatch.setattr(runtime_mod, "log_event", emitted.append)

    async def scenario() -> None:
        gw = SessionGateway(config=AppConfig(), sleep=NeverSleep())
        await gw.on_ws_connect()
        await _send(gw, {"type": "MIC_TOGGLE", "ts_ms": 100})
        await gw.on_ws_disconnect("test")

    asyncio.run(scenario())

    assert any(e.get("decision") == "idle_to_listening" for e in emitted)
    assert all(e["session_id"].startswith("sess_") for e in emitted if "decision" in e)


def test_full_command_flow_over_control_messages() -> None:
    async def scenario() -> None:
        sleep = InstantSleep()
        gw = SessionGateway(config=AppConfig(), sleep=sleep)
        await gw.on_ws_connect()
        assert gw.session is not None
        gw.session.drain_control()

        await _send(gw, {
            "type": "HELLO",
            "recognition_supported": True,
            "user": {"uid": "u1", "user_type": "farmer"},
            "path": "/dashboard/farmer",
            "language": "Tamil",
        })
        assert gw.session.drain_control() == ()

        await _send(gw, {"type": "MIC_TOGGLE"})
        msgs = gw.session.drain_control()
        assert _types(msgs)[:2] == ["RECOGNITION_START", "VOICE_STATE"]
        assert msgs[0]["run_id"] == 1
        assert msgs[0]["config"] == {
            "lang": "en-US",
            "continuous": False,
            "interimResults": False,
            "maxAlternatives": 1,
        }

        await _send(gw, {"type": "RECOGNITION_RESULT", "run_id": 1, "transcript": "show orders"})
        await _yield()
        msgs = gw.session.drain_control()
        types = _types(msgs)

        assert types.index("SPEECH_CANCEL") < types.index("SPEAK") < types.index("NAVIGATE")
        speak = msgs[types.index("SPEAK")]
        assert speak["text"] == "செல்கிறேன் orders"
        assert speak["lang"] == "ta-IN"
        assert speak["volume"] == 0.8
        assert msgs[types.index("NAVIGATE")]["path"] == "/dashboard/orders"
        assert 1.5 in sleep.delays

        await gw.on_ws_disconnect("test")

    asyncio.run(scenario())


def test_context_update_changes_routes_between_commands() -> None:
    async def scenario() -> None:
        gw = SessionGateway(config=AppConfig(), sleep=InstantSleep())
        await gw.on_ws_connect()
        assert gw.session is not None

        await _send(gw, {"type": "HELLO", "user": None, "path": "/"})
        await _send(gw, {
            "type": "CONTEXT_UPDATE",
            "user": {"uid": "h1", "user_type": "hub"},
            "path": "/dashboard/hub",
        })
        gw.session.drain_control()

        await _send(gw, {"type": "MIC_TOGGLE"})
        await _send(gw, {"type": "RECOGNITION_RESULT", "run_id": 1, "transcript": "open inventory"})
        await _yield()

        navigations = [m for m in gw.session.drain_control() if m["type"] == "NAVIGATE"]
        assert [m["path"] for m in navigations] == ["/dashboard/hub/inventory"]

        await gw.on_ws_disconnect("test")

    asyncio.run(scenario())


def test_login_redirect_stores_pending_destination() -> None:
    async def scenario() -> None:
        gw = SessionGateway(config=AppConfig(), sleep=InstantSleep())
        await gw.on_ws_connect()
        assert gw.session is not None
        await _send(gw, {"type": "HELLO", "path": "/"})
        await _send(gw, {"type": "MIC_TOGGLE"})
        await _send(gw, {"type": "RECOGNITION_RESULT", "run_id": 1, "transcript": "open dashboard"})
        await _yield()

        msgs = gw.session.drain_control()
        types = _types(msgs)
        store = msgs[types.index("STORE_REDIRECT")]
        assert store == {
            "type": "STORE_REDIRECT",
            "key": "redirectAfterLogin",
            "path": "/dashboard",
            "ts_ms": store["ts_ms"],
        }
        assert msgs[types.index("NAVIGATE")]["path"] == "/"
        assert types.index("STORE_REDIRECT") < types.index("NAVIGATE")

        await gw.on_ws_disconnect("test")

    asyncio.run(scenario())


def test_unsupported_hello_toasts_and_disables_toggle() -> None:
    async def scenario() -> None:
        gw = SessionGateway(config=AppConfig(), sleep=NeverSleep())
        await gw.on_ws_connect()
        assert gw.session is not None
        gw.session.drain_control()

        await _send(gw, {"type": "HELLO", "recognition_supported": False})
        assert _types(gw.session.drain_control()) == ["TOAST"]

        await _send(gw, {"type": "MIC_TOGGLE"})
        assert gw.session.drain_control() == ()

        await gw.on_ws_disconnect("test")

    asyncio.run(scenario())


def test_unmount_aborts_and_drops_late_callbacks(monkeypatch: pytest.MonkeyPatch) -> None:
    emitted: list[dict[str, Any]] = []
    monkeypatch.setattr(bridge_mod, "log_event", emitted.append)

    async def scenario() -> None:
        gw = SessionGateway(config=AppConfig(), sleep=NeverSleep())
        await gw.on_ws_connect()
        assert gw.session is not None
        await _send(gw, {"type": "MIC_TOGGLE"})
        gw.session.drain_control()

        await _send(gw, {"type": "UNMOUNT"})
        msgs = gw.session.drain_control()
        assert "RECOGNITION_ABORT" in _types(msgs)
        assert {"type": "VOICE_STATE", "state": "idle"}.items() <= msgs[-1].items()

        await _send(gw, {"type": "RECOGNITION_ENDED", "run_id": 1})
        assert gw.session.drain_control() == ()

        await gw.on_ws_disconnect("test")

    asyncio.run(scenario())

    assert any(e["event_type"] == "RECOGNITION_CALLBACK_DROPPED" for e in emitted)


def test_malformed_and_unknown_messages_are_logged(monkeypatch: pytest.MonkeyPatch) -> None:
    emitted: list[dict[str, Any]] = []
    monkeypatch.setattr(gateway_mod, "log_event", emitted.append)

    async def scenario() -> None:
        gw = SessionGateway(config=AppConfig(), sleep=NeverSleep())
        await gw.on_ws_connect()
        await gw.on_json_message("{not json")
        await _send(gw, {"type": "DANCE"})
        await gw.on_json_message("[1, 2]")
        await gw.on_ws_disconnect("test")

    asyncio.run(scenario())

    event_types = [e["event_type"] for e in emitted]
    assert "JSON_DECODE_ERROR" in event_types
    assert "UNKNOWN_MESSAGE_TYPE" in event_types
    assert "JSON_NOT_OBJECT" in event_types


def test_disconnect_without_session_is_logged(monkeypatch: pytest.MonkeyPatch) -> None:
    emitted: list[dict[str, Any]] = []
    monkeypatch.setattr(gateway_mod, "log_event", emitted.append)

    gw = SessionGateway(config=AppConfig())
    asyncio.run(gw.on_ws_disconnect("early"))

    assert emitted[0]["event_type"] == "WS_DISCONNECT_WITHOUT_SESSION"


def test_non_string_roles_in_context_do_not_end_the_session() -> None:
    async def scenario() -> None:
        gw = SessionGateway(config=AppConfig(), sleep=NeverSleep())
        await gw.on_ws_connect()
        assert gw.session is not None

        await _send(gw, {"type": "HELLO", "user": {"uid": "u1", "user_type": ["farmer"]}})
        await _send(gw, {"type": "CONTEXT_UPDATE", "remembered_user_type": 5})

        assert not gw.session.closed
        assert gw.session.client_state.snapshot()["user_type"] == "unknown"

        await gw.on_ws_disconnect("test")

    asyncio.run(scenario())


def test_non_boolean_support_flag_keeps_default() -> None:
    async def scenario() -> None:
        gw = SessionGateway(config=AppConfig(), sleep=NeverSleep())
        await gw.on_ws_connect()
        assert gw.session is not None
        gw.session.drain_control()

        await _send(gw, {"type": "HELLO", "recognition_supported": "false"})
        assert gw.session.drain_control() == ()

        await _send(gw, {"type": "MIC_TOGGLE"})
        assert _types(gw.session.drain_control())[:1] == ["RECOGNITION_START"]

        await gw.on_ws_disconnect("test")

    asyncio.run(scenario())
