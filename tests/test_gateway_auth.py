import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from omni.access import (
    authorize_gateway_token,
    build_admin_status_payload,
    ensure_gateway_token,
    require_gateway_token,
)
from omni.errors import UnauthorizedAccess


def test_authorize_gateway_token_cases() -> None:
    assert authorize_gateway_token("abc", "abc") is True
    assert authorize_gateway_token("abc", "abd") is False
    assert authorize_gateway_token("abc", "") is False
    assert authorize_gateway_token("", "abc") is False
    assert authorize_gateway_token(None, None) is False


def test_authorize_gateway_token_with_ip_allowlist() -> None:
    assert authorize_gateway_token("abc", "abc", "10.0.0.1, 10.0.0.2", "10.0.0.2") is True
    assert authorize_gateway_token("abc", "abc", "10.0.0.1", "10.0.0.3") is False
    assert authorize_gateway_token("abc", "abc", ["10.0.0.1"], None) is False
    assert authorize_gateway_token("abc", "abc", "", None) is True


def test_ensure_gateway_token_raises() -> None:
    ensure_gateway_token("abc", "abc")
    with pytest.raises(UnauthorizedAccess, match="10.0.0.9"):
        ensure_gateway_token("abc", "abc", "10.0.0.1", "10.0.0.9")


def test_status_payload_defaults() -> None:
    payload = build_admin_status_payload(env={}, uptime_seconds=12.5)

    assert payload["serviceName"] == "omni"
    assert payload["version"] == "dev"
    assert payload["commit"] == "local"
    assert payload["region"] == "local"
    assert payload["instanceId"] == "local"
    assert payload["uptimeSeconds"] == 12.5
    assert payload["admin"] == {"authRequired": False, "allowlist": []}
    assert payload["gateway"]["plugins"]["active"] == []


def test_status_payload_plugin_gating() -> None:
    env = {
        "SERVICE_NAME": "bot-prod",
        "ADMIN_API_TOKEN": "t",
        "ADMIN_ALLOWLIST": "1.2.3.4",
        "GATEWAY_PLUGINS": "Search, Browser, Memory",
        "GATEWAY_PLUGINS_DENYLIST": "browser",
    }
    payload = build_admin_status_payload(env=env, uptime_seconds=0)

    assert payload["serviceName"] == "bot-prod"
    assert payload["admin"] == {"authRequired": True, "allowlist": ["1.2.3.4"]}
    assert payload["gateway"]["plugins"]["configured"] == ["search", "browser", "memory"]
    assert payload["gateway"]["plugins"]["active"] == ["search", "memory"]

    env["GATEWAY_PLUGINS_ALLOWLIST"] = "memory"
    payload = build_admin_status_payload(env=env, uptime_seconds=0)
    assert payload["gateway"]["plugins"]["active"] == ["memory"]


def _app(**kwargs) -> FastAPI:
    app = FastAPI()

    @app.get("/secure", dependencies=[Depends(require_gateway_token("s3cret", **kwargs))])
    async def secure() -> dict:
        return {"ok": True}

    return app


def test_require_gateway_token_dependency() -> None:
    client = TestClient(_app())

    assert client.get("/secure").status_code == 401
    assert client.get("/secure", headers={"Authorization": "Bearer wrong"}).status_code == 401
    assert client.get("/secure", headers={"Authorization": "Bearer s3cret"}).json() == {"ok": True}
    assert client.get("/secure", headers={"x-omni-gateway-token": "s3cret"}).status_code == 200


def test_require_gateway_token_forwarded_for() -> None:
    headers = {"Authorization": "Bearer s3cret", "X-Forwarded-For": "10.1.1.1, 172.16.0.1"}

    trusted = TestClient(_app(allowlist=["10.1.1.1"], trust_forwarded_for=True))
    assert trusted.get("/secure", headers=headers).status_code == 200

    untrusted = TestClient(_app(allowlist=["10.1.1.1"]))
    assert untrusted.get("/secure", headers=headers).status_code == 401
