"""Shared-secret + IP allowlist authorization for the gateway admin surface."""

from __future__ import annotations

import secrets
from typing import Any, Callable, Mapping

from fastapi import HTTPException, Request
from loguru import logger

from omni.errors import UnauthorizedAccess
from omni.utils.helpers import parse_list

TOKEN_HEADER = "x-omni-gateway-token"


def authorize_gateway_token(
    token: str | None,
    expected_token: str | None,
    allowlist: str | list[str] | None = None,
    client_ip: str | None = None,
) -> bool:
    """
    Return True only if ``token`` matches ``expected_token`` and, when an IP
    allowlist is configured, ``client_ip`` appears in it verbatim.

    An unset expected token denies everything.
    """
    expected = str(expected_token or "").strip()
    if not expected:
        return False
    if not token or not secrets.compare_digest(str(token).encode("utf-8"), expected.encode("utf-8")):
        return False
    allowed_ips = parse_list(allowlist)
    if not allowed_ips:
        return True
    return bool(client_ip) and client_ip in allowed_ips


def ensure_gateway_token(
    token: str | None,
    expected_token: str | None,
    allowlist: str | list[str] | None = None,
    client_ip: str | None = None,
) -> None:
    """Raise UnauthorizedAccess unless authorize_gateway_token allows the caller."""
    if not authorize_gateway_token(token, expected_token, allowlist, client_ip):
        raise UnauthorizedAccess(f"gateway request rejected from {client_ip or 'unknown'}")


def extract_request_token(request: Request) -> str:
    auth = request.headers.get("Authorization", "")
    parts = auth.strip().split(None, 1)
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1].strip()
    return request.headers.get(TOKEN_HEADER, "").strip()


def require_gateway_token(
    expected_token: str,
    allowlist: str | list[str] | None = None,
    trust_forwarded_for: bool = False,
) -> Callable:
    """FastAPI dependency enforcing authorize_gateway_token on each request."""

    async def verify(request: Request) -> None:
        client_ip = request.client.host if request.client else None
        if trust_forwarded_for:
            forwarded = request.headers.get("x-forwarded-for", "")
            if forwarded.strip():
                client_ip = forwarded.split(",")[0].strip()
        try:
            ensure_gateway_token(extract_request_token(request), expected_token, allowlist, client_ip)
        except UnauthorizedAccess as exc:
            logger.debug(f"Unauthorized: {exc}")
            raise HTTPException(status_code=401, detail="Unauthorized") from exc

    return verify


def build_admin_status_payload(env: Mapping[str, str | None], uptime_seconds: float) -> dict[str, Any]:
    """Summarise deployment metadata and plugin gating for the admin dashboard."""
    plugin_ids = [p.lower() for p in parse_list(env.get("GATEWAY_PLUGINS"))]
    allow = [p.lower() for p in parse_list(env.get("GATEWAY_PLUGINS_ALLOWLIST"))]
    deny = [p.lower() for p in parse_list(env.get("GATEWAY_PLUGINS_DENYLIST"))]
    if allow:
        active = [p for p in plugin_ids if p in allow]
    else:
        active = [p for p in plugin_ids if p not in deny]
    return {
        "serviceName": env.get("SERVICE_NAME") or "omni",
        "version": env.get("RELEASE_VERSION") or "dev",
        "commit": env.get("COMMIT_HASH") or "local",
        "region": env.get("REGION") or "local",
        "instanceId": env.get("INSTANCE_ID") or "local",
        "uptimeSeconds": uptime_seconds,
        "admin": {
            "authRequired": bool(str(env.get("ADMIN_API_TOKEN") or "").strip()),
            "allowlist": parse_list(env.get("ADMIN_ALLOWLIST")),
        },
        "gateway": {
            "plugins": {
                "configured": plugin_ids,
                "allowlist": allow,
                "denylist": deny,
                "active": active,
            }
        },
    }
