"""Gateway authorization and chat access gating."""

from omni.access.gateway import (
    authorize_gateway_token,
    build_admin_status_payload,
    ensure_gateway_token,
    require_gateway_token,
)
from omni.access.groups import AccessPolicy, is_group_chat

__all__ = [
    "AccessPolicy",
    "authorize_gateway_token",
    "build_admin_status_payload",
    "ensure_gateway_token",
    "is_group_chat",
    "require_gateway_token",
]
