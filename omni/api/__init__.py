"""HTTP admin surface."""

from omni.api.admin import create_admin_router, create_app

__all__ = ["create_admin_router", "create_app"]
