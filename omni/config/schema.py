"""Configuration schema using Pydantic."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DedupeConfig(BaseModel):
    """Inbound dedup and sent-message cache settings."""
    ttl_seconds: float = Field(default=20 * 60, ge=1)
    max_per_chat: int = Field(default=5000, ge=100)
    sent_ttl_seconds: float = Field(default=24 * 60 * 60, ge=1)
    sent_cleanup_threshold: int = Field(default=100, ge=1)


class TasksConfig(BaseModel):
    """Background task routing heuristics."""
    enabled: bool = True
    url_threshold: int = Field(default=3, ge=1)
    min_chars: int = Field(default=800, ge=1)
    keywords: list[str] = Field(default_factory=list)
    builtin_keywords: bool = False

    @field_validator("keywords", mode="before")
    @classmethod
    def split_keywords(cls, value):
        if isinstance(value, str):
            return [v.strip() for v in value.split(",") if v.strip()]
        return value


class HooksConfig(BaseModel):
    """Declarative hook configuration."""
    enabled: bool = True
    path: str = "~/.omni/hooks.json"
    max_concurrency: int = Field(default=1, ge=1, le=16)


class AccessConfig(BaseModel):
    """Chat access gating."""
    bot_id: str = ""
    bot_username: str = ""
    allowed_groups: list[str] = Field(default_factory=list)
    allowed_user_ids: list[str] = Field(default_factory=list)
    require_mention: bool = True
    reaction_notifications: Literal["off", "own", "all"] = "own"


class GatewayConfig(BaseModel):
    """Admin gateway server configuration."""
    host: str = "127.0.0.1"
    port: int = 18790
    token: str = ""
    allowlist: list[str] = Field(default_factory=list)  # Client IPs
    trust_forwarded_for: bool = False


class StorageConfig(BaseModel):
    """Text store backend selection."""
    backend: Literal["fs", "memory", "worker"] = "fs"
    base_dir: str = "~/.omni/store"
    worker_url: str = ""
    worker_secret: str = ""
    timeout_seconds: float = Field(default=10.0, gt=0)


class ServiceConfig(BaseModel):
    """Deployment metadata reported by the status endpoint."""
    name: str = "omni"
    release_version: str = "dev"
    commit_hash: str = "local"
    region: str = "local"
    instance_id: str = "local"


class Config(BaseSettings):
    """Root configuration for omni."""
    dedupe: DedupeConfig = Field(default_factory=DedupeConfig)
    tasks: TasksConfig = Field(default_factory=TasksConfig)
    hooks: HooksConfig = Field(default_factory=HooksConfig)
    access: AccessConfig = Field(default_factory=AccessConfig)
    gateway: GatewayConfig = Field(default_factory=GatewayConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    service: ServiceConfig = Field(default_factory=ServiceConfig)

    model_config = SettingsConfigDict(env_prefix="OMNI_", env_nested_delimiter="__")

    @property
    def hooks_path(self) -> Path:
        return Path(self.hooks.path).expanduser()

    def status_env(self) -> dict[str, str]:
        """Environment-style view used by build_admin_status_payload."""
        return {
            "SERVICE_NAME": self.service.name,
            "RELEASE_VERSION": self.service.release_version,
            "COMMIT_HASH": self.service.commit_hash,
            "REGION": self.service.region,
            "INSTANCE_ID": self.service.instance_id,
            "ADMIN_API_TOKEN": self.gateway.token,
            "ADMIN_ALLOWLIST": ",".join(self.gateway.allowlist),
        }
