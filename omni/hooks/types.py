"""Hook configuration, event and action models."""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, field_validator

HOOK_EVENTS = {"telegram.message", "admin.message", "tool.finish"}


class EnqueueTurnAction(BaseModel):
    """Queue a conversational turn with the given text."""

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    type: Literal["enqueue_turn"] = "enqueue_turn"
    text: str
    kind: Literal["system", "hook", "followup"] | None = None


class SpawnSubagentAction(BaseModel):
    """Spawn a subagent run with the given prompt."""

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    type: Literal["spawn_subagent"] = "spawn_subagent"
    prompt: str
    announce_prefix: str | None = Field(default=None, alias="announcePrefix")


class PassthroughAction(BaseModel):
    """Action of a type this version does not know; all fields are kept verbatim."""

    model_config = ConfigDict(extra="allow", frozen=True)

    type: str = Field(min_length=1)


def _action_tag(value: Any) -> str | None:
    kind = value.get("type") if isinstance(value, dict) else getattr(value, "type", None)
    if kind in ("enqueue_turn", "spawn_subagent"):
        return kind
    return "passthrough"


HookAction = Annotated[
    Union[
        Annotated[EnqueueTurnAction, Tag("enqueue_turn")],
        Annotated[SpawnSubagentAction, Tag("spawn_subagent")],
        Annotated[PassthroughAction, Tag("passthrough")],
    ],
    Discriminator(_action_tag),
]


def _coerce_optional_str(value: Any) -> Any:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class HookFilter(BaseModel):
    """Optional predicates; every present one must match."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    chat_id: str | None = Field(default=None, alias="chatId")
    chat_type: str | None = Field(default=None, alias="chatType")
    text_includes: str | None = Field(default=None, alias="textIncludes")
    tool_name: str | None = Field(default=None, alias="toolName")
    min_text_length: int | None = Field(default=None, ge=0, alias="minTextLength")
    max_text_length: int | None = Field(default=None, ge=0, alias="maxTextLength")

    @field_validator("chat_id", mode="before")
    @classmethod
    def stringify_chat_id(cls, value: Any) -> Any:
        return _coerce_optional_str(value)


class Hook(BaseModel):
    """A declarative rule binding an event and filter to an action."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(min_length=1)
    event: str = Field(min_length=1)
    enabled: bool = True
    filter: HookFilter | None = None
    action: HookAction

    @field_validator("id", "event", mode="before")
    @classmethod
    def strip_text(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("enabled", mode="before")
    @classmethod
    def only_false_disables(cls, value: Any) -> bool:
        return value is not False


class HookEvent(BaseModel):
    """Runtime event offered to the hooks. Unknown fields are kept."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    event: str
    chat_id: str | None = Field(default=None, alias="chatId")
    chat_type: str | None = Field(default=None, alias="chatType")
    text: str | None = None
    tool_name: str | None = Field(default=None, alias="toolName")

    @field_validator("chat_id", mode="before")
    @classmethod
    def stringify_chat_id(cls, value: Any) -> Any:
        return _coerce_optional_str(value)

    @property
    def text_length(self) -> int:
        return len(self.text or "")
