"""Inbound decision pipeline: dedup, access, task routing, hook dispatch."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

from loguru import logger

from omni.config.schema import Config, TasksConfig
from omni.dedupe.inbound import InboundDedupe
from omni.dedupe.sent import SentMessageCache
from omni.gateway.events import BotIdentity, InboundMessage
from omni.hooks.engine import HookEngine
from omni.hooks.types import HookAction, HookEvent
from omni.tasks.router import TaskDecision, route_message

if TYPE_CHECKING:
    from omni.access.groups import AccessPolicy

PipelineStatus = Literal["duplicate", "denied", "ignored", "empty", "command", "accepted"]
ReactionMode = Literal["off", "own", "all"]


@dataclass
class PipelineResult:
    status: PipelineStatus
    text: str = ""
    decision: TaskDecision | None = None
    actions: list[HookAction] = field(default_factory=list)
    reply_access_denied: bool = False

    @property
    def accepted(self) -> bool:
        return self.status == "accepted"


class InboundPipeline:
    """
    Runs the per-message decision layer.

    The caches are owned by the caller and passed in, so tests and separate
    bot instances can use independent state. Not safe for use from several
    threads at once.
    """

    def __init__(
        self,
        *,
        dedupe: InboundDedupe,
        sent_cache: SentMessageCache,
        access: "AccessPolicy",
        hooks: HookEngine | None = None,
        tasks: TasksConfig | None = None,
        hook_event: str = "telegram.message",
    ):
        self.dedupe = dedupe
        self.sent_cache = sent_cache
        self.access = access
        self.hooks = hooks or HookEngine()
        self.tasks = tasks or TasksConfig()
        self.hook_event = hook_event

    @classmethod
    def from_config(cls, config: Config, hooks: HookEngine | None = None) -> "InboundPipeline":
        from omni.access.groups import AccessPolicy

        return cls(
            dedupe=InboundDedupe(
                ttl_seconds=config.dedupe.ttl_seconds,
                max_per_chat=config.dedupe.max_per_chat,
            ),
            sent_cache=SentMessageCache(
                ttl_seconds=config.dedupe.sent_ttl_seconds,
                cleanup_threshold=config.dedupe.sent_cleanup_threshold,
            ),
            access=AccessPolicy(
                bot=BotIdentity(id=config.access.bot_id, username=config.access.bot_username or None),
                allowed_groups=config.access.allowed_groups,
                allowed_user_ids=config.access.allowed_user_ids,
                require_mention=config.access.require_mention,
            ),
            hooks=hooks,
            tasks=config.tasks,
        )

    def process(self, msg: InboundMessage) -> PipelineResult:
        if not msg.system_event and msg.message_id is not None:
            if self.dedupe.should_skip(msg.chat_id, msg.message_id):
                return PipelineResult(status="duplicate")

        if not self.access.is_user_allowed(msg) or not self.access.is_group_allowed(msg):
            reply = self.access.should_reply_access_denied(msg)
            logger.info(f"Access denied for sender {msg.sender_id} in {msg.channel}:{msg.chat_id}")
            return PipelineResult(status="denied", reply_access_denied=reply)

        if not self.access.passes_mention_gate(msg):
            logger.debug(f"Ignoring unaddressed group message in {msg.chat_id}")
            return PipelineResult(status="ignored")

        text, decision = route_message(msg.content, self.tasks)
        if not text:
            return PipelineResult(status="empty", decision=decision)
        if text.startswith("/"):
            logger.debug(f"Leaving bot command to the command handlers: {text.split()[0]}")
            return PipelineResult(status="command", text=text, decision=decision)

        actions = self.hooks.dispatch(
            HookEvent(
                event=self.hook_event,
                chat_id=str(msg.chat_id),
                chat_type=msg.chat_type,
                text=text,
            )
        )
        return PipelineResult(status="accepted", text=text, decision=decision, actions=actions)

    def record_outbound(self, chat_id: str | int, message_id: int) -> None:
        """Remember a message the bot sent so later events can recognise it."""
        self.sent_cache.record(chat_id, message_id)

    def should_notify_reaction(self, chat_id: str | int, message_id: int, mode: ReactionMode = "own") -> bool:
        if mode == "off":
            return False
        if mode == "all":
            return True
        return self.sent_cache.was_sent_by_bot(chat_id, message_id)
