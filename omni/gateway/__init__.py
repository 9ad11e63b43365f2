"""Inbound event pipeline."""

from omni.gateway.events import BotIdentity, InboundMessage
from omni.gateway.pipeline import InboundPipeline, PipelineResult

__all__ = ["BotIdentity", "InboundMessage", "InboundPipeline", "PipelineResult"]
