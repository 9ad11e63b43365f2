"""Task routing: inline vs background execution."""

from omni.tasks.router import (
    TaskDecision,
    TaskOverride,
    decide_task_mode,
    extract_task_override,
    route_message,
)

__all__ = ["TaskDecision", "TaskOverride", "decide_task_mode", "extract_task_override", "route_message"]
