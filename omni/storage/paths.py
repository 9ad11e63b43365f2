"""Pure helpers that namespace logical storage keys."""

from omni.utils.helpers import sanitize_key_part

WORKSPACE_ROOT = "workspaces"


def resolve_workspace_id(value: str | None = None) -> str:
    return sanitize_key_part(value)


def workspace_base_key(workspace_id: str) -> str:
    return f"{WORKSPACE_ROOT}/{resolve_workspace_id(workspace_id)}"


def workspace_file_key(workspace_id: str, file_path: str) -> str:
    return f"{workspace_base_key(workspace_id)}/{file_path.lstrip('/')}"


def workspace_context_key(workspace_id: str, file_path: str) -> str:
    return f"{workspace_base_key(workspace_id)}/context/{file_path.lstrip('/')}"


def memory_daily_path(date: str) -> str:
    return f"memory/{date}.md"


def session_history_key(workspace_id: str, session_key: str) -> str:
    return f"{workspace_base_key(workspace_id)}/sessions/{sanitize_key_part(session_key)}.jsonl"
