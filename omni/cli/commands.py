"""CLI commands for omni."""

import json
import secrets
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from omni import __logo__, __version__

app = typer.Typer(
    name="omni",
    help=f"{__logo__} omni - chat gateway dispatch and routing core",
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"{__logo__} omni v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True
    ),
):
    """omni - chat gateway dispatch and routing core."""
    pass


def _load(config_path: Path | None):
    from omni.config.loader import load_config

    return load_config(config_path)


# ============================================================================
# Gateway
# ============================================================================


@app.command()
def gateway(
    port: int | None = typer.Option(None, "--port", "-p", help="Admin API port"),
    config_path: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
):
    """Start the admin gateway API."""
    import uvicorn

    from omni.api.admin import create_app
    from omni.config.loader import get_config_path, save_config

    config = _load(config_path)
    if not config.gateway.token:
        config.gateway.token = secrets.token_urlsafe(32)
        save_config(config, config_path or get_config_path())
        console.print(f"[yellow]Gateway token generated:[/yellow] {config.gateway.token}")

    bind_port = port or config.gateway.port
    console.print(f"{__logo__} Starting omni gateway on {config.gateway.host}:{bind_port}...")
    uvicorn.run(create_app(config), host=config.gateway.host, port=bind_port, log_level="info")


@app.command()
def status(
    config_path: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
):
    """Show the admin status payload for the current configuration."""
    from omni.access.gateway import build_admin_status_payload

    config = _load(config_path)
    payload = build_admin_status_payload(env=config.status_env(), uptime_seconds=0)
    console.print_json(json.dumps(payload))


@app.command()
def route(
    text: str = typer.Argument(..., help="Message text to classify"),
    config_path: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
):
    """Show whether a message would run inline or as a background task."""
    from omni.tasks.router import route_message

    config = _load(config_path)
    effective, decision = route_message(text, config.tasks)
    tags = ", ".join(decision.tags) or "-"
    console.print(f"mode: [cyan]{decision.mode}[/cyan]  reason: {decision.reason}  tags: {tags}")
    console.print(f"text: {effective}")


# ============================================================================
# Hooks
# ============================================================================


hooks_app = typer.Typer(help="Inspect hook configuration")
app.add_typer(hooks_app, name="hooks")


def _read_hooks(path: Path):
    from omni.errors import ConfigParseError
    from omni.hooks.engine import parse_hooks_config

    if not path.exists():
        console.print(f"[red]Hooks file not found: {path}[/red]")
        raise typer.Exit(1)
    try:
        return parse_hooks_config(path.read_text(encoding="utf-8"))
    except ConfigParseError as exc:
        console.print(f"[red]Invalid hooks config:[/red] {exc}")
        raise typer.Exit(1)


@hooks_app.command("check")
def hooks_check(path: Path = typer.Argument(..., help="Hooks JSON file")):
    """Validate a hooks file and list its hooks."""
    hooks = _read_hooks(path)

    table = Table(title="Hooks")
    table.add_column("ID", style="cyan")
    table.add_column("Event")
    table.add_column("Enabled", style="green")
    table.add_column("Filter", style="yellow")
    table.add_column("Action")

    for hook in hooks:
        flt = hook.filter.model_dump(by_alias=True, exclude_none=True) if hook.filter else {}
        table.add_row(
            hook.id,
            hook.event,
            "✓" if hook.enabled else "✗",
            json.dumps(flt) if flt else "[dim]-[/dim]",
            hook.action.type,
        )

    console.print(table)
    console.print(f"[green]✓[/green] {len(hooks)} hooks valid")


@hooks_app.command("dispatch")
def hooks_dispatch(
    path: Path = typer.Argument(..., help="Hooks JSON file"),
    event: str = typer.Option(..., "--event", "-e", help="Event name, e.g. telegram.message"),
    text: str | None = typer.Option(None, "--text", "-t", help="Event text"),
    tool: str | None = typer.Option(None, "--tool", help="Tool name"),
    chat_id: str | None = typer.Option(None, "--chat-id", help="Chat id"),
    chat_type: str | None = typer.Option(None, "--chat-type", help="Chat type"),
):
    """Dry-run an event against a hooks file and print the resulting actions."""
    from omni.hooks.engine import dispatch_hooks
    from omni.hooks.types import HookEvent

    hooks = _read_hooks(path)
    ctx = HookEvent(event=event, text=text, tool_name=tool, chat_id=chat_id, chat_type=chat_type)
    actions = dispatch_hooks(hooks, ctx)
    console.print_json(json.dumps([a.model_dump(by_alias=True, exclude_none=True) for a in actions]))


if __name__ == "__main__":
    app()
