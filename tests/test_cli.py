import json
from pathlib import Path

from typer.testing import CliRunner

from omni import __version__
from omni.cli import commands as cli_commands

runner = CliRunner()


def _write_hooks(tmp_path: Path) -> Path:
    path = tmp_path / "hooks.json"
    path.write_text(
        json.dumps(
            [
                {
                    "id": "report",
                    "event": "telegram.message",
                    "filter": {"textIncludes": "report"},
                    "action": {"type": "enqueue_turn", "text": "Build report"},
                }
            ]
        ),
        encoding="utf-8",
    )
    return path


def test_version() -> None:
    result = runner.invoke(cli_commands.app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_hooks_check(tmp_path: Path) -> None:
    path = _write_hooks(tmp_path)
    result = runner.invoke(cli_commands.app, ["hooks", "check", str(path)])
    assert result.exit_code == 0, result.output
    assert "1 hooks valid" in result.output


def test_hooks_check_failures(tmp_path: Path) -> None:
    missing = runner.invoke(cli_commands.app, ["hooks", "check", str(tmp_path / "nope.json")])
    assert missing.exit_code == 1

    bad = tmp_path / "bad.json"
    bad.write_text('[{"id": "x"}]', encoding="utf-8")
    invalid = runner.invoke(cli_commands.app, ["hooks", "check", str(bad)])
    assert invalid.exit_code == 1
    assert "Invalid hooks config" in invalid.output


def test_hooks_dispatch(tmp_path: Path) -> None:
    path = _write_hooks(tmp_path)
    result = runner.invoke(
        cli_commands.app,
        ["hooks", "dispatch", str(path), "--event", "telegram.message", "--text", "weekly report"],
    )
    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == [{"type": "enqueue_turn", "text": "Build report"}]


def test_route(tmp_path: Path) -> None:
    config = tmp_path / "config.json"
    result = runner.invoke(cli_commands.app, ["route", "/task scan site", "--config", str(config)])
    assert result.exit_code == 0, result.output
    assert "background" in result.output
    assert "scan site" in result.output


def test_status(tmp_path: Path) -> None:
    result = runner.invoke(cli_commands.app, ["status", "--config", str(tmp_path / "config.json")])
    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["serviceName"] == "omni"
