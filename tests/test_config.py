import json
from pathlib import Path

from omni.config import Config, load_config, save_config
from omni.config.loader import camel_to_snake, snake_to_camel


def test_load_config_reads_camel_case_file(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "tasks": {"urlThreshold": 5, "keywords": "nightly digest, export"},
                "access": {"botUsername": "omni_bot", "allowedUserIds": ["1", "2"]},
                "storage": {"backend": "worker", "workerUrl": "https://w.example"},
            }
        ),
        encoding="utf-8",
    )

    config = load_config(path)

    assert config.tasks.url_threshold == 5
    assert config.tasks.keywords == ["nightly digest", "export"]
    assert config.access.bot_username == "omni_bot"
    assert config.access.allowed_user_ids == ["1", "2"]
    assert config.storage.worker_url == "https://w.example"


def test_invalid_config_falls_back_to_defaults(tmp_path: Path) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    assert load_config(broken).tasks.url_threshold == 3

    invalid = tmp_path / "invalid.json"
    invalid.write_text(json.dumps({"dedupe": {"maxPerChat": 5}}), encoding="utf-8")
    assert load_config(invalid).dedupe.max_per_chat == 5000

    assert load_config(tmp_path / "missing.json").gateway.port == 18790


def test_save_config_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "config.json"
    config = Config()
    config.gateway.token = "tok"
    config.hooks.max_concurrency = 4

    save_config(config, path)

    raw = json.loads(path.read_text(encoding="utf-8"))
    assert raw["gateway"]["token"] == "tok"
    assert raw["hooks"]["maxConcurrency"] == 4
    loaded = load_config(path)
    assert loaded.gateway.token == "tok"
    assert loaded.hooks.max_concurrency == 4


def test_default_path_under_home(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
    save_config(Config())
    assert (tmp_path / ".omni" / "config.json").exists()


def test_environment_overrides(monkeypatch) -> None:
    monkeypatch.setenv("OMNI_TASKS__URL_THRESHOLD", "7")
    monkeypatch.setenv("OMNI_GATEWAY__TOKEN", "from-env")
    config = Config()
    assert config.tasks.url_threshold == 7
    assert config.gateway.token == "from-env"


def test_status_env_and_hooks_path(tmp_path: Path) -> None:
    config = Config.model_validate({"hooks": {"path": str(tmp_path / "hooks.json")}})
    config.gateway.allowlist = ["1.1.1.1", "2.2.2.2"]
    assert config.hooks_path == tmp_path / "hooks.json"
    assert config.status_env()["ADMIN_ALLOWLIST"] == "1.1.1.1,2.2.2.2"


def test_key_case_helpers() -> None:
    assert camel_to_snake("maxPerChat") == "max_per_chat"
    assert snake_to_camel("trust_forwarded_for") == "trustForwardedFor"
