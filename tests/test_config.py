import json

import pytest

from dlmm_terminal import config as config_module
from dlmm_terminal.config import (
    load_config, save_config, update_config_with_defaults, apply_env_overrides,
    validate_config
)
from dlmm_terminal.constants import DEFAULT_CONFIG, DEFAULT_API_BASE
from dlmm_terminal.errors import ConfigError


@pytest.fixture(autouse=True)
def no_dotenv(monkeypatch):
    monkeypatch.setattr(config_module, "load_dotenv", lambda *args, **kwargs: False)


def test_missing_file_gives_defaults(tmp_path):
    config = load_config(str(tmp_path / "missing.json"), use_env=False)
    assert config == DEFAULT_CONFIG
    assert config is not DEFAULT_CONFIG
    config["watch"]["interval"] = 1
    assert DEFAULT_CONFIG["watch"]["interval"] == 30


def test_file_values_are_merged_with_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"cluster": "devnet", "watch": {"interval": 5}}))
    config = load_config(str(path), use_env=False)
    assert config["cluster"] == "devnet"
    assert config["watch"] == {"interval": 5, "limit": 50}
    assert config["api_base_url"] == DEFAULT_API_BASE


def test_invalid_json_raises(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")
    with pytest.raises(ConfigError):
        load_config(str(path), use_env=False)


def test_non_object_json_raises(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2]")
    with pytest.raises(ConfigError):
        load_config(str(path), use_env=False)


def test_environment_overrides_file(tmp_path, monkeypatch):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"rpc_url": "https://file.rpc"}))
    monkeypatch.setenv("SOLANA_RPC", "https://env.rpc")
    monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "abc")
    monkeypatch.setenv("DLMM_CLUSTER", "  ")
    config = load_config(str(path))
    assert config["rpc_url"] == "https://env.rpc"
    assert config["notifications"]["telegram"]["bot_token"] == "abc"
    assert config["cluster"] == ""


def test_apply_env_overrides_creates_sections():
    config = apply_env_overrides({}, {"DLMM_POSITION_BACKEND": "pkg.mod:Backend"})
    assert config == {"positions": {"backend": "pkg.mod:Backend"}}


def test_update_config_with_defaults_reports_changes():
    config = json.loads(json.dumps(DEFAULT_CONFIG))
    assert update_config_with_defaults(config) is False
    del config["notifications"]["telegram"]
    assert update_config_with_defaults(config) is True
    assert config["notifications"]["telegram"]["chat_id"] == ""


def test_save_then_load(tmp_path):
    path = str(tmp_path / "saved.json")
    config = load_config(path, use_env=False)
    config["cluster"] = "devnet"
    assert save_config(config, path) == path
    assert load_config(path, use_env=False)["cluster"] == "devnet"


def test_validate_config():
    config = json.loads(json.dumps(DEFAULT_CONFIG))
    assert validate_config(config)

    for mutate in (
        lambda c: c.update(api_base_url=""),
        lambda c: c.update(request_timeout=0),
        lambda c: c["watch"].update(interval=-1),
        lambda c: c["notifications"].update(min_interval="fast"),
    ):
        broken = json.loads(json.dumps(DEFAULT_CONFIG))
        mutate(broken)
        with pytest.raises(ConfigError):
            validate_config(broken)
