import json
import logging

import pytest

from utils import app_config
from utils.constants import DEFAULT_ADVICE_MODEL
from utils.logging_config import configure_logging


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(app_config, "CONFIG_DIR", tmp_path / "cfg")
    monkeypatch.setattr(app_config, "CONFIG_FILE", tmp_path / "cfg" / "config.json")
    for var in ("ZENBUDGET_DATA_FILE", "ZENBUDGET_LOG_LEVEL", "ZENBUDGET_ADVICE_MODEL", "ANTHROPIC_API_KEY"):
        monkeypatch.delenv(var, raising=False)
    return tmp_path / "cfg"


def test_defaults_without_config(config_dir):
    assert app_config.load_config() == {}
    assert app_config.get_data_file() == config_dir / "state.json"
    assert app_config.get_log_level() == "INFO"
    assert app_config.get_advice_model() == DEFAULT_ADVICE_MODEL
    assert app_config.get_api_key() is None


def test_set_data_file_persists(config_dir, tmp_path):
    target = str(tmp_path / "elsewhere.json")

    app_config.set_data_file(target)

    assert json.loads((config_dir / "config.json").read_text())["data_file"] == target
    assert str(app_config.get_data_file()) == target

    app_config.set_data_file(None)
    assert app_config.get_data_file() == config_dir / "state.json"


def test_environment_overrides_config(config_dir, monkeypatch, tmp_path):
    app_config.save_config({"data_file": "/from/config.json", "log_level": "warning"})
    monkeypatch.setenv("ZENBUDGET_DATA_FILE", str(tmp_path / "env.json"))
    monkeypatch.setenv("ZENBUDGET_ADVICE_MODEL", "other-model")
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-test")

    assert app_config.get_data_file() == tmp_path / "env.json"
    assert app_config.get_log_level() == "WARNING"
    assert app_config.get_advice_model() == "other-model"
    assert app_config.get_api_key() == "sk-test"


def test_corrupt_config_is_ignored(config_dir):
    config_dir.mkdir()
    (config_dir / "config.json").write_text("{oops", encoding="utf-8")

    assert app_config.load_config() == {}


def test_configure_logging_installs_one_handler():
    configure_logging("debug")
    configure_logging("warning")

    root = logging.getLogger()
    assert len(root.handlers) == 1
    assert root.level == logging.WARNING
