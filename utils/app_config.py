"""Bootstrap configuration. Zero imports from the services layer.

Stores preferences that must be known before the state file is loaded
(data file location, log level, advice model). Config lives in
~/.zenbudget/config.json; environment variables (optionally from a .env file)
take precedence over it.
"""
import json
import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from utils.constants import STATE_FILE, DEFAULT_ADVICE_MODEL

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".zenbudget"
CONFIG_FILE = CONFIG_DIR / "config.json"


def load_env() -> None:
    """Load a .env file from the working directory, if present."""
    load_dotenv()


def load_config() -> dict:
    """Returns {} on missing or corrupt file; never raises."""
    try:
        with open(CONFIG_FILE, "r", encoding="utf-8") as f:
            config = json.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable config %s: %s", CONFIG_FILE, e)
        return {}
    return config if isinstance(config, dict) else {}


def save_config(config: dict) -> None:
    """Creates ~/.zenbudget/ if needed; atomic write via .tmp + os.replace()."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    tmp = CONFIG_FILE.with_suffix(".tmp")
    try:
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)
        os.replace(tmp, CONFIG_FILE)
    except OSError as e:
        logger.error("Could not save config %s: %s", CONFIG_FILE, e)
        tmp.unlink(missing_ok=True)


def get_data_file() -> Path:
    """ZENBUDGET_DATA_FILE, then config["data_file"], then ~/.zenbudget/state.json."""
    path = os.environ.get("ZENBUDGET_DATA_FILE") or load_config().get("data_file")
    return Path(path).expanduser() if path else CONFIG_DIR / STATE_FILE


def set_data_file(path: str | None) -> None:
    """Update data_file in config and save."""
    config = load_config()
    if path is None:
        config.pop("data_file", None)
    else:
        config["data_file"] = path
    save_config(config)


def get_log_level() -> str:
    return (
        os.environ.get("ZENBUDGET_LOG_LEVEL")
        or load_config().get("log_level")
        or "INFO"
    ).upper()


def get_api_key() -> str | None:
    return os.environ.get("ANTHROPIC_API_KEY") or None


def get_advice_model() -> str:
    return (
        os.environ.get("ZENBUDGET_ADVICE_MODEL")
        or load_config().get("advice_model")
        or DEFAULT_ADVICE_MODEL
    )
