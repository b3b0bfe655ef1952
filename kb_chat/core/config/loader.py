import json
import logging
import os
from pathlib import Path

from pydantic import ValidationError

from kb_chat.core.config.env import BASE_URL_VAR, load_env_file
from kb_chat.core.config.models import ChatConfig
from kb_chat.core.exceptions import ConfigError

log = logging.getLogger("config")


def apply_env_overrides(config: ChatConfig, env: dict[str, str] | None = None) -> ChatConfig:
    env = env if env is not None else dict(os.environ)
    base_url = env.get(BASE_URL_VAR)
    if base_url:
        return config.model_copy(update={"base_url": base_url})
    return config


def _read_config_file(path: Path) -> ChatConfig:
    if not path.is_file():
        raise ConfigError(f"Chat config not found: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigError(f"Chat config {path} is not valid JSON: {e}") from e
    try:
        return ChatConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Chat config {path} does not match the expected schema: {e}") from e


def load_chat_config(config_path: str | Path | None = None, project_root: Path | None = None) -> ChatConfig:
    """Load the chat config from JSON (defaults when no path), then apply .env and environment overrides."""
    if config_path is None:
        return apply_env_overrides(ChatConfig())
    root = project_root or Path.cwd()
    path = Path(config_path)
    config = _read_config_file(path if path.is_absolute() else root / path)
    if config.env_file_path and not load_env_file(config.env_file_path, root):
        log.info("No env file at %s; using the process environment", config.env_file_path)
    return apply_env_overrides(config)
