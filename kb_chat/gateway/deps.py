import os

from kb_chat.core.config.loader import load_chat_config
from kb_chat.core.config.models import ChatConfig

_CONFIG: ChatConfig | None = None


def get_chat_config() -> ChatConfig:
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = load_chat_config(os.environ.get("CONFIG_PATH") or None)
    return _CONFIG
