from kb_chat.core.config.loader import load_chat_config
from kb_chat.core.config.models import ChatConfig
from kb_chat.core.exceptions import ConfigError, ChatRequestError, EmptyResponseError

__all__ = [
    "load_chat_config",
    "ChatConfig",
    "ConfigError",
    "ChatRequestError",
    "EmptyResponseError",
]
