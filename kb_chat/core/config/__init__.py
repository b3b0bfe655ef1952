from kb_chat.core.config.loader import load_chat_config, apply_env_overrides
from kb_chat.core.config.models import ChatConfig, DEFAULT_BASE_URL
from kb_chat.core.config.env import get_password

__all__ = ["load_chat_config", "apply_env_overrides", "ChatConfig", "DEFAULT_BASE_URL", "get_password"]
