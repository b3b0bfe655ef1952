import os
from pathlib import Path

from dotenv import load_dotenv

BASE_URL_VAR = "KB_CHAT_BASE_URL"
PASSWORD_VAR = "KB_CHAT_PASSWORD"


def load_env_file(env_file_path: str | Path | None, project_root: Path | None = None) -> bool:
    """Load a .env file without overriding variables already set. Returns False when there is no such file."""
    if not env_file_path:
        return False
    env_path = Path(env_file_path)
    if not env_path.is_absolute():
        env_path = (project_root or Path.cwd()) / env_path
    if not env_path.is_file():
        return False
    load_dotenv(env_path, override=False)
    return True


def get_password(env: dict[str, str] | None = None) -> str | None:
    """Login password for the chat client; None disables the login gate."""
    env = env if env is not None else dict(os.environ)
    return env.get(PASSWORD_VAR) or None
