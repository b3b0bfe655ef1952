from __future__ import annotations

from pydantic import BaseModel, Field

DEFAULT_BASE_URL = "https://n8n.lomeai.com/webhook"


class ChatConfig(BaseModel):
    base_url: str = DEFAULT_BASE_URL
    endpoint_path: str = "/opera-kb-chat"
    max_retries: int = Field(default=2, ge=0)  # retries on empty body, on top of the first attempt
    retry_delay_seconds: float = Field(default=1.0, ge=0)
    timeout_seconds: float | None = None  # None = no deadline
    state_file_path: str = "data/state.json"
    env_file_path: str | None = None
    example_questions: list[str] = Field(default_factory=list)

    @property
    def chat_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/{self.endpoint_path.lstrip('/')}"

    @property
    def max_attempts(self) -> int:
        return 1 + self.max_retries
