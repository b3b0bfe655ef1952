from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

Market = Literal["br", "de", "en", "tr", "fr", "all"]
Product = Literal["desktop", "mobile", "air", "neon", "spotify", "general", "all"]

MARKETS: tuple[str, ...] = ("all", "br", "de", "en", "tr", "fr")
PRODUCTS: tuple[str, ...] = ("all", "desktop", "mobile", "air", "neon", "spotify", "general")


class ChatRequest(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    question: str
    market: Market = "all"
    product: Product = "all"
    session_id: str | None = Field(default=None, alias="sessionId")

    def to_payload(self) -> dict[str, str]:
        """Webhook body; sessionId is left out entirely when there is none."""
        payload = {"question": self.question, "market": self.market, "product": self.product}
        if self.session_id:
            payload["sessionId"] = self.session_id
        return payload


class RetrievedContext(BaseModel):
    """Opaque citation payload from the webhook; nothing here is checked."""

    model_config = ConfigDict(extra="allow")

    text: Any = None
    title: Any = None
    uri: Any = None


class GroundingChunk(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    retrieved_context: RetrievedContext | None = Field(default=None, alias="retrievedContext")

    @field_validator("retrieved_context", mode="before")
    @classmethod
    def _object_or_nothing(cls, v: Any) -> Any:
        return v if isinstance(v, (dict, RetrievedContext)) else None


TOKEN_COUNT_KEYS = frozenset({"promptTokens", "candidatesTokens", "totalTokens", "prompt_tokens", "candidates_tokens", "total_tokens"})


class TokenUsage(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    prompt_tokens: int | None = Field(default=None, alias="promptTokens")
    candidates_tokens: int | None = Field(default=None, alias="candidatesTokens")
    total_tokens: int | None = Field(default=None, alias="totalTokens")


class ChatResponse(BaseModel):
    # only success and answer can reject a payload
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    success: bool
    answer: str
    sources: list[GroundingChunk] | None = None
    token_usage: TokenUsage | None = Field(default=None, alias="tokenUsage")
    error: str | None = None

    @field_validator("sources", mode="before")
    @classmethod
    def _keep_object_chunks(cls, v: Any) -> Any:
        if v is None or not isinstance(v, list):
            return None
        return [c for c in v if isinstance(c, (dict, GroundingChunk))]

    @field_validator("token_usage", mode="before")
    @classmethod
    def _drop_unusable_usage(cls, v: Any) -> Any:
        if isinstance(v, dict):
            return {
                k: None if k in TOKEN_COUNT_KEYS and (not isinstance(n, int) or isinstance(n, bool)) else n
                for k, n in v.items()
            }
        return v if isinstance(v, TokenUsage) else None

    @field_validator("error", mode="before")
    @classmethod
    def _error_as_text(cls, v: Any) -> Any:
        return v if v is None or isinstance(v, str) else str(v)


class ExtractionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    clean_text: str
    sources: list[str] = Field(default_factory=list)


class ChatMessage(BaseModel):
    role: Literal["user", "model"]
    text: str
    source_names: list[str] = Field(default_factory=list)
    grounding_chunks: list[GroundingChunk] = Field(default_factory=list)

    def grounding_texts(self) -> list[str]:
        """Retrieved text of each grounding chunk that carries one."""
        return [
            c.retrieved_context.text
            for c in self.grounding_chunks
            if c.retrieved_context and isinstance(c.retrieved_context.text, str) and c.retrieved_context.text
        ]

    def grounding_titles(self) -> list[str]:
        """Title of each grounding chunk, or a numbered placeholder when it has none."""
        titles = []
        for i, c in enumerate(self.grounding_chunks, 1):
            title = c.retrieved_context.title if c.retrieved_context else None
            titles.append(title if isinstance(title, str) and title else f"Source {i}")
        return titles

    def grounding_text(self, number: int) -> str | None:
        """Retrieved text of the 1-based grounding chunk ``number``, as listed by grounding_titles."""
        if not 1 <= number <= len(self.grounding_chunks):
            return None
        context = self.grounding_chunks[number - 1].retrieved_context
        text = context.text if context else None
        return text if isinstance(text, str) and text else None
