from kb_chat.core.contracts.chat import (
    MARKETS,
    PRODUCTS,
    ChatMessage,
    ChatRequest,
    ChatResponse,
    ExtractionResult,
    GroundingChunk,
    Market,
    Product,
    RetrievedContext,
    TokenUsage,
)
from kb_chat.core.contracts.gateway import ChatTurnRequest, ChatTurnResponse

__all__ = [
    "MARKETS",
    "PRODUCTS",
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
    "ExtractionResult",
    "GroundingChunk",
    "Market",
    "Product",
    "RetrievedContext",
    "TokenUsage",
    "ChatTurnRequest",
    "ChatTurnResponse",
]
