from pydantic import BaseModel, Field

from kb_chat.core.contracts.chat import ChatMessage, Market, Product


class ChatTurnRequest(BaseModel):
    question: str = Field(..., min_length=1)
    market: Market = "all"
    product: Product = "all"
    session_id: str | None = None


class ChatTurnResponse(BaseModel):
    session_id: str
    success: bool
    message: ChatMessage
