"""Gateway FastAPI app: POST /chat runs one conversation turn against the knowledge-base webhook."""
import logging
import os

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from kb_chat.chat.session import Conversation
from kb_chat.core.config.models import ChatConfig
from kb_chat.core.contracts.gateway import ChatTurnRequest, ChatTurnResponse
from kb_chat.gateway.deps import get_chat_config

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(name)s] %(message)s", datefmt="%H:%M:%S")
log = logging.getLogger("gateway")

app = FastAPI(title="Knowledge Base Chat: Gateway")
app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/examples")
def examples(config: ChatConfig = Depends(get_chat_config)):
    return {"questions": config.example_questions}


@app.post("/chat", response_model=ChatTurnResponse)
async def chat(req: ChatTurnRequest, config: ChatConfig = Depends(get_chat_config)):
    conversation = Conversation(config=config, session_id=req.session_id)
    log.info("CHAT %s [%s/%s]", conversation.session_id[:8], req.market, req.product)
    message = await conversation.ask(req.question, req.market, req.product)
    # on failure message carries the apology; the error detail stays in the log
    return ChatTurnResponse(
        session_id=conversation.session_id,
        success=conversation.last_error is None,
        message=message,
    )


if __name__ == "__main__":
    import uvicorn
    port = int(os.environ.get("PORT", "8000"))
    uvicorn.run(app, host="0.0.0.0", port=port)
