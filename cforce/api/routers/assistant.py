"""Security assistant chat endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from cforce.api.dependencies import get_orchestrator
from cforce.api.models import ChatHistoryResponse, ChatMessageModel, ChatRequest
from cforce.orchestrator import IntelOrchestrator

router = APIRouter()


def _history(orchestrator: IntelOrchestrator) -> ChatHistoryResponse:
    return ChatHistoryResponse(
        messages=[
            ChatMessageModel(role=m.role, content=m.content) for m in orchestrator.chat_history
        ],
        pending=orchestrator.chat_pending,
    )


@router.post("/messages", response_model=ChatMessageModel)
async def send_message(
    request: ChatRequest,
    orchestrator: IntelOrchestrator = Depends(get_orchestrator),
) -> ChatMessageModel:
    """Ask the assistant a question about the latest intelligence result."""
    reply = await orchestrator.ask(request.message)
    if reply is None:
        raise HTTPException(status_code=409, detail="Assistant is still answering the previous message")
    return ChatMessageModel(role=reply.role, content=reply.content)


@router.get("/messages", response_model=ChatHistoryResponse)
async def list_messages(
    orchestrator: IntelOrchestrator = Depends(get_orchestrator),
) -> ChatHistoryResponse:
    """Full chat history of the session."""
    return _history(orchestrator)
