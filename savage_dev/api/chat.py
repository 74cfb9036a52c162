# Role: Thin HTTP adapter for the chat endpoints. Validates request/response shapes and delegates the turn
# to the session's ChatSession (business logic lives in core, not in the API layer).

from fastapi import APIRouter, Depends, Response

from savage_dev.api.deps import get_session_manager, lookup_session
from savage_dev.api.schemas import ChatRequest, ChatResponse, MessageOut, SessionCreated
from savage_dev.core.session_manager import SessionManager

router = APIRouter(tags=["chat"])


@router.post("/sessions", response_model=SessionCreated)
def create_session(manager: SessionManager = Depends(get_session_manager)) -> SessionCreated:
    session = manager.create()
    return SessionCreated(session_id=session.session_id)


@router.delete("/sessions/{session_id}", status_code=204)
def delete_session(session_id: str, manager: SessionManager = Depends(get_session_manager)) -> Response:
    lookup_session(manager, session_id)
    manager.drop(session_id)
    return Response(status_code=204)


@router.post("/chat", response_model=ChatResponse)
async def chat(req: ChatRequest, manager: SessionManager = Depends(get_session_manager)) -> ChatResponse:
    # 1) Forward the text to the session controller
    # 2) Rejected submissions (blank, or one already in flight) are reported with accepted=False
    # 3) Return both turns of this submission in a stable schema for UI/clients
    manager.cleanup_expired()
    session = manager.get_or_create(req.session_id)

    before = len(session.messages)
    assistant = await session.submit(req.user_message)
    if assistant is None:
        return ChatResponse(session_id=req.session_id, accepted=False)

    user = session.messages[before]
    return ChatResponse(
        session_id=req.session_id,
        accepted=True,
        user_message=MessageOut.from_message(user),
        assistant_message=MessageOut.from_message(assistant),
    )
