# Role: Read-only transparency endpoint for the UI, plus the input-buffer update command.
# Does NOT submit anything. Only exposes / edits the current session snapshot by session_id.

from fastapi import APIRouter, Depends

from savage_dev.api.deps import get_session_manager, lookup_session
from savage_dev.api.schemas import InputUpdate, StateSnapshot
from savage_dev.core.session_manager import SessionManager

router = APIRouter(tags=["state"])


@router.get("/state/{session_id}", response_model=StateSnapshot)
def get_state(session_id: str, manager: SessionManager = Depends(get_session_manager)) -> StateSnapshot:
    session = lookup_session(manager, session_id)
    return StateSnapshot.from_state(session.snapshot())


@router.put("/state/{session_id}/input", response_model=StateSnapshot)
def update_input(
    session_id: str,
    body: InputUpdate,
    manager: SessionManager = Depends(get_session_manager),
) -> StateSnapshot:
    session = lookup_session(manager, session_id)
    session.set_input(body.text)
    return StateSnapshot.from_state(session.snapshot())
