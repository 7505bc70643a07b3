"""
Chat API Endpoint

Receives widget messages, runs them through the dialogue engine for the
caller's session and returns the next reply, buttons and input flags.

Each session has its own lock, so messages of one conversation are processed
strictly one after another while other sessions proceed independently.
"""

from fastapi import APIRouter, Depends
import uuid
import logging

from medichat.api.dependencies import get_engine, get_session_store
from medichat.core.engine import DialogueEngine
from medichat.core.state_manager import SessionStore
from medichat.schemas.chat import ChatRequest, ChatResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/chat", response_model=ChatResponse, response_model_by_alias=True, response_model_exclude_none=True)
async def handle_chat_message(
    request: ChatRequest,
    store: SessionStore = Depends(get_session_store),
    engine: DialogueEngine = Depends(get_engine),
):
    session_id = request.session_id or str(uuid.uuid4())

    async with store.lock(session_id):
        state = store.load_or_create(session_id)
        previous_stage = state.stage
        result = await engine.handle(state, request.message, session_id=session_id)
        if result.silent:
            # An ended conversation restarts from a fresh state anyway
            store.discard(session_id)

    logger.info(
        f"Stage {int(previous_stage)} -> {int(state.stage)}",
        extra={'session_id': session_id, 'stage': int(state.stage)}
    )

    return ChatResponse(
        session_id=session_id,
        reply=result.reply,
        buttons=[button.to_payload() for button in result.buttons],
        disable_input=result.disable_input,
        hide_input=result.hide_input,
        is_medical_inquiry=result.is_medical_inquiry,
        silent=True if result.silent else None,
    )
