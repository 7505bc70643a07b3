import asyncio
import logging
from collections import OrderedDict
from enum import IntEnum
from typing import Dict, Optional

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class Stage(IntEnum):
    """Steps of the guided dialogue."""
    FRESH = 0
    NAME_PROMPT = 1
    AWAITING_NAME = 2
    AWAITING_EMAIL = 3
    AWAITING_INTENT = 4
    SPECIALTY = 5
    DOCTOR = 6
    TIME_SLOT = 7
    CONFIRMED = 8
    MEDICAL_INQUIRY = 9


class ConversationState(BaseModel):
    """One conversation's progress, mutated in place by the dialogue engine."""
    model_config = {"validate_assignment": True}

    stage: Stage = Stage.FRESH
    user_name: Optional[str] = None
    user_email: Optional[str] = None
    selected_specialty: Optional[str] = None
    selected_doctor: Optional[str] = None
    is_medical_inquiry: bool = False

    def reset(self, stage: Stage = Stage.FRESH) -> "ConversationState":
        self.user_name = None
        self.user_email = None
        self.selected_specialty = None
        self.selected_doctor = None
        self.is_medical_inquiry = False
        self.stage = stage
        return self


class SessionStore:
    """
    In-memory mapping of session id -> ConversationState.

    Every session gets its own asyncio.Lock; callers hold it for the whole
    request so two messages of one session never interleave.

    When ``max_sessions`` is set, creating a session beyond the cap evicts the
    least recently used sessions whose lock is not held.
    """

    def __init__(self, max_sessions: Optional[int] = None):
        self.max_sessions = max_sessions
        self._states: "OrderedDict[str, ConversationState]" = OrderedDict()
        self._locks: Dict[str, asyncio.Lock] = {}

    def __len__(self) -> int:
        return len(self._states)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._states

    def get(self, session_id: str) -> Optional[ConversationState]:
        return self._states.get(session_id)

    def load_or_create(self, session_id: str) -> ConversationState:
        state = self._states.get(session_id)
        if state is not None:
            self._states.move_to_end(session_id)
            return state

        state = ConversationState()
        self._states[session_id] = state
        logger.info("Created conversation state", extra={'session_id': session_id})
        self._evict_idle(keep=session_id)
        return state

    def discard(self, session_id: str) -> None:
        self._states.pop(session_id, None)
        self._locks.pop(session_id, None)

    def lock(self, session_id: str) -> asyncio.Lock:
        lock = self._locks.get(session_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[session_id] = lock
        return lock

    def _evict_idle(self, keep: str) -> None:
        if self.max_sessions is None:
            return
        excess = len(self._states) - self.max_sessions
        if excess <= 0:
            return
        for session_id in list(self._states):
            if excess <= 0:
                break
            if session_id == keep:
                continue
            lock = self._locks.get(session_id)
            if lock is not None and lock.locked():
                continue
            self.discard(session_id)
            excess -= 1
            logger.info("Evicted idle conversation state", extra={'session_id': session_id})
