"""
Shared FastAPI dependencies.

One SessionStore and one DialogueEngine live for the lifetime of the process.
Tests swap them out through ``app.dependency_overrides``.
"""

from functools import lru_cache

from medichat.core import config
from medichat.core.engine import DialogueEngine
from medichat.core.state_manager import SessionStore


@lru_cache
def get_session_store() -> SessionStore:
    return SessionStore(max_sessions=config.MAX_SESSIONS)


@lru_cache
def get_engine() -> DialogueEngine:
    return DialogueEngine()
