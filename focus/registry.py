# focus/registry.py
"""
Owns every live player session and the lifecycle of their focus engines.
"""
import asyncio
import logging
import random
from typing import Dict, List, Optional

import config
from .engine import FocusEngine, Clock
from .session import PlayerSession

log = logging.getLogger(__name__)

class SessionNotFoundError(KeyError):
    """Raised when a session id is not registered."""

class SessionRegistry:
    """
    Creates, looks up and tears down player sessions. A session's engine is
    started when it is registered and stopped when it is removed.
    """

    def __init__(self, clock: Optional[Clock] = None, seed: Optional[int] = None):
        self.clock = clock
        self.seed = seed
        self.sessions: Dict[str, PlayerSession] = {}

    def __len__(self) -> int:
        return len(self.sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self.sessions

    def create_session(self, handle: str, writer: Optional[asyncio.StreamWriter] = None,
                       credits: int = config.STARTING_CREDITS, autostart: bool = True) -> PlayerSession:
        """Builds a session with a fresh engine and registers it."""
        rng = random.Random(self.seed) if self.seed is not None else random.Random()
        engine = FocusEngine(clock=self.clock, rng=rng, label=handle)
        session = PlayerSession(handle, engine, writer=writer, credits=credits)
        self.sessions[session.id] = session
        if autostart:
            engine.start()
        log.info("Session %s opened for %s. %d active.", session.id[:8], handle, len(self.sessions))
        return session

    def get(self, session_id: str) -> Optional[PlayerSession]:
        return self.sessions.get(session_id)

    def require(self, session_id: str) -> PlayerSession:
        session = self.sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def find_by_handle(self, handle: str) -> Optional[PlayerSession]:
        handle = handle.lower()
        for session in self.sessions.values():
            if session.handle.lower() == handle:
                return session
        return None

    def list_sessions(self) -> List[PlayerSession]:
        return list(self.sessions.values())

    def remove_session(self, session_id: str) -> Optional[PlayerSession]:
        session = self.sessions.pop(session_id, None)
        if session:
            session.engine.stop()
            log.info("Session %s closed for %s. %d active.", session_id[:8], session.handle, len(self.sessions))
        return session

    def shutdown(self):
        """Stops every engine and forgets all sessions."""
        log.info("Closing %d sessions...", len(self.sessions))
        for session_id in list(self.sessions):
            self.remove_session(session_id)

    async def broadcast(self, message: str, exclude: Optional[set] = None):
        exclude = exclude or set()
        for session in self.list_sessions():
            if session not in exclude:
                await session.send(message)
