# focus/session.py
"""
Represents a connected player: one focus engine plus the terminal context
needed to price and display their commands.
"""
from __future__ import annotations
import asyncio
import logging
import uuid
from typing import Optional, List

import config
from . import utils
from .engine import FocusEngine
from .models import CostContext

log = logging.getLogger(__name__)

class PlayerSession:
    """A player session, owning exactly one FocusEngine."""

    def __init__(self, handle: str, engine: FocusEngine, writer: Optional[asyncio.StreamWriter] = None,
                 credits: int = config.STARTING_CREDITS, session_id: Optional[str] = None):
        self.id: str = session_id or uuid.uuid4().hex
        self.handle: str = handle
        self.engine: FocusEngine = engine
        self.writer: Optional[asyncio.StreamWriter] = writer
        self.credits: int = credits

        # --- Command pacing ---
        self.last_command_at: Optional[float] = None
        self.prompt_shown_at: Optional[float] = None
        self.consecutive_actions: int = 0
        self.commands_issued: int = 0
        self.history: List[str] = []

    def __repr__(self) -> str:
        return f"<PlayerSession {self.handle} ({self.id[:8]})>"

    def mark_prompt(self):
        """Remembers when the player was last given a prompt."""
        self.prompt_shown_at = self.engine.clock()

    def next_context(self) -> CostContext:
        """
        Records a new focus-spending command and returns the cost context for it.
        Commands issued within CONSECUTIVE_RESET_MS of each other form a run.
        """
        now = self.engine.clock()
        if self.last_command_at is not None and now - self.last_command_at <= config.CONSECUTIVE_RESET_MS:
            self.consecutive_actions += 1
        else:
            self.consecutive_actions = 1
        self.last_command_at = now
        self.commands_issued += 1

        time_spent = None
        if self.prompt_shown_at is not None:
            time_spent = now - self.prompt_shown_at
        return CostContext(time_spent=time_spent, consecutive_actions=self.consecutive_actions)

    def remember(self, line: str, limit: int = 50):
        self.history.append(line)
        if len(self.history) > limit:
            del self.history[:-limit]

    def spend_credits(self, amount: int) -> bool:
        if amount > self.credits:
            return False
        self.credits -= amount
        return True

    async def send(self, message: str, add_newline: bool = True):
        """Sends a message to the player's terminal, if one is attached."""
        if not self.writer or self.writer.is_closing():
            log.debug("No open terminal for %s, dropping message.", self.handle)
            return
        message_to_send = utils.colorize(message)
        if add_newline and not message_to_send.endswith("\r\n"):
            message_to_send += "\r\n"
        try:
            self.writer.write(message_to_send.encode(config.ENCODING))
            await self.writer.drain()
        except (ConnectionResetError, BrokenPipeError):
            log.warning("Connection lost for %s while sending.", self.handle)

    def summary(self) -> dict:
        state = self.engine.get_state()
        return {
            "id": self.id,
            "handle": self.handle,
            "credits": self.credits,
            "focus": round(self.engine.get_focus_percentage(), 1),
            "status": self.engine.focus_status(),
            "is_overloaded": state.is_overloaded,
            "active_effects": len(state.effects),
            "active_stimulants": len(state.stimulants),
            "commands_issued": self.commands_issued,
            "connected": self.writer is not None,
        }
