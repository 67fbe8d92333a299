# focus/handlers/connection.py
"""
Handles the lifecycle of a single terminal connection: choosing a handle,
opening a session, and passing commands to the command handler.
"""
import asyncio
import logging
from enum import Enum, auto
from typing import Optional

import config
from focus import utils
from focus.registry import SessionRegistry
from focus.session import PlayerSession
from focus.commands import handler as command_handler

log = logging.getLogger(__name__)

BANNER = r"""
 _   _ _____ _____ ____  _   _ _   _ _   _ _____ ____
| \ | | ____|_   _|  _ \| | | | \ | | \ | | ____|  _ \
|  \| |  _|   | | | |_) | | | |  \| |  \| |  _| | |_) |
| |\  | |___  | | |  _ <| |_| | |\  | |\  | |___|  _ <
|_| \_|_____| |_| |_| \_\\___/|_| \_|_| \_|_____|_| \_\
          neural interface online. stay focused.
"""

class ConnectionState(Enum):
    GETTING_HANDLE = auto()
    PLAYING = auto()
    DISCONNECTED = auto()

class ConnectionHandler:
    MAX_HANDLE_ATTEMPTS = 3

    def __init__(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter, registry: SessionRegistry):
        self.reader = reader
        self.writer = writer
        self.registry = registry
        self.state = ConnectionState.GETTING_HANDLE
        self.addr = writer.get_extra_info('peername', 'Unknown Address')
        self.session: Optional[PlayerSession] = None
        self.handle_attempts: int = 0
        log.info("ConnectionHandler initialized for %s", self.addr)

    async def _prompt(self, message: str):
        if not message.endswith(("\n\r", "\r\n", "> ")):
            message += ": "
        await self._send(message, add_newline=False)

    async def _read_line(self) -> Optional[str]:
        try:
            data = await self.reader.readuntil(b'\n')
            # Discard invalid telnet negotiation bytes
            return data.decode(config.ENCODING, errors='ignore').strip()
        except (ConnectionResetError, asyncio.IncompleteReadError, asyncio.LimitOverrunError, BrokenPipeError):
            self.state = ConnectionState.DISCONNECTED
            return None

    async def _send(self, message: str, add_newline: bool = True):
        if self.writer.is_closing():
            return
        message_to_send = utils.colorize(message)
        if add_newline and not message_to_send.endswith('\r\n'):
            message_to_send += '\r\n'
        try:
            self.writer.write(message_to_send.encode(config.ENCODING))
            await self.writer.drain()
        except (ConnectionResetError, BrokenPipeError):
            log.warning("Connection closed for %s while sending.", self.addr)
            self.state = ConnectionState.DISCONNECTED

    async def _handle_get_handle(self):
        await self._prompt("Enter your handle")
        handle_raw = await self._read_line()
        if handle_raw is None:
            return
        if handle_raw.lower() == 'quit':
            self.state = ConnectionState.DISCONNECTED
            return

        handle = "".join(char for char in handle_raw if char.isalnum() or char in "_-")[:config.MAX_HANDLE_LENGTH]
        if not handle or self.registry.find_by_handle(handle):
            self.handle_attempts += 1
            if self.handle_attempts >= self.MAX_HANDLE_ATTEMPTS:
                await self._send("Too many invalid handles. Disconnecting.")
                self.state = ConnectionState.DISCONNECTED
            else:
                await self._send("That handle is invalid or already jacked in.")
            return

        self.session = self.registry.create_session(handle, writer=self.writer)
        await self._send(f"Welcome, <c>{handle}<x>. Type HELP for commands, FOCUS to check your head.")
        await self.registry.broadcast(f"<y>** {handle} has jacked in. **<x>", exclude={self.session})
        self.state = ConnectionState.PLAYING

    def _build_prompt(self) -> str:
        engine = self.session.engine
        percent = engine.get_focus_percentage()
        overload = " | <r>OVERLOAD<x>" if engine.state.is_overloaded else ""
        return f"[{utils.focus_color(percent)}focus {percent:.0f}%<x>{overload}] {self.session.handle}> "

    async def _handle_playing(self):
        while self.state == ConnectionState.PLAYING:
            await self._prompt(self._build_prompt())
            self.session.mark_prompt()
            line = await self._read_line()
            if line is None:
                return
            if not await command_handler.process_command(self.session, self.registry, line):
                self.state = ConnectionState.DISCONNECTED

    async def handle(self):
        """Main connection state machine loop."""
        handler_map = {
            ConnectionState.GETTING_HANDLE: self._handle_get_handle,
            ConnectionState.PLAYING: self._handle_playing,
        }
        try:
            await self._send(BANNER)
            while self.state != ConnectionState.DISCONNECTED:
                handler_method = handler_map.get(self.state)
                if handler_method:
                    await handler_method()
                else:
                    log.error("Unhandled connection state: %s", self.state.name)
                    self.state = ConnectionState.DISCONNECTED
        except Exception:
            log.exception("Unexpected error in ConnectionHandler for %s:", self.addr)
        finally:
            await self.cleanup()

    async def cleanup(self):
        """Removes the session from the registry and closes the connection."""
        log.info("Cleaning up connection for %s.", self.addr)
        session = self.session
        self.session = None
        try:
            if session:
                self.registry.remove_session(session.id)
                await self.registry.broadcast(f"<y>** {session.handle} has jacked out. **<x>")
        finally:
            if self.writer and not self.writer.is_closing():
                self.writer.close()
                try:
                    await self.writer.wait_closed()
                except (ConnectionResetError, BrokenPipeError):
                    log.debug("Peer %s reset the connection while closing.", self.addr)
