# focus/commands/handler.py
"""
Handles parsing player input, charging focus and dispatching commands.
"""
import asyncio
import logging
from typing import Dict, Callable, Awaitable
from functools import partial

import config
from .. import utils
from ..session import PlayerSession
from ..registry import SessionRegistry
from ..models import ConsumeResult

from . import general as general_cmds
from . import hacking as hacking_cmds

log = logging.getLogger(__name__)

CommandHandlerFunc = Callable[[PlayerSession, SessionRegistry, str], Awaitable[bool]]

# --- Free Commands (never cost focus) ---
FREE_COMMAND_MAP: Dict[str, CommandHandlerFunc] = {
    "focus": general_cmds.cmd_focus, "f": general_cmds.cmd_focus, "status": general_cmds.cmd_focus,
    "effects": general_cmds.cmd_effects,
    "stim": general_cmds.cmd_stim, "use": general_cmds.cmd_stim,
    "history": general_cmds.cmd_history,
    "costs": general_cmds.cmd_costs,
    "who": general_cmds.cmd_who,
    "quit": general_cmds.cmd_quit, "exit": general_cmds.cmd_quit,
}

# --- Focus-spending Commands ---
COMMAND_MAP: Dict[str, CommandHandlerFunc] = {
    "help": general_cmds.cmd_help,
    "ls": hacking_cmds.cmd_ls,
    "cd": hacking_cmds.cmd_cd,
    "pwd": hacking_cmds.cmd_pwd,
    "ping": hacking_cmds.cmd_ping,
    "scan": hacking_cmds.cmd_scan,
    "nmap": partial(hacking_cmds.cmd_scan, thorough=True),
    "ps": hacking_cmds.cmd_ps,
}

# Every scripted operation shares one handler
for _command in hacking_cmds.OPERATION_MESSAGES:
    COMMAND_MAP[_command] = partial(hacking_cmds.cmd_operation, command=_command)

async def report_consumption(session: PlayerSession, result: ConsumeResult):
    """Tells the player what the command cost them."""
    if not result.success:
        await session.send(f"<r>{result.message}<x>")
    if result.overload_triggered:
        await session.send("<r>!! OVERLOAD !! Your thoughts scatter.<x>")
    for effect in result.effects:
        await session.send(f"<R>* {effect.description}<x>")
    if result.success:
        percent = session.engine.get_focus_percentage()
        await session.send(f"<K>[-{result.focus_used} focus]<x> {utils.focus_color(percent)}{result.message}<x>")

async def process_command(session: PlayerSession, registry: SessionRegistry, raw_input: str) -> bool:
    """
    Parses raw player input and executes the corresponding command function.

    Returns:
        False if the session should disconnect, True otherwise.
    """
    if len(raw_input) > config.MAX_INPUT_LENGTH:
        await session.send("Input too long.")
        return True

    command_verb, args_str = utils.parse_input(raw_input)
    if not command_verb:
        return True

    free_func = FREE_COMMAND_MAP.get(command_verb)
    if free_func:
        try:
            return await free_func(session, registry, args_str)
        except Exception:
            log.exception("Error executing command '%s' for %s:", command_verb, session.handle)
            await session.send("Something went wrong with your command.")
            return True

    # --- Typo Injection ---
    engine = session.engine
    typed = raw_input.strip()
    executed = engine.apply_command_effects(typed)
    if executed != typed:
        await session.send(f"<y>Your fingers slip...<x> {executed}")
        command_verb, args_str = utils.parse_input(executed)
    session.remember(executed)

    # --- Focus ---
    result = engine.consume_focus(command_verb, session.next_context())
    await report_consumption(session, result)

    delay_ms = engine.get_command_delay()
    if delay_ms:
        await session.send("<K>...<x>")
        await asyncio.sleep(delay_ms / 1000)

    # --- Find and Execute Command ---
    command_func = COMMAND_MAP.get(command_verb)
    if not command_func:
        await session.send(f"{command_verb}: command not found")
        return True

    try:
        log.info("Executing command '%s' for %s (args: '%s')", command_verb, session.handle, args_str)
        return await command_func(session, registry, args_str)
    except Exception:
        log.exception("Error executing command '%s' for %s:", command_verb, session.handle)
        await session.send("Something went wrong with your command.")
        return True
