# focus/commands/general.py
"""
Commands that manage the player's own focus: status, effects, stimulants.
None of these spend focus.
"""
import logging
from typing import TYPE_CHECKING

from .. import utils
from ..definitions import effects as effect_defs
from ..definitions import stimulants as stim_defs
from ..definitions import actions as action_defs

if TYPE_CHECKING:
    from ..session import PlayerSession
    from ..registry import SessionRegistry

log = logging.getLogger(__name__)

HELP_TOPICS = {
    "SESSION": {
        "focus": "FOCUS\n\r  Show your focus bar, overload state, active effects and stimulants.",
        "effects": "EFFECTS\n\r  List the impairments currently affecting you.",
        "stim": "STIM <coffee|nootropic|energy|meditate|break>\n\r  Use a stimulant. At most two can be active.",
        "history": "HISTORY\n\r  Show the commands you have run recently.",
        "who": "WHO\n\r  List the operators currently jacked in.",
        "quit": "QUIT\n\r  Disconnect from the terminal.",
        "help": "HELP [topic]\n\r  Shows help topics, or detailed help for one. Costs a little focus.",
    },
    "RECON": {
        "ping": "PING <host>\n\r  Check whether a host is reachable.",
        "scan": "SCAN <host>\n\r  Quick port scan of a host.",
        "nmap": "NMAP <host>\n\r  Thorough scan with service detection.",
    },
    "OFFENSE": {
        "exploit": "EXPLOIT <host>\n\r  Attempt to gain access through a known vulnerability.",
        "inject": "INJECT <host>\n\r  Inject a payload into a vulnerable service.",
        "crack": "CRACK <hash>\n\r  Brute-force a password hash.",
        "backdoor": "BACKDOOR <host>\n\r  Install persistent access.",
        "exfiltrate": "EXFILTRATE <file>\n\r  Copy data off the target.",
        "pivot": "PIVOT <host>\n\r  Move laterally to another machine.",
    },
    "STEALTH": {
        "stealth": "STEALTH\n\r  Throttle your traffic to avoid detection.",
        "cover_tracks": "COVER_TRACKS\n\r  Scrub logs on the current host.",
        "spoof": "SPOOF <address>\n\r  Forge your source address.",
        "phish": "PHISH <target>\n\r  Send a crafted lure.",
        "social_engineer": "SOCIAL_ENGINEER <target>\n\r  Talk your way past a human.",
    },
}

async def cmd_help(session: 'PlayerSession', registry: 'SessionRegistry', args_str: str) -> bool:
    """Shows the help index or one topic."""
    topic = args_str.lower().strip()
    if topic:
        for entries in HELP_TOPICS.values():
            if topic in entries:
                await session.send(entries[topic])
                return True
        await session.send(f"No help available for '{topic}'.")
        return True

    output = ["<c>--- Terminal Help ---<x>"]
    for section, entries in HELP_TOPICS.items():
        output.append(f"<y>{section}<x>: " + ", ".join(sorted(entries)))
    output.append("Type HELP <command> for details. Every hacking command costs focus.")
    await session.send("\r\n".join(output))
    return True

async def cmd_focus(session: 'PlayerSession', registry: 'SessionRegistry', args_str: str) -> bool:
    """Displays the focus panel."""
    engine = session.engine
    state = engine.get_state()
    percent = engine.get_focus_percentage()
    now = engine.clock()

    output = [
        "<c>--- Focus ---<x>",
        f" {utils.focus_bar(percent)} {percent:5.1f}%  ({state.current:.1f}/{state.maximum:.0f}, {engine.focus_status()})",
        f" Regen: {state.regen_rate:.2f}/s   Drain: x{state.drain_rate:.2f}   Credits: {utils.format_credits(session.credits)}",
    ]
    if state.is_overloaded:
        output.append(" <r>!! OVERLOAD !!<x> Costs doubled until you recover or take a break.")

    if state.effects:
        output.append(" Effects:")
        for effect in state.effects:
            output.append(f"   <R>{effect.type}<x> (sev {effect.severity}, {utils.format_duration(effect.remaining_ms(now))})")
    if state.stimulants:
        output.append(" Stimulants:")
        for stim in state.stimulants:
            output.append(f"   <g>{stim.name}<x> ({utils.format_duration(stim.remaining_ms(now))} left)")

    await session.send("\r\n".join(output))
    return True

async def cmd_effects(session: 'PlayerSession', registry: 'SessionRegistry', args_str: str) -> bool:
    """Lists active impairments."""
    engine = session.engine
    effects = engine.get_active_effects()
    if not effects:
        await session.send("Your mind is clear.")
        return True

    now = engine.clock()
    output = ["<c>--- Active Effects ---<x>"]
    for effect in sorted(effects, key=lambda e: e.severity, reverse=True):
        output.append(f" <R>{effect.type:<15}<x> sev {effect.severity:>2}  {utils.format_duration(effect.remaining_ms(now)):>6}  {effect.description}")
    delay = engine.get_command_delay()
    if delay:
        output.append(f" Commands are delayed by {delay / 1000:.1f}s.")
    await session.send("\r\n".join(output))
    return True

async def cmd_stim(session: 'PlayerSession', registry: 'SessionRegistry', args_str: str) -> bool:
    """Buys and applies a stimulant."""
    if not args_str:
        output = ["Usage: STIM <type>. Available:"]
        for stim_type, data in stim_defs.STIMULANTS.items():
            output.append(f"  {stim_type:<13} +{data['focus_boost']:<3} {utils.format_duration(data['duration']):>7}  {utils.format_credits(data['cost'])}")
        await session.send("\r\n".join(output))
        return True

    stimulant_type = stim_defs.resolve_alias(args_str)
    data = stim_defs.get_stimulant_data(stimulant_type) if stimulant_type else None
    if not data:
        await session.send(f"Unknown stimulant '{args_str}'.")
        return True

    if data["cost"] > session.credits:
        await session.send(f"You can't afford that ({utils.format_credits(data['cost'])}, you have {utils.format_credits(session.credits)}).")
        return True

    result = session.engine.use_stimulant(stimulant_type)
    if not result.success:
        await session.send(f"<y>{result.message}<x>")
        return True

    session.spend_credits(result.stimulant.cost)
    await session.send(f"<g>{result.message}<x>")
    if result.stimulant.side_effects:
        await session.send(f"<K>Side effects: {', '.join(result.stimulant.side_effects)}<x>")
    return True

async def cmd_history(session: 'PlayerSession', registry: 'SessionRegistry', args_str: str) -> bool:
    """Shows recent commands. Memory loss blanks some of them out."""
    if not session.history:
        await session.send("No commands yet.")
        return True

    memory_loss = [e for e in session.engine.get_active_effects() if e.type == effect_defs.MEMORY_LOSS]
    forget_chance = max((e.severity for e in memory_loss), default=0) * 0.08
    rng = session.engine.rng

    output = ["<c>--- History ---<x>"]
    for index, line in enumerate(session.history[-15:], start=1):
        if forget_chance and rng.random() < forget_chance:
            line = "<K>??? (you can't remember)<x>"
        output.append(f" {index:>2}  {line}")
    await session.send("\r\n".join(output))
    return True

async def cmd_who(session: 'PlayerSession', registry: 'SessionRegistry', args_str: str) -> bool:
    """Lists connected operators."""
    output = ["<c>--- Operators Online ---<x>"]
    for other in registry.list_sessions():
        percent = other.engine.get_focus_percentage()
        output.append(f" {other.handle:<20} {utils.focus_color(percent)}{percent:5.1f}%<x>")
    output.append(f"{len(registry)} operator(s) online.")
    await session.send("\r\n".join(output))
    return True

async def cmd_costs(session: 'PlayerSession', registry: 'SessionRegistry', args_str: str) -> bool:
    """Quotes what commands would cost right now, grouped by category."""
    engine = session.engine
    commands = args_str.lower().split() if args_str else list(action_defs.ACTIONS)
    grouped = {}
    for command in commands:
        grouped.setdefault(action_defs.get_category(command), []).append(command)

    output = ["<c>--- Focus Costs ---<x>"]
    for category, entries in grouped.items():
        output.append(f"<y>{category}<x>")
        for command in entries:
            output.append(f"  {command:<16} {engine.calculate_focus_cost(command):>3}")
    await session.send("\r\n".join(output))
    return True

async def cmd_quit(session: 'PlayerSession', registry: 'SessionRegistry', args_str: str) -> bool:
    await session.send("Jacking out. Stay sharp.")
    return False
