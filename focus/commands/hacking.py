# focus/commands/hacking.py
"""
Simulated hacking commands. Focus has already been spent by the time these
run; they only produce terminal output, which active impairments can
distort.
"""
import logging
from typing import TYPE_CHECKING, List, Optional

from .. import utils
from ..definitions import actions as action_defs
from ..definitions import effects as effect_defs

if TYPE_CHECKING:
    from ..session import PlayerSession
    from ..registry import SessionRegistry

log = logging.getLogger(__name__)

COMMON_PORTS = [
    (21, "ftp"), (22, "ssh"), (23, "telnet"), (25, "smtp"), (53, "dns"),
    (80, "http"), (110, "pop3"), (143, "imap"), (443, "https"), (445, "smb"),
    (3306, "mysql"), (5432, "postgres"), (6379, "redis"), (8080, "http-proxy"),
]
PHANTOM_PORT = (31337, "elite")

FAKE_FILES = [
    "notes.txt", "payload.bin", "id_rsa", "targets.lst", ".bash_history",
    "dump_0412.sql", "wallet.dat", "README.md",
]

# "command": (success line, failure line)
OPERATION_MESSAGES = {
    "exploit": ("Exploit landed on {target}. Shell acquired.", "Exploit against {target} failed. Service crashed and restarted."),
    "inject": ("Payload injected into {target}.", "Injection rejected by {target}'s input filter."),
    "crack": ("Hash {target} cracked: {secret}", "Wordlist exhausted. {target} resisted."),
    "backdoor": ("Backdoor installed on {target}. Persistence established.", "Backdoor install on {target} tripped an integrity check."),
    "exfiltrate": ("Exfiltrated {target} ({size} KB).", "Transfer of {target} interrupted."),
    "pivot": ("Pivoted to {target}.", "No route to {target} from this foothold."),
    "stealth": ("Traffic throttled. You blend into the noise.", "Your throttling pattern looks suspicious."),
    "cover_tracks": ("Logs scrubbed.", "Log rotation locked. Some traces remain."),
    "spoof": ("Source address spoofed as {target}.", "Upstream filter dropped spoofed packets."),
    "phish": ("{target} clicked the link.", "{target} reported the email."),
    "social_engineer": ("{target} handed over the credentials.", "{target} got suspicious and hung up."),
    "sudo": ("Privileges elevated.", "user is not in the sudoers file. This incident will be reported."),
    "chmod": ("Permissions changed on {target}.", "chmod: changing permissions of '{target}': Operation not permitted"),
    "kill": ("Process {target} terminated.", "kill: ({target}) - No such process"),
}

def success_chance(session: 'PlayerSession', command: str) -> float:
    """Harder commands fail more often, and overload makes everything worse."""
    action = action_defs.get_action(command)
    chance = 1.0 - action.complexity * 0.06
    if session.engine.state.is_overloaded:
        chance -= 0.2
    return max(0.05, chance)

async def _emit(session: 'PlayerSession', lines: List[str], color: Optional[str] = None):
    """Sends command output through the player's active impairments."""
    hallucinations = [e for e in session.engine.get_active_effects() if e.type == effect_defs.HALLUCINATION]
    text = "\r\n".join(lines)
    if hallucinations:
        severity = max(e.severity for e in hallucinations)
        text = utils.distort_output(text, severity, session.engine.rng)
    if color:
        text = f"{color}{text}<x>"
    await session.send(text)

def _has_false_positives(session: 'PlayerSession') -> bool:
    return any(e.type == effect_defs.FALSE_POSITIVE for e in session.engine.get_active_effects())

async def cmd_ls(session: 'PlayerSession', registry: 'SessionRegistry', args_str: str) -> bool:
    rng = session.engine.rng
    files = rng.sample(FAKE_FILES, k=rng.randint(2, len(FAKE_FILES)))
    await _emit(session, ["  ".join(sorted(files))])
    return True

async def cmd_cd(session: 'PlayerSession', registry: 'SessionRegistry', args_str: str) -> bool:
    if not args_str:
        return True
    await _emit(session, [f"cwd: /{args_str.strip('/')}"])
    return True

async def cmd_pwd(session: 'PlayerSession', registry: 'SessionRegistry', args_str: str) -> bool:
    await _emit(session, [f"/home/{session.handle.lower()}"])
    return True

async def cmd_ping(session: 'PlayerSession', registry: 'SessionRegistry', args_str: str) -> bool:
    if not args_str:
        await session.send("Usage: PING <host>")
        return True
    host = args_str.split()[0]
    rng = session.engine.rng
    lines = [f"PING {host}:"]
    for seq in range(1, 5):
        lines.append(f"  reply from {host}: seq={seq} time={rng.uniform(8, 120):.1f} ms")
    await _emit(session, lines)
    return True

async def cmd_scan(session: 'PlayerSession', registry: 'SessionRegistry', args_str: str, thorough: bool = False) -> bool:
    """Handles both SCAN and NMAP. NMAP (thorough) finds more ports."""
    if not args_str:
        await session.send("Usage: SCAN <host>")
        return True
    host = args_str.split()[0]
    rng = session.engine.rng
    found = rng.randint(2, 5) if thorough else rng.randint(1, 3)
    ports = sorted(rng.sample(COMMON_PORTS, k=found))
    if _has_false_positives(session):
        # The player sees a port that is not really there
        ports.append(PHANTOM_PORT)

    lines = [f"Scanning {host}..."]
    for port, service in ports:
        lines.append(f"  {port:>5}/tcp  open  {service}")
    lines.append(f"{len(ports)} open port(s) found.")
    await _emit(session, lines)
    return True

async def cmd_operation(session: 'PlayerSession', registry: 'SessionRegistry', args_str: str, command: str) -> bool:
    """Shared handler for offensive, stealth and sysadmin operations."""
    success_text, failure_text = OPERATION_MESSAGES[command]
    target = args_str.split()[0] if args_str else "target"
    rng = session.engine.rng
    succeeded = rng.random() < success_chance(session, command)
    misread = _has_false_positives(session)
    # Misread results: a real success sometimes looks like a failure
    looks_successful = succeeded and not (misread and rng.random() < 0.5)
    template = success_text if looks_successful else failure_text
    line = template.format(target=target, secret=f"hunter{rng.randint(1, 99)}", size=rng.randint(16, 4096))
    color = "<g>" if looks_successful else "<R>"
    await _emit(session, [line], color=color)
    log.debug("%s ran %s on %s: %s", session.handle, command, target, "ok" if succeeded else "failed")
    return True

async def cmd_ps(session: 'PlayerSession', registry: 'SessionRegistry', args_str: str) -> bool:
    rng = session.engine.rng
    lines = ["  PID  CMD"]
    for pid, cmd in sorted((rng.randint(100, 9999), name) for name in ("sshd", "nginx", "cron", "watchdog")):
        lines.append(f" {pid:>4}  {cmd}")
    await _emit(session, lines)
    return True
