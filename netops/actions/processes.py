import logging
from enum import Enum
from typing import List, Optional, Sequence

from netops.environment.host import Host
from netops.environment.node import ProcessInfo

logger = logging.getLogger(__name__)


class KillMatch(Enum):
    # Every instance of the file, whatever its arguments
    FILENAME = "filename"
    # Each instance killed by its recorded arguments, optionally only those equal to `args`
    FILENAME_AND_ARGS = "filename_and_args"


def stop_script(
        host: Host,
        server: str,
        filename: str,
        match: KillMatch = KillMatch.FILENAME_AND_ARGS,
        args: Optional[Sequence[str]] = None
) -> List[ProcessInfo]:
    """Stop running instances of ``filename`` on ``server``; return those stopped."""
    if match == KillMatch.FILENAME:
        running = [proc for proc in host.ps(server) if proc.matches(filename)]
        if running and host.script_kill(filename, server):
            return running
        return []

    wanted = None if args is None else tuple(str(a) for a in args)
    stopped = []
    for proc in host.ps(server):
        if not proc.matches(filename, wanted):
            continue
        if host.kill(filename, server, *proc.args):
            stopped.append(proc)
        else:
            logger.warning(f"Failed to kill {filename} {list(proc.args)} (pid {proc.pid}) on {server}")
    return stopped
