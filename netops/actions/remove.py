import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from netops.actions.processes import KillMatch, stop_script
from netops.environment.host import Host
from netops.environment.node import ProcessInfo

logger = logging.getLogger(__name__)


@dataclass
class RemovalResult:
    server: str
    filename: str
    deleted: bool
    stopped: List[ProcessInfo] = field(default_factory=list)


def remove_from_server(
        host: Host,
        server: str,
        scripts: Sequence[str],
        kill_match: KillMatch = KillMatch.FILENAME_AND_ARGS,
        match_args: Optional[Sequence[str]] = None,
        kill_delay_ms: float = 100
) -> List[RemovalResult]:
    """Stop and delete every file on ``server`` that is listed in ``scripts``.

    Deletion is attempted even when nothing was running. When processes were
    stopped, the host gets ``kill_delay_ms`` to release them before ``rm``.
    """
    targets = set(scripts)
    results = []
    for filename in host.ls(server):
        if filename not in targets:
            continue
        stopped = stop_script(host, server, filename, kill_match, match_args)
        if stopped:
            host.sleep(kill_delay_ms)
        deleted = host.rm(filename, server)
        if not deleted:
            logger.warning(f"rm {filename} on {server} failed")
        results.append(RemovalResult(server, filename, deleted, stopped))
    return results
