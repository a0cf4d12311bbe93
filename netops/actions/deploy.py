import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from netops.actions.processes import KillMatch, stop_script
from netops.actions.unlock import UnlockResult, unlock
from netops.environment.host import Host
from netops.environment.node import ProcessInfo
from netops.policy.threads import ThreadPolicy

logger = logging.getLogger(__name__)


class RunStatus(Enum):
    STARTED = "started"
    INSUFFICIENT_RAM = "insufficient_ram"
    EXEC_FAILED = "exec_failed"
    COPY_FAILED = "copy_failed"


@dataclass
class ScriptRun:
    script: str
    status: RunStatus
    threads: int = 0
    pid: int = 0
    stopped: List[ProcessInfo] = field(default_factory=list)
    warning: Optional[str] = None


@dataclass
class DeployResult:
    server: str
    unlock: UnlockResult
    runs: List[ScriptRun] = field(default_factory=list)

    @property
    def skipped(self) -> bool:
        return not self.unlock.rooted


def deploy_to_server(
        host: Host,
        server: str,
        scripts: Sequence[str],
        policy: ThreadPolicy,
        kill_match: KillMatch = KillMatch.FILENAME_AND_ARGS,
        hack_target: Optional[str] = None,
        origin: str = "home"
) -> DeployResult:
    """Root ``server``, copy the payloads to it and start each one.

    A server that cannot be rooted is left untouched. Each payload already
    running with the same invocation is stopped before being started again.
    """
    unlock_result = unlock(host, server, origin)
    result = DeployResult(server, unlock_result)
    if not unlock_result.rooted:
        return result

    host.scp(list(scripts), server, origin)
    run_args = [hack_target] if hack_target else []

    for script in scripts:
        # A copy left on the server from an earlier run does not count
        if not host.file_exists(script, origin) or not host.file_exists(script, server):
            logger.warning(f"{script} was not copied from {origin} to {server}")
            result.runs.append(ScriptRun(script, RunStatus.COPY_FAILED))
            continue

        match_args = run_args if kill_match == KillMatch.FILENAME_AND_ARGS else None
        stopped = stop_script(host, server, script, kill_match, match_args)

        sizing = policy.size(
            host.get_server_max_ram(server),
            host.get_server_used_ram(server),
            host.get_script_ram(script, server)
        )
        if not sizing.usable:
            result.runs.append(ScriptRun(script, RunStatus.INSUFFICIENT_RAM, stopped=stopped, warning=sizing.warning))
            continue

        pid = host.exec(script, server, sizing.threads, *run_args)
        status = RunStatus.STARTED if pid else RunStatus.EXEC_FAILED
        logger.debug(f"exec {script} on {server} with {sizing.threads} thread(s): pid {pid}")
        result.runs.append(ScriptRun(script, status, sizing.threads, pid, stopped, sizing.warning))
    return result
