from dataclasses import dataclass, field
from typing import List, Optional

from netops.actions.deploy import DeployResult, RunStatus, deploy_to_server
from netops.actions.processes import KillMatch
from netops.actions.unlock import UnlockStatus, can_unlock
from netops.config import DeployOptions, NetopsConfig
from netops.environment.host import Host
from netops.network.filters import FilterResult, filter_servers
from netops.network.traversal import HopRange, traverse
from netops.policy.threads import ThreadPolicy, get_thread_policy
from netops.utils.logging import log_run_summary
from netops.utils.metrics import summarize_deploy

SEPARATOR = "=" * 60


@dataclass
class DeployReport:
    scripts: List[str]
    filtered: FilterResult
    shortfall: List[str] = field(default_factory=list)
    results: List[DeployResult] = field(default_factory=list)


def _names(servers: List[str]) -> str:
    return ", ".join(servers) if servers else "None"


def _print_result(host: Host, result: DeployResult) -> None:
    server = result.server
    if result.unlock.status == UnlockStatus.SHORTFALL:
        host.tprint(
            f"ERROR: Not enough ports opened to nuke {server} "
            f"({result.unlock.ports_opened}/{result.unlock.ports_required})."
        )
        return
    if result.unlock.status == UnlockStatus.FAILED:
        host.tprint(f"Failed to gain root access on {server}.")
        return

    for run in result.runs:
        if run.stopped:
            host.tprint(f"Overwriting script: {run.script} on {server}.")
        if run.warning:
            host.tprint(f"Warning: {run.warning} ({run.script} on {server}).")
        if run.status == RunStatus.STARTED:
            host.tprint(f"Running {run.script} on {server} with {run.threads} thread(s)...")
        elif run.status == RunStatus.INSUFFICIENT_RAM:
            host.tprint(f"Skipping {run.script} on {server} due to insufficient RAM.")
        elif run.status == RunStatus.EXEC_FAILED:
            host.tprint(f"ERROR: Failed to start {run.script} on {server} with {run.threads} thread(s).")
        elif run.status == RunStatus.COPY_FAILED:
            host.tprint(f"ERROR: Could not copy {run.script} to {server}.")


def run_deploy(
        host: Host,
        config: NetopsConfig,
        options: DeployOptions,
        policy: Optional[ThreadPolicy] = None
) -> DeployReport:
    """Copy and start the payloads on every reachable server within ``max_hop``."""
    mode = HopRange(options.max_hop)
    scripts = options.scripts or list(config.default_scripts)
    policy = policy or get_thread_policy(config.thread_policy)
    kill_match = KillMatch(config.kill_match)

    host.tprint(f"Deploying scripts: {', '.join(scripts)}")
    host.tprint(f"Maximum hop level: {options.max_hop}")
    host.tprint(f"Exclude private servers: {str(options.exclude_private).lower()}")
    if options.hack_target:
        host.tprint(f"Hack target: {options.hack_target}")

    scanned = traverse(config.origin, host.scan, mode)
    filtered = filter_servers(
        scanned,
        config.manual_exclusions,
        config.private_rule if options.exclude_private else None
    )
    report = DeployReport(scripts=scripts, filtered=filtered)

    host.tprint(SEPARATOR)
    host.tprint(f"Manually excluded servers: {_names(filtered.manually_excluded)}")
    host.tprint(f"Private servers excluded: {_names(filtered.private_excluded)}")
    host.tprint(SEPARATOR)

    valid = []
    for server in filtered.servers:
        if not can_unlock(host, server, config.origin):
            host.tprint(f"Skipping server {server} because not enough port openers are available to nuke it.")
            report.shortfall.append(server)
            continue
        valid.append(server)

    no_ports = [s for s in valid if host.get_server_num_ports_required(s) == 0]
    with_ports = [s for s in valid if s not in no_ports]
    host.tprint(f"Valid servers (up to {options.max_hop} hops) requiring no ports: {_names(no_ports)}")
    host.tprint(f"Valid servers (up to {options.max_hop} hops) requiring ports: {_names(with_ports)}")

    for server in valid:
        result = deploy_to_server(
            host,
            server,
            scripts,
            policy,
            kill_match=kill_match,
            hack_target=options.hack_target,
            origin=config.origin
        )
        _print_result(host, result)
        report.results.append(result)

    log_run_summary("deploy", summarize_deploy(report.results))
    return report
