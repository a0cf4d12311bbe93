from dataclasses import dataclass, field
from typing import List

from netops.actions.processes import KillMatch
from netops.actions.remove import RemovalResult, remove_from_server
from netops.config import NetopsConfig, RemoveOptions
from netops.environment.host import Host
from netops.network.filters import FilterResult, filter_servers
from netops.network.traversal import HopRange, traverse
from netops.utils.logging import log_run_summary
from netops.utils.metrics import summarize_removal

SEPARATOR = "=" * 60


@dataclass
class RemoveReport:
    scripts: List[str]
    filtered: FilterResult
    results: List[RemovalResult] = field(default_factory=list)


def run_remove(host: Host, config: NetopsConfig, options: RemoveOptions) -> RemoveReport:
    """Stop and delete the payloads on every reachable server within ``max_hop``."""
    mode = HopRange(options.max_hop)
    scripts = options.scripts or list(config.default_scripts)
    kill_match = KillMatch(config.kill_match)

    host.tprint(f"Removing scripts: {', '.join(scripts)}")
    host.tprint(f"Maximum hop level: {options.max_hop}")
    host.tprint(f"Exclude private servers: {str(options.exclude_private).lower()}")
    if options.match_args is not None:
        host.tprint(f"Only stopping instances started with arguments: {options.match_args}")

    scanned = traverse(config.origin, host.scan, mode)
    filtered = filter_servers(
        scanned,
        config.manual_exclusions,
        config.private_rule if options.exclude_private else None
    )
    report = RemoveReport(scripts=scripts, filtered=filtered)

    host.tprint(SEPARATOR)
    host.tprint(f"Manually excluded servers: {', '.join(filtered.manually_excluded) or 'None'}")
    host.tprint(f"Private servers excluded: {', '.join(filtered.private_excluded) or 'None'}")
    host.tprint(SEPARATOR)

    for server in filtered.servers:
        host.tprint(f"Scanning {server} for target scripts...")
        results = remove_from_server(
            host,
            server,
            scripts,
            kill_match=kill_match,
            match_args=options.match_args,
            kill_delay_ms=config.kill_delay_ms
        )
        for result in results:
            if result.stopped:
                for proc in result.stopped:
                    host.tprint(f"Stopped {result.filename} {list(proc.args)} on {server}.")
            else:
                host.tprint(f"No running instance of {result.filename} stopped on {server}.")
            if result.deleted:
                host.tprint(f"Removed {result.filename} from {server}.")
            else:
                host.tprint(f"ERROR: Failed to remove {result.filename} from {server}.")
        report.results.extend(results)

    log_run_summary("remove", summarize_removal(report.results))
    return report
