from dataclasses import dataclass, field
from typing import List, Optional

from netops.actions.info import ServerReport, collect_server_report, format_server_report
from netops.config import InfoOptions, NetopsConfig
from netops.environment.host import Host
from netops.network.filters import FilterResult, filter_servers
from netops.network.traversal import ExactHops, path_to, traverse
from netops.utils.logging import log_run_summary
from netops.utils.metrics import calculate_network_metrics

SEPARATOR = "=" * 60
BLOCK_SEPARATOR = "-" * 60


@dataclass
class InfoReport:
    filtered: FilterResult
    # None when no target server was requested, [] when it is unreachable
    path: Optional[List[str]] = None
    reports: List[ServerReport] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)


def run_serverinfo(host: Host, config: NetopsConfig, options: InfoOptions) -> InfoReport:
    """Print diagnostics for servers at the given hops, or for one named server."""
    mode = ExactHops(options.hops)
    private_rule = config.private_rule if config.info_exclude_private else None

    if options.target:
        host.tprint(f"Scanning specific server: {options.target}")
        filtered = FilterResult(servers=[options.target])
    else:
        host.tprint(f"Scanning servers at hops: {', '.join(str(h) for h in sorted(mode.hops))}")
        scanned = traverse(config.origin, host.scan, mode)
        filtered = filter_servers(scanned, config.manual_exclusions, private_rule)
    report = InfoReport(filtered=filtered)

    excluded = filtered.manually_excluded + filtered.private_excluded
    host.tprint(f"Excluding private servers: {str(config.info_exclude_private).lower()}")
    host.tprint(f"Excluded servers: {', '.join(excluded) if excluded else 'None'}")
    host.tprint(SEPARATOR)

    if options.target:
        report.path = path_to(config.origin, host.scan, options.target)
        if report.path:
            host.tprint(f"Node Path: {' -> '.join(report.path)}")
        else:
            host.tprint(f"Node Path not found for {options.target}.")
        host.tprint(SEPARATOR)

    for server in filtered.servers:
        if not host.server_exists(server):
            host.tprint(f"ERROR: Server {server} does not exist.")
            report.missing.append(server)
            continue
        server_report = collect_server_report(host, server)
        for line in format_server_report(server_report):
            host.tprint(line)
        host.tprint(BLOCK_SEPARATOR)
        report.reports.append(server_report)
        host.sleep(config.info_delay_ms)

    metrics = calculate_network_metrics(report.reports)
    if len(report.reports) > 1:
        host.tprint(
            f"Summary: {metrics['servers']} servers | "
            f"Rooted {metrics['rooted_ratio'] * 100:.2f}% | "
            f"RAM {metrics['total_used_ram']} / {metrics['total_max_ram']} GB | "
            f"Average Hack Chance {metrics['average_hack_chance'] * 100:.2f}%"
        )
    log_run_summary("serverinfo", metrics)
    return report
