from collections import defaultdict
from typing import Any, Dict, List

import numpy as np

from netops.actions.deploy import DeployResult, RunStatus
from netops.actions.info import ServerReport
from netops.actions.remove import RemovalResult


def calculate_network_metrics(reports: List[ServerReport]) -> Dict[str, float]:
    """Calculate aggregate metrics over a set of server reports."""
    if not reports:
        return {
            'servers': 0,
            'rooted_ratio': 0.0,
            'total_max_ram': 0.0,
            'total_used_ram': 0.0,
            'ram_utilization': 0.0,
            'average_hack_chance': 0.0
        }

    rooted = np.array([r.server.has_admin_rights for r in reports], dtype=bool)
    max_ram = np.array([r.server.max_ram for r in reports], dtype=float)
    used_ram = np.array([r.server.ram_used for r in reports], dtype=float)
    chances = np.array([r.hack_chance for r in reports], dtype=float)

    total_max = float(max_ram.sum())
    metrics = {
        'servers': len(reports),
        'rooted_ratio': float(rooted.mean()),
        'total_max_ram': total_max,
        'total_used_ram': float(used_ram.sum()),
        'ram_utilization': float(used_ram.sum() / total_max) if total_max > 0 else 0.0,
        'average_hack_chance': float(np.mean(chances))
    }

    return metrics


def summarize_deploy(results: List[DeployResult]) -> Dict[str, Any]:
    """Summarize deploy outcomes per status."""
    status_counts = defaultdict(int)
    threads = []
    for result in results:
        for run in result.runs:
            status_counts[run.status.value] += 1
            if run.status == RunStatus.STARTED:
                threads.append(run.threads)

    summary = {
        'servers': len(results),
        'servers_skipped': sum(1 for r in results if r.skipped),
        'status_counts': dict(status_counts),
        'total_threads': int(np.sum(threads)) if threads else 0,
        'mean_threads': float(np.mean(threads)) if threads else 0.0
    }

    return summary


def summarize_removal(results: List[RemovalResult]) -> Dict[str, int]:
    return {
        'files_deleted': sum(1 for r in results if r.deleted),
        'files_failed': sum(1 for r in results if not r.deleted),
        'processes_stopped': sum(len(r.stopped) for r in results)
    }
