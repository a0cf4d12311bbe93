from dataclasses import dataclass
from typing import List

from netops.environment.host import Host
from netops.environment.node import Server
from netops.utils.formatting import format_money, format_time


@dataclass
class ServerReport:
    server: Server
    hack_time: float
    grow_time: float
    weaken_time: float
    hack_chance: float

    @property
    def hack_chance_percent(self) -> float:
        return round(self.hack_chance * 100, 2)


def collect_server_report(host: Host, name: str) -> ServerReport:
    """Read the diagnostic attributes of one server from the host."""
    return ServerReport(
        server=host.get_server(name),
        hack_time=host.get_hack_time(name),
        grow_time=host.get_grow_time(name),
        weaken_time=host.get_weaken_time(name),
        hack_chance=host.hack_analyze_chance(name)
    )


def format_server_report(report: ServerReport) -> List[str]:
    s = report.server
    return [
        f"Server: {s.hostname}",
        f"  Root Access: {str(s.has_admin_rights).lower()}",
        f"  Required Hacking Level: {s.required_hacking_skill}",
        f"  Security: Current {s.hack_difficulty} | Minimum {s.min_difficulty}",
        f"  Money: Available {format_money(s.money_available)} / Max {format_money(s.money_max)}",
        f"  RAM: {s.ram_used} / {s.max_ram} GB",
        f"  Ports Required: {s.num_open_ports_required}",
        f"  CPU Cores: {s.cpu_cores}",
        f"  Hack Time: {format_time(report.hack_time)}",
        f"  Grow Time: {format_time(report.grow_time)}",
        f"  Weaken Time: {format_time(report.weaken_time)}",
        f"  Growth Rate: {s.server_growth}",
        f"  Hack Success Chance: {report.hack_chance_percent:.2f}%",
    ]
