from dataclasses import dataclass, field
from typing import Tuple


@dataclass
class Server:
    hostname: str
    has_admin_rights: bool = False
    required_hacking_skill: int = 1
    hack_difficulty: float = 1.0
    min_difficulty: float = 1.0
    money_available: float = 0.0
    money_max: float = 0.0
    ram_used: float = 0.0
    max_ram: float = 0.0
    num_open_ports_required: int = 0
    open_port_count: int = 0
    cpu_cores: int = 1
    server_growth: float = 0.0
    purchased_by_player: bool = False

    @property
    def available_ram(self) -> float:
        return self.max_ram - self.ram_used


@dataclass(frozen=True)
class ProcessInfo:
    pid: int
    filename: str
    threads: int
    args: Tuple[str, ...] = field(default_factory=tuple)

    def matches(self, filename: str, args: Tuple[str, ...] = None) -> bool:
        """Check filename, and arguments too when given."""
        if self.filename != filename:
            return False
        return args is None or tuple(self.args) == tuple(args)
