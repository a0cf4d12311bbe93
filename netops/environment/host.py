from abc import ABC, abstractmethod
from typing import List, Sequence, Union

from netops.environment.node import ProcessInfo, Server


class Host(ABC):
    """The game API surface the netops commands run against.

    Method names follow the in-game ``ns`` calls they stand for. Every
    attribute is re-read from the host on each call; nothing is cached here.
    """

    # Topology

    @abstractmethod
    def scan(self, server: str) -> List[str]:
        """Return the hostnames directly connected to ``server``."""

    @abstractmethod
    def server_exists(self, server: str) -> bool:
        pass

    # Privileges

    @abstractmethod
    def has_root_access(self, server: str) -> bool:
        pass

    @abstractmethod
    def get_server_num_ports_required(self, server: str) -> int:
        pass

    @abstractmethod
    def brutessh(self, server: str) -> bool:
        pass

    @abstractmethod
    def ftpcrack(self, server: str) -> bool:
        pass

    @abstractmethod
    def relaysmtp(self, server: str) -> bool:
        pass

    @abstractmethod
    def httpworm(self, server: str) -> bool:
        pass

    @abstractmethod
    def sqlinject(self, server: str) -> bool:
        pass

    @abstractmethod
    def nuke(self, server: str) -> bool:
        pass

    # Files

    @abstractmethod
    def file_exists(self, filename: str, server: str) -> bool:
        pass

    @abstractmethod
    def ls(self, server: str) -> List[str]:
        pass

    @abstractmethod
    def scp(self, files: Union[str, Sequence[str]], destination: str, source: str = "home") -> bool:
        """Copy ``files`` from ``source`` to ``destination``; True if all were copied."""

    @abstractmethod
    def rm(self, filename: str, server: str) -> bool:
        pass

    # Processes and RAM

    @abstractmethod
    def ps(self, server: str) -> List[ProcessInfo]:
        pass

    @abstractmethod
    def is_running(self, script: str, server: str, *args: str) -> bool:
        pass

    @abstractmethod
    def exec(self, script: str, server: str, threads: int = 1, *args: str) -> int:
        """Start ``script``; return its pid, or 0 when the host refused."""

    @abstractmethod
    def kill(self, script: str, server: str, *args: str) -> bool:
        """Kill the single process of ``script`` started with exactly ``args``."""

    @abstractmethod
    def script_kill(self, script: str, server: str) -> bool:
        """Kill every process of ``script`` regardless of its arguments."""

    @abstractmethod
    def get_server_max_ram(self, server: str) -> float:
        pass

    @abstractmethod
    def get_server_used_ram(self, server: str) -> float:
        pass

    @abstractmethod
    def get_script_ram(self, script: str, server: str = "home") -> float:
        pass

    # Diagnostics

    @abstractmethod
    def get_server(self, server: str) -> Server:
        pass

    @abstractmethod
    def get_hack_time(self, server: str) -> float:
        """Milliseconds."""

    @abstractmethod
    def get_grow_time(self, server: str) -> float:
        """Milliseconds."""

    @abstractmethod
    def get_weaken_time(self, server: str) -> float:
        """Milliseconds."""

    @abstractmethod
    def hack_analyze_chance(self, server: str) -> float:
        """Probability in [0, 1]."""

    # Terminal

    @abstractmethod
    def tprint(self, message: str) -> None:
        pass

    @abstractmethod
    def sleep(self, millis: float) -> None:
        pass
