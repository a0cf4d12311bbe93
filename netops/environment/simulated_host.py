import dataclasses
import logging
from typing import Dict, Iterable, List, Optional, Sequence, Union

import networkx as nx
import yaml

from netops.environment.host import Host
from netops.environment.node import ProcessInfo, Server

logger = logging.getLogger(__name__)

_SERVER_FIELDS = {f.name for f in dataclasses.fields(Server)}
_EXTRA_FIELDS = {'files', 'processes', 'hack_time', 'grow_time', 'weaken_time', 'hack_chance'}

# Opener method -> program that must be present on the origin
OPENER_PROGRAMS = {
    'brutessh': 'BruteSSH.exe',
    'ftpcrack': 'FTPCrack.exe',
    'relaysmtp': 'relaySMTP.exe',
    'httpworm': 'HTTPWorm.exe',
    'sqlinject': 'SQLInject.exe',
}


class SimulatedHost(Host):
    """In-memory game network backed by a networkx graph.

    Each graph node carries the ``Server`` record under ``'data'`` plus the
    files on it, the openers already applied and the diagnostic timings. The
    host does not model hacking formulas; timings and hack chance are plain
    values supplied when the server is added.
    """

    def __init__(
            self,
            origin: str = "home",
            script_ram: Optional[Dict[str, float]] = None,
            echo: bool = True
    ):
        self.graph = nx.Graph()
        self.origin = origin
        self.script_ram = dict(script_ram or {})
        self.echo = echo
        self.terminal: List[str] = []
        self.slept: List[float] = []
        self._processes: Dict[str, List[ProcessInfo]] = {}
        self._next_pid = 1

    @classmethod
    def from_dict(cls, data: Dict, echo: bool = True) -> 'SimulatedHost':
        """Build a host from a network description (see ``examples/sample_network.yaml``)."""
        host = cls(
            origin=data.get('origin', 'home'),
            script_ram=data.get('scripts', {}),
            echo=echo
        )
        for entry in data.get('servers', []):
            entry = dict(entry)
            unknown = set(entry) - _SERVER_FIELDS - _EXTRA_FIELDS
            if unknown:
                raise ValueError(f"Unknown server fields for {entry.get('hostname')}: {sorted(unknown)}")
            extras = {key: entry.pop(key) for key in list(entry) if key in _EXTRA_FIELDS}
            processes = extras.pop('processes', [])
            host.add_server(Server(**entry), **extras)
            for proc in processes:
                host.start_process(
                    entry['hostname'],
                    proc['filename'],
                    threads=proc.get('threads', 1),
                    args=[str(a) for a in proc.get('args', [])]
                )
        for left, right in data.get('links', []):
            host.connect(left, right)
        logger.info(
            f"Loaded simulated network with {host.graph.number_of_nodes()} servers "
            f"and {host.graph.number_of_edges()} links"
        )
        return host

    @classmethod
    def from_yaml(cls, path: str, echo: bool = True) -> 'SimulatedHost':
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
        return cls.from_dict(data, echo=echo)

    # Construction helpers

    def add_server(
            self,
            server: Server,
            files: Iterable[str] = (),
            hack_time: float = 0.0,
            grow_time: float = 0.0,
            weaken_time: float = 0.0,
            hack_chance: float = 0.0
    ) -> None:
        self.graph.add_node(
            server.hostname,
            data=server,
            files=set(files),
            opened=set(),
            hack_time=hack_time,
            grow_time=grow_time,
            weaken_time=weaken_time,
            hack_chance=hack_chance
        )
        self._processes.setdefault(server.hostname, [])

    def connect(self, left: str, right: str) -> None:
        self._node(left)
        self._node(right)
        self.graph.add_edge(left, right)

    def start_process(self, server: str, filename: str, threads: int = 1, args: Sequence[str] = ()) -> ProcessInfo:
        """Record a running process without any of the checks ``exec`` applies."""
        node = self._node(server)
        node['files'].add(filename)
        proc = ProcessInfo(pid=self._next_pid, filename=filename, threads=threads, args=tuple(args))
        self._next_pid += 1
        self._processes[server].append(proc)
        node['data'].ram_used += self.script_ram.get(filename, 0.0) * threads
        return proc

    def _node(self, server: str) -> Dict:
        if server not in self.graph:
            raise ValueError(f"Invalid hostname: {server}")
        return self.graph.nodes[server]

    def _data(self, server: str) -> Server:
        return self._node(server)['data']

    # Topology

    def scan(self, server: str) -> List[str]:
        self._node(server)
        return list(self.graph.neighbors(server))

    def server_exists(self, server: str) -> bool:
        return server in self.graph

    # Privileges

    def has_root_access(self, server: str) -> bool:
        return self._data(server).has_admin_rights

    def get_server_num_ports_required(self, server: str) -> int:
        return self._data(server).num_open_ports_required

    def _open_port(self, opener: str, server: str) -> bool:
        node = self._node(server)
        if not self.file_exists(OPENER_PROGRAMS[opener], self.origin):
            logger.debug(f"{opener} requested on {server} without {OPENER_PROGRAMS[opener]}")
            return False
        node['opened'].add(opener)
        node['data'].open_port_count = len(node['opened'])
        return True

    def brutessh(self, server: str) -> bool:
        return self._open_port('brutessh', server)

    def ftpcrack(self, server: str) -> bool:
        return self._open_port('ftpcrack', server)

    def relaysmtp(self, server: str) -> bool:
        return self._open_port('relaysmtp', server)

    def httpworm(self, server: str) -> bool:
        return self._open_port('httpworm', server)

    def sqlinject(self, server: str) -> bool:
        return self._open_port('sqlinject', server)

    def nuke(self, server: str) -> bool:
        data = self._data(server)
        if data.open_port_count < data.num_open_ports_required:
            return False
        data.has_admin_rights = True
        return True

    # Files

    def file_exists(self, filename: str, server: str) -> bool:
        return filename in self._node(server)['files']

    def ls(self, server: str) -> List[str]:
        return sorted(self._node(server)['files'])

    def scp(self, files: Union[str, Sequence[str]], destination: str, source: str = "home") -> bool:
        if isinstance(files, str):
            files = [files]
        target_files = self._node(destination)['files']
        copied_all = True
        for filename in files:
            if not self.file_exists(filename, source):
                copied_all = False
                continue
            target_files.add(filename)
        return copied_all

    def rm(self, filename: str, server: str) -> bool:
        files = self._node(server)['files']
        if filename not in files:
            return False
        if any(proc.filename == filename for proc in self._processes[server]):
            return False
        files.remove(filename)
        return True

    # Processes and RAM

    def ps(self, server: str) -> List[ProcessInfo]:
        self._node(server)
        return list(self._processes[server])

    def is_running(self, script: str, server: str, *args: str) -> bool:
        return any(proc.matches(script, tuple(args)) for proc in self.ps(server))

    def exec(self, script: str, server: str, threads: int = 1, *args: str) -> int:
        data = self._data(server)
        args = tuple(str(a) for a in args)
        if not data.has_admin_rights or threads < 1:
            return 0
        if not self.file_exists(script, server):
            return 0
        if self.is_running(script, server, *args):
            return 0
        if self.get_script_ram(script, server) * threads > data.available_ram:
            return 0
        return self.start_process(server, script, threads=threads, args=args).pid

    def _stop(self, server: str, procs: List[ProcessInfo]) -> bool:
        for proc in procs:
            self._processes[server].remove(proc)
            data = self._data(server)
            data.ram_used = max(0.0, data.ram_used - self.script_ram.get(proc.filename, 0.0) * proc.threads)
        return bool(procs)

    def kill(self, script: str, server: str, *args: str) -> bool:
        args = tuple(str(a) for a in args)
        return self._stop(server, [p for p in self.ps(server) if p.matches(script, args)])

    def script_kill(self, script: str, server: str) -> bool:
        return self._stop(server, [p for p in self.ps(server) if p.matches(script)])

    def get_server_max_ram(self, server: str) -> float:
        return self._data(server).max_ram

    def get_server_used_ram(self, server: str) -> float:
        return self._data(server).ram_used

    def get_script_ram(self, script: str, server: str = "home") -> float:
        if not self.file_exists(script, server):
            return 0.0
        return self.script_ram.get(script, 0.0)

    # Diagnostics

    def get_server(self, server: str) -> Server:
        return dataclasses.replace(self._data(server))

    def get_hack_time(self, server: str) -> float:
        return self._node(server)['hack_time']

    def get_grow_time(self, server: str) -> float:
        return self._node(server)['grow_time']

    def get_weaken_time(self, server: str) -> float:
        return self._node(server)['weaken_time']

    def hack_analyze_chance(self, server: str) -> float:
        return self._node(server)['hack_chance']

    # Terminal

    def tprint(self, message: str) -> None:
        self.terminal.append(message)
        if self.echo:
            print(message)

    def sleep(self, millis: float) -> None:
        self.slept.append(millis)
