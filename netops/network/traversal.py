from collections import deque
from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, Iterable, List, Optional

from netops.config import ConfigurationError

Adjacency = Callable[[str], Iterable[str]]


@dataclass(frozen=True)
class HopRange:
    """Select every server between 1 and ``max_hop`` hops away, inclusive."""
    max_hop: int

    def __post_init__(self):
        if not isinstance(self.max_hop, int) or isinstance(self.max_hop, bool) or self.max_hop < 1:
            raise ConfigurationError(f"Maximum hop must be a positive integer, got {self.max_hop!r}")

    @property
    def max_depth(self) -> int:
        return self.max_hop

    def includes(self, depth: int) -> bool:
        return 1 <= depth <= self.max_hop


@dataclass(frozen=True)
class ExactHops:
    """Select only servers at the listed hop distances."""
    hops: FrozenSet[int]

    def __init__(self, hops: Iterable[int]):
        hops = frozenset(hops)
        if any(not isinstance(h, int) or isinstance(h, bool) or h < 0 for h in hops):
            raise ConfigurationError(f"Hop distances must be non-negative integers, got {sorted(hops)}")
        if not any(h > 0 for h in hops):
            raise ConfigurationError("At least one positive hop distance is required")
        object.__setattr__(self, 'hops', hops)

    @property
    def max_depth(self) -> int:
        return max(self.hops)

    def includes(self, depth: int) -> bool:
        return depth in self.hops


def hop_distances(origin: str, adjacency: Adjacency, max_depth: Optional[int] = None) -> Dict[str, int]:
    """Breadth-first search from ``origin``.

    Returns every reached server mapped to its shortest hop distance, in
    discovery order. Expansion stops at ``max_depth`` when given.
    """
    depths = {origin: 0}
    queue = deque([origin])
    while queue:
        server = queue.popleft()
        depth = depths[server]
        if max_depth is not None and depth >= max_depth:
            continue
        for neighbor in adjacency(server):
            if neighbor not in depths:
                depths[neighbor] = depth + 1
                queue.append(neighbor)
    return depths


def traverse(origin: str, adjacency: Adjacency, mode) -> List[str]:
    """Servers whose hop distance from ``origin`` satisfies ``mode``, in BFS order."""
    depths = hop_distances(origin, adjacency, max_depth=mode.max_depth)
    return [server for server, depth in depths.items() if mode.includes(depth)]


def path_to(origin: str, adjacency: Adjacency, target: str) -> List[str]:
    """Shortest path from ``origin`` to ``target`` inclusive, or [] if unreachable."""
    visited = {origin}
    queue = deque([[origin]])
    while queue:
        path = queue.popleft()
        server = path[-1]
        if server == target:
            return path
        for neighbor in adjacency(server):
            if neighbor not in visited:
                visited.add(neighbor)
                queue.append(path + [neighbor])
    return []
