from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from netops.config import PrivateServerRule


@dataclass
class FilterResult:
    servers: List[str] = field(default_factory=list)
    manually_excluded: List[str] = field(default_factory=list)
    private_excluded: List[str] = field(default_factory=list)


def filter_servers(
        servers: Iterable[str],
        manual_exclusions: Iterable[str] = (),
        private_rule: Optional[PrivateServerRule] = None
) -> FilterResult:
    """Drop excluded servers, keeping track of which rule removed each one.

    A server matching both rules is reported as manually excluded only.
    Pass ``private_rule=None`` to keep private servers.
    """
    manual = set(manual_exclusions)
    result = FilterResult()
    for server in servers:
        if server in manual:
            result.manually_excluded.append(server)
        elif private_rule is not None and private_rule.matches(server):
            result.private_excluded.append(server)
        else:
            result.servers.append(server)
    return result
