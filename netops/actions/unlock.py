import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List

from netops.actions.openers import PortOpener, available_openers
from netops.environment.host import Host

logger = logging.getLogger(__name__)


class UnlockStatus(Enum):
    ALREADY_ROOTED = "already_rooted"
    UNLOCKED = "unlocked"
    SHORTFALL = "shortfall"
    FAILED = "failed"


@dataclass
class UnlockResult:
    server: str
    status: UnlockStatus
    ports_opened: int = 0
    ports_required: int = 0
    openers: List[PortOpener] = field(default_factory=list)

    @property
    def rooted(self) -> bool:
        return self.status in (UnlockStatus.ALREADY_ROOTED, UnlockStatus.UNLOCKED)


def can_unlock(host: Host, server: str, origin: str = "home") -> bool:
    """True if ``server`` is rooted already or enough openers are on ``origin``."""
    if host.has_root_access(server):
        return True
    return len(available_openers(host, origin)) >= host.get_server_num_ports_required(server)


def unlock(host: Host, server: str, origin: str = "home") -> UnlockResult:
    """Gain root access on ``server`` using every available port opener."""
    if host.has_root_access(server):
        return UnlockResult(server, UnlockStatus.ALREADY_ROOTED)

    openers = available_openers(host, origin)
    for opener in openers:
        opener.apply(host, server)
    required = host.get_server_num_ports_required(server)

    if len(openers) < required:
        logger.debug(f"{server}: {len(openers)}/{required} ports, not nuking")
        return UnlockResult(server, UnlockStatus.SHORTFALL, len(openers), required, openers)

    host.nuke(server)
    status = UnlockStatus.UNLOCKED if host.has_root_access(server) else UnlockStatus.FAILED
    if status == UnlockStatus.FAILED:
        logger.warning(f"Nuke on {server} did not grant root access")
    return UnlockResult(server, status, len(openers), required, openers)
