from enum import Enum
from typing import List

from netops.environment.host import Host


class PortOpener(Enum):
    BRUTE_SSH = "BruteSSH.exe"
    FTP_CRACK = "FTPCrack.exe"
    RELAY_SMTP = "relaySMTP.exe"
    HTTP_WORM = "HTTPWorm.exe"
    SQL_INJECT = "SQLInject.exe"

    @property
    def program(self) -> str:
        return self.value

    def apply(self, host: Host, server: str) -> bool:
        """Open this opener's port on ``server``."""
        method = {
            PortOpener.BRUTE_SSH: host.brutessh,
            PortOpener.FTP_CRACK: host.ftpcrack,
            PortOpener.RELAY_SMTP: host.relaysmtp,
            PortOpener.HTTP_WORM: host.httpworm,
            PortOpener.SQL_INJECT: host.sqlinject,
        }[self]
        return method(server)


def available_openers(host: Host, origin: str = "home") -> List[PortOpener]:
    """Port openers whose program is present on ``origin``."""
    return [opener for opener in PortOpener if host.file_exists(opener.program, origin)]
