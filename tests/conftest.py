import pytest

from netops.config import NetopsConfig
from netops.environment.node import Server
from netops.environment.simulated_host import SimulatedHost


def build_host(servers, links, home_files=("hack.js",), script_ram=None):
    """Build a quiet simulated host; ``home`` is added automatically."""
    host = SimulatedHost(script_ram=script_ram or {"hack.js": 2.0}, echo=False)
    host.add_server(
        Server(hostname="home", has_admin_rights=True, purchased_by_player=True, max_ram=64),
        files=home_files
    )
    for server in servers:
        host.add_server(server)
    for left, right in links:
        host.connect(left, right)
    return host


@pytest.fixture
def network():
    """
    home ── n00dles ── CSEC
      │  └─ foodnstuff ── neo-net
      └─ pserv-0
    """
    return build_host(
        servers=[
            Server(hostname="n00dles", max_ram=4, money_max=1750000),
            Server(hostname="foodnstuff", max_ram=16),
            Server(hostname="CSEC", max_ram=8, num_open_ports_required=1),
            Server(hostname="neo-net", max_ram=32, num_open_ports_required=2),
            Server(hostname="pserv-0", has_admin_rights=True, purchased_by_player=True, max_ram=128),
        ],
        links=[
            ("home", "n00dles"),
            ("home", "foodnstuff"),
            ("home", "pserv-0"),
            ("n00dles", "CSEC"),
            ("foodnstuff", "neo-net"),
        ]
    )


@pytest.fixture
def config():
    return NetopsConfig()


@pytest.fixture
def make_host():
    return build_host
