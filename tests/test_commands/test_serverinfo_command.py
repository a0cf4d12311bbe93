from netops.commands.serverinfo import run_serverinfo
from netops.config import InfoOptions, NetopsConfig, PrivateServerRule
from netops.environment.node import Server


def test_hops_mode_excludes_private_servers(network):
    report = run_serverinfo(network, NetopsConfig(), InfoOptions(hops=[1]))

    assert [r.server.hostname for r in report.reports] == ["n00dles", "foodnstuff"]
    assert report.filtered.private_excluded == ["pserv-0"]
    assert report.path is None
    assert "Excluded servers: pserv-0" in network.terminal
    assert network.slept == [50, 50]


def test_multiple_hops(network):
    report = run_serverinfo(network, NetopsConfig(info_exclude_private=False), InfoOptions(hops=[2, 1]))

    assert [r.server.hostname for r in report.reports] == [
        "n00dles", "foodnstuff", "pserv-0", "CSEC", "neo-net"
    ]
    assert "Scanning servers at hops: 1, 2" in network.terminal
    assert any(line.startswith("Summary: 5 servers") for line in network.terminal)


def test_generated_private_list(network):
    config = NetopsConfig(private_rule=PrivateServerRule(prefix="pserv-", count=25))
    report = run_serverinfo(network, config, InfoOptions(hops=[1]))

    assert report.filtered.private_excluded == ["pserv-0"]


def test_target_prints_path(network):
    report = run_serverinfo(network, NetopsConfig(), InfoOptions(target="neo-net"))

    assert report.path == ["home", "foodnstuff", "neo-net"]
    assert "Node Path: home -> foodnstuff -> neo-net" in network.terminal
    assert [r.server.hostname for r in report.reports] == ["neo-net"]
    assert "Server: neo-net" in network.terminal


def test_unreachable_target_is_reported(network):
    network.add_server(Server(hostname="island"))

    report = run_serverinfo(network, NetopsConfig(), InfoOptions(target="island"))

    assert report.path == []
    assert "Node Path not found for island." in network.terminal
    assert [r.server.hostname for r in report.reports] == ["island"]


def test_unknown_target(network):
    report = run_serverinfo(network, NetopsConfig(), InfoOptions(target="nowhere"))

    assert report.path == []
    assert report.missing == ["nowhere"]
    assert "ERROR: Server nowhere does not exist." in network.terminal
