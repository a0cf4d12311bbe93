from netops.actions.openers import PortOpener, available_openers
from netops.actions.unlock import UnlockStatus, can_unlock, unlock


def test_available_openers_follow_home_files(network):
    assert available_openers(network) == []
    network.graph.nodes["home"]["files"].update({"BruteSSH.exe", "SQLInject.exe"})
    assert available_openers(network) == [PortOpener.BRUTE_SSH, PortOpener.SQL_INJECT]


def test_already_rooted_server(network):
    result = unlock(network, "pserv-0")
    assert result.status == UnlockStatus.ALREADY_ROOTED
    assert result.rooted


def test_server_without_port_requirement_is_nuked(network):
    result = unlock(network, "n00dles")
    assert result.status == UnlockStatus.UNLOCKED
    assert network.has_root_access("n00dles")


def test_shortfall_leaves_server_locked(network):
    assert not can_unlock(network, "CSEC")
    result = unlock(network, "CSEC")
    assert result.status == UnlockStatus.SHORTFALL
    assert (result.ports_opened, result.ports_required) == (0, 1)
    assert not result.rooted
    assert not network.has_root_access("CSEC")


def test_every_available_opener_is_applied(network):
    network.graph.nodes["home"]["files"].update({"BruteSSH.exe", "FTPCrack.exe"})
    assert can_unlock(network, "neo-net")
    result = unlock(network, "neo-net")
    assert result.status == UnlockStatus.UNLOCKED
    assert result.openers == [PortOpener.BRUTE_SSH, PortOpener.FTP_CRACK]
    assert network.get_server("neo-net").open_port_count == 2


def test_openers_applied_even_on_shortfall(network):
    network.graph.nodes["home"]["files"].add("BruteSSH.exe")
    result = unlock(network, "neo-net")
    assert result.status == UnlockStatus.SHORTFALL
    assert (result.ports_opened, result.ports_required) == (1, 2)
    assert network.get_server("neo-net").open_port_count == 1
