import pytest
import yaml

from netops.cli import (
    deploy_main,
    parse_deploy_args,
    parse_remove_args,
    parse_serverinfo_args,
    remove_main,
    serverinfo_main,
)
from netops.config import ConfigurationError


def test_parse_deploy_args():
    options, _ = parse_deploy_args(["2", "hack.js, grow.js", "TRUE", "n00dles"])

    assert options.max_hop == 2
    assert options.scripts == ["hack.js", "grow.js"]
    assert options.exclude_private is True
    assert options.hack_target == "n00dles"


def test_parse_deploy_defaults():
    options, args = parse_deploy_args([])

    assert options.max_hop == 1
    assert options.scripts == []
    assert options.exclude_private is False
    assert options.hack_target is None
    assert args.thread_policy is None


@pytest.mark.parametrize("hop", ["0", "-1", "abc", "1.5", "inf"])
def test_invalid_hop_is_a_configuration_error(hop):
    with pytest.raises(ConfigurationError):
        parse_deploy_args([hop])


def test_invalid_boolean_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        parse_remove_args(["1", "hack.js", "maybe"])


def test_parse_remove_match_args():
    options, _ = parse_remove_args(["3", "hack.js", "false", "--args", "n00dles"])

    assert options.max_hop == 3
    assert options.match_args == ["n00dles"]
    assert parse_remove_args([])[0].match_args is None


def test_parse_serverinfo_args():
    options, _ = parse_serverinfo_args(["1,0,3,x,3", "CSEC"])

    assert options.hops == [1, 3]
    assert options.target == "CSEC"


def test_serverinfo_without_positive_hops():
    with pytest.raises(ConfigurationError):
        parse_serverinfo_args(["0,-2"])


def test_invalid_hop_aborts_without_side_effects(network):
    status = deploy_main(["0"], host=network)

    assert status == 1
    assert network.terminal == ["ERROR: Invalid hop count. Please enter a positive number."]
    assert not network.has_root_access("n00dles")
    assert network.ps("pserv-0") == []


def test_deploy_main_runs_against_given_host(network):
    status = deploy_main(["1", "hack.js", "true", "--thread-policy", "table"], host=network)

    assert status == 0
    # 4GB and 16GB servers under the table policy
    assert [p.threads for p in network.ps("n00dles")] == [1]
    assert [p.threads for p in network.ps("foodnstuff")] == [6]
    assert network.ps("pserv-0") == []


def test_remove_main_with_config_file(network, tmp_path):
    config_path = tmp_path / "netops.yaml"
    config_path.write_text(yaml.safe_dump({"manual_exclusions": ["n00dles"], "kill_delay_ms": 10}))
    network.start_process("n00dles", "hack.js")
    network.start_process("foodnstuff", "hack.js")

    status = remove_main(["1", "--config", str(config_path)], host=network)

    assert status == 0
    assert network.is_running("hack.js", "n00dles")
    assert not network.file_exists("hack.js", "foodnstuff")
    assert network.slept == [10]


def test_serverinfo_main_loads_network_file(tmp_path, capsys):
    network_path = tmp_path / "network.yaml"
    network_path.write_text(yaml.safe_dump({
        "servers": [
            {"hostname": "home", "has_admin_rights": True, "max_ram": 8},
            {"hostname": "n00dles", "max_ram": 4, "hack_chance": 0.5},
        ],
        "links": [["home", "n00dles"]],
    }))

    status = serverinfo_main(["1", "--network", str(network_path)])

    assert status == 0
    out = capsys.readouterr().out
    assert "Server: n00dles" in out
    assert "Hack Success Chance: 50.00%" in out


def test_missing_network_file(tmp_path, capsys):
    status = serverinfo_main(["1", "--network", str(tmp_path / "missing.yaml")])

    assert status == 1
    assert capsys.readouterr().out.startswith("ERROR: Cannot load network")


@pytest.mark.parametrize("scripts", [" , ", ""])
def test_explicit_empty_script_list_is_a_configuration_error(scripts):
    with pytest.raises(ConfigurationError):
        parse_deploy_args(["1", scripts])
    with pytest.raises(ConfigurationError):
        parse_remove_args(["1", scripts])


def test_empty_script_list_deploys_nothing(network):
    status = deploy_main(["1", " , "], host=network)

    assert status == 1
    assert network.terminal[0].startswith("ERROR: No script names given")
    assert network.ps("foodnstuff") == []


def test_malformed_config_file_returns_error(network, tmp_path):
    config_path = tmp_path / "netops.yaml"
    config_path.write_text("manual_exclusions: [home\n")
    network.start_process("foodnstuff", "hack.js")

    status = remove_main(["1", "--config", str(config_path)], host=network)

    assert status == 1
    assert network.terminal[0].startswith("ERROR: Cannot parse configuration")
    assert network.is_running("hack.js", "foodnstuff")


def test_malformed_network_file_returns_error(tmp_path, capsys):
    network_path = tmp_path / "network.yaml"
    network_path.write_text("servers: [\n")

    status = serverinfo_main(["1", "--network", str(network_path)])

    assert status == 1
    assert capsys.readouterr().out.startswith("ERROR: Cannot load network")
