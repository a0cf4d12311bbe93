from netops.actions.info import collect_server_report, format_server_report
from netops.environment.node import Server


def test_report_reads_host_attributes(make_host):
    host = make_host(servers=[], links=[])
    host.add_server(
        Server(
            hostname="n00dles",
            required_hacking_skill=1,
            hack_difficulty=1.5,
            min_difficulty=1.0,
            money_available=70000,
            money_max=1750000,
            ram_used=2,
            max_ram=4,
            cpu_cores=1,
            server_growth=3000
        ),
        hack_time=61500,
        grow_time=5800,
        weaken_time=7200,
        hack_chance=0.95678
    )

    report = collect_server_report(host, "n00dles")

    assert report.server.money_max == 1750000
    assert report.hack_chance_percent == 95.68
    lines = format_server_report(report)
    assert lines == [
        "Server: n00dles",
        "  Root Access: false",
        "  Required Hacking Level: 1",
        "  Security: Current 1.5 | Minimum 1.0",
        "  Money: Available $70.00k / Max $1.75m",
        "  RAM: 2 / 4 GB",
        "  Ports Required: 0",
        "  CPU Cores: 1",
        "  Hack Time: 1 minute 1 second",
        "  Grow Time: 5 seconds",
        "  Weaken Time: 7 seconds",
        "  Growth Rate: 3000",
        "  Hack Success Chance: 95.68%",
    ]


def test_report_is_a_snapshot(network):
    report = collect_server_report(network, "n00dles")
    network.nuke("n00dles")
    assert not report.server.has_admin_rights
