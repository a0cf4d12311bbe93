import logging
from pathlib import Path

from netops.commands.deploy import run_deploy
from netops.commands.remove import run_remove
from netops.commands.serverinfo import run_serverinfo
from netops.config import DeployOptions, InfoOptions, RemoveOptions, load_config
from netops.environment.simulated_host import SimulatedHost

logging.basicConfig(level=logging.INFO)

ROOT = Path(__file__).resolve().parents[1]


def main():
    # Load configuration
    config = load_config(str(ROOT / "config" / "netops.yaml"))
    logging.info(f"Loaded configuration: {config}")

    host = SimulatedHost.from_yaml(str(Path(__file__).with_name("sample_network.yaml")))

    # Inspect the first ring, then everything two hops out
    run_serverinfo(host, config, InfoOptions(hops=[1, 2]))

    # Deploy hack.js aimed at n00dles, skipping purchased servers
    run_deploy(host, config, DeployOptions(max_hop=3, exclude_private=True, hack_target="n00dles"))

    # Follow the path to a deeper server
    run_serverinfo(host, config, InfoOptions(target="phantasy"))

    # Clean up only the n00dles instances
    run_remove(host, config, RemoveOptions(max_hop=3, match_args=["n00dles"]))


if __name__ == "__main__":
    main()
