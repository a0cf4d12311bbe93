"""Console entry points for the deploy, remove and serverinfo commands.

Positional arguments keep the order the in-game scripts used, e.g.::

    netops-deploy 2 hack.js,grow.js true n00dles --network network.yaml
    netops-remove 2 hack.js true --args n00dles
    netops-serverinfo 1,3
    netops-serverinfo 1 CSEC
"""
import argparse
from typing import List, Optional, Tuple

import yaml

from netops.commands.deploy import run_deploy
from netops.commands.remove import run_remove
from netops.commands.serverinfo import run_serverinfo
from netops.config import (
    ConfigurationError,
    DeployOptions,
    InfoOptions,
    NetopsConfig,
    RemoveOptions,
    load_config,
    parse_bool,
    parse_hop,
    parse_hops,
    parse_names,
)
from netops.environment.host import Host
from netops.environment.simulated_host import SimulatedHost
from netops.policy.threads import ThreadPolicyType
from netops.utils.logging import setup_logging


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        raise ConfigurationError(message)


def _parser(prog: str, description: str) -> argparse.ArgumentParser:
    parser = _ArgumentParser(prog=prog, description=description)
    parser.add_argument("--network", default="network.yaml", help="YAML description of the simulated network")
    parser.add_argument("--config", default=None, help="YAML configuration file")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging level (default: WARNING)"
    )
    return parser


def _parse_scripts(value: Optional[str]) -> List[str]:
    # Omitted means the configured defaults; given but empty is an error
    if value is None:
        return []
    scripts = parse_names(value)
    if not scripts:
        raise ConfigurationError(f"No script names given in {value!r}.")
    return scripts


def parse_deploy_args(argv: Optional[List[str]] = None) -> Tuple[DeployOptions, argparse.Namespace]:
    parser = _parser("netops-deploy", "Root reachable servers and run payload scripts on them.")
    parser.add_argument("max_hop", nargs="?", default="1", help="Maximum hop distance from home (default: 1)")
    parser.add_argument("scripts", nargs="?", default=None, help="Comma separated payload scripts")
    parser.add_argument("exclude_private", nargs="?", default="false", help="Skip private servers (default: false)")
    parser.add_argument("hack_target", nargs="?", default=None, help="Argument forwarded to the payloads")
    parser.add_argument(
        "--thread-policy",
        choices=[t.value for t in ThreadPolicyType],
        default=None,
        help="Thread sizing policy (default: from configuration)"
    )
    args = parser.parse_args(argv)

    options = DeployOptions(
        max_hop=parse_hop(args.max_hop),
        scripts=_parse_scripts(args.scripts),
        exclude_private=parse_bool(args.exclude_private),
        hack_target=args.hack_target.strip() if args.hack_target and args.hack_target.strip() else None
    )
    return options, args


def parse_remove_args(argv: Optional[List[str]] = None) -> Tuple[RemoveOptions, argparse.Namespace]:
    parser = _parser("netops-remove", "Stop and delete payload scripts on reachable servers.")
    parser.add_argument("max_hop", nargs="?", default="1", help="Maximum hop distance from home (default: 1)")
    parser.add_argument("scripts", nargs="?", default=None, help="Comma separated payload scripts")
    parser.add_argument("exclude_private", nargs="?", default="false", help="Skip private servers (default: false)")
    parser.add_argument(
        "--args",
        dest="match_args",
        default=None,
        help="Comma separated arguments; only instances started with exactly these are stopped"
    )
    args = parser.parse_args(argv)

    options = RemoveOptions(
        max_hop=parse_hop(args.max_hop),
        scripts=_parse_scripts(args.scripts),
        exclude_private=parse_bool(args.exclude_private),
        match_args=parse_names(args.match_args) if args.match_args is not None else None
    )
    return options, args


def parse_serverinfo_args(argv: Optional[List[str]] = None) -> Tuple[InfoOptions, argparse.Namespace]:
    parser = _parser("netops-serverinfo", "Print diagnostic information about servers.")
    parser.add_argument("hops", nargs="?", default="1", help="Comma separated hop distances (default: 1)")
    parser.add_argument("target", nargs="?", default=None, help="Print only this server and its path from home")
    args = parser.parse_args(argv)

    target = args.target.strip() if args.target else ""
    options = InfoOptions(hops=parse_hops(args.hops), target=target or None)
    return options, args


def _load(args: argparse.Namespace, host: Optional[Host]) -> Tuple[Host, NetopsConfig]:
    config = load_config(args.config)
    if host is None:
        try:
            host = SimulatedHost.from_yaml(args.network)
        except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Cannot load network {args.network}: {e}") from e
    return host, config


def _fail(host: Optional[Host], error: ConfigurationError) -> int:
    message = f"ERROR: {error}"
    if host is not None:
        host.tprint(message)
    else:
        print(message)
    return 1


def deploy_main(argv: Optional[List[str]] = None, host: Optional[Host] = None) -> int:
    try:
        options, args = parse_deploy_args(argv)
        setup_logging(args.log_level)
        host, config = _load(args, host)
        if args.thread_policy:
            config.thread_policy = args.thread_policy
        run_deploy(host, config, options)
    except ConfigurationError as e:
        return _fail(host, e)
    return 0


def remove_main(argv: Optional[List[str]] = None, host: Optional[Host] = None) -> int:
    try:
        options, args = parse_remove_args(argv)
        setup_logging(args.log_level)
        host, config = _load(args, host)
        run_remove(host, config, options)
    except ConfigurationError as e:
        return _fail(host, e)
    return 0


def serverinfo_main(argv: Optional[List[str]] = None, host: Optional[Host] = None) -> int:
    try:
        options, args = parse_serverinfo_args(argv)
        setup_logging(args.log_level)
        host, config = _load(args, host)
        run_serverinfo(host, config, options)
    except ConfigurationError as e:
        return _fail(host, e)
    return 0
