import dataclasses
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import yaml

from netops.actions.processes import KillMatch
from netops.policy.threads import ThreadPolicyType


class ConfigurationError(ValueError):
    """Invalid invocation arguments or configuration; raised before any side effect."""


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class PrivateServerRule:
    """Naming convention for player-owned servers.

    With ``count`` unset any name starting with ``prefix`` matches; otherwise
    only the generated names ``prefix0`` .. ``prefix{count-1}`` do.
    """
    prefix: str = "pserv-"
    count: Optional[int] = None

    def __post_init__(self):
        if not isinstance(self.prefix, str) or not self.prefix:
            raise ConfigurationError("Private server prefix must be a non-empty string")
        if self.count is not None and (not _is_int(self.count) or self.count < 0):
            raise ConfigurationError(f"Private server count must be >= 0, got {self.count}")

    def generated_names(self) -> List[str]:
        if self.count is None:
            return []
        return [f"{self.prefix}{i}" for i in range(self.count)]

    def matches(self, server: str) -> bool:
        if self.count is None:
            return server.startswith(self.prefix)
        return server in self.generated_names()


@dataclass
class NetopsConfig:
    origin: str = "home"
    default_scripts: List[str] = field(default_factory=lambda: ["hack.js"])
    manual_exclusions: List[str] = field(default_factory=list)
    private_rule: PrivateServerRule = field(default_factory=PrivateServerRule)
    # Thread sizing strategy: "table" or "available"
    thread_policy: str = "available"
    # Process matching for stop requests: "filename" or "filename_and_args"
    kill_match: str = "filename_and_args"
    kill_delay_ms: int = 100
    info_delay_ms: int = 50
    info_exclude_private: bool = True


@dataclass
class DeployOptions:
    max_hop: int = 1
    scripts: List[str] = field(default_factory=list)
    exclude_private: bool = False
    hack_target: Optional[str] = None


@dataclass
class RemoveOptions:
    max_hop: int = 1
    scripts: List[str] = field(default_factory=list)
    exclude_private: bool = False
    # Only stop processes started with exactly these arguments
    match_args: Optional[List[str]] = None


@dataclass
class InfoOptions:
    hops: List[int] = field(default_factory=lambda: [1])
    target: Optional[str] = None


def config_from_dict(data: Dict) -> NetopsConfig:
    """Merge a configuration mapping over the defaults."""
    data = dict(data or {})
    known = {f.name for f in dataclasses.fields(NetopsConfig)}
    unknown = set(data) - known
    if unknown:
        raise ConfigurationError(f"Unknown configuration keys: {sorted(unknown)}")

    for key in ('origin', 'thread_policy', 'kill_match'):
        if key in data and not isinstance(data[key], str):
            raise ConfigurationError(f"{key} must be a string, got {data[key]!r}")
    for key in ('default_scripts', 'manual_exclusions'):
        if key in data and (
                not isinstance(data[key], list) or not all(isinstance(name, str) for name in data[key])
        ):
            raise ConfigurationError(f"{key} must be a list of server or script names, got {data[key]!r}")
    for key in ('kill_delay_ms', 'info_delay_ms'):
        if key in data and (not _is_int(data[key]) or data[key] < 0):
            raise ConfigurationError(f"{key} must be a non-negative integer, got {data[key]!r}")
    if 'info_exclude_private' in data and not isinstance(data['info_exclude_private'], bool):
        raise ConfigurationError(f"info_exclude_private must be true or false, got {data['info_exclude_private']!r}")

    rule = data.pop('private_rule', None)
    config = NetopsConfig(**data)
    if rule is not None:
        if not isinstance(rule, dict):
            raise ConfigurationError("private_rule must be a mapping with 'prefix' and/or 'count'")
        try:
            config.private_rule = PrivateServerRule(**rule)
        except TypeError as e:
            raise ConfigurationError(f"Invalid private_rule: {e}") from e

    if config.thread_policy not in {t.value for t in ThreadPolicyType}:
        raise ConfigurationError(f"Unknown thread_policy: {config.thread_policy!r}")
    if config.kill_match not in {m.value for m in KillMatch}:
        raise ConfigurationError(f"Unknown kill_match: {config.kill_match!r}")
    return config


def load_config(path: Optional[str] = None) -> NetopsConfig:
    if path is None:
        return NetopsConfig()
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Cannot parse configuration {path}: {e}") from e
    if data is not None and not isinstance(data, dict):
        raise ConfigurationError(f"Configuration {path} must be a mapping")
    return config_from_dict(data)


# Argument parsing

def parse_hop(value) -> int:
    """Parse a single positive hop count."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ConfigurationError("Invalid hop count. Please enter a positive number.")
    if not math.isfinite(number) or number <= 0 or not number.is_integer():
        raise ConfigurationError("Invalid hop count. Please enter a positive number.")
    return int(number)


def parse_hops(value) -> List[int]:
    """Parse a comma separated hop list, dropping invalid entries."""
    hops = []
    for part in str(value).split(","):
        try:
            hop = parse_hop(part.strip())
        except ConfigurationError:
            continue
        if hop not in hops:
            hops.append(hop)
    if not hops:
        raise ConfigurationError("Invalid hops. Please enter a comma-separated list of positive numbers.")
    return hops


def parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("true", "yes", "1"):
        return True
    if text in ("false", "no", "0"):
        return False
    raise ConfigurationError(f"Invalid boolean value: {value!r}")


def parse_names(value) -> List[str]:
    return [name.strip() for name in str(value).split(",") if name.strip()]
