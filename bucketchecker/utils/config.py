#!/usr/bin/env python3
"""
Bucket Checker Configuration
Probe timeouts, worker pool size, default regions and the write-test object.
Values come from the dataclass defaults, an optional YAML file, then CLI overrides.
"""

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Dict, Optional

import yaml


def _default_workers() -> int:
    # Probes are network-bound, so allow a few more threads than cores
    return min(32, (os.cpu_count() or 1) + 4)


@dataclass
class ProbeConfig:
    """Runtime settings for the probe engine"""

    # Per-request timeouts (seconds). Expiry counts as a failed probe.
    request_timeout: float = 10.0
    connect_timeout: float = 5.0

    # Cap on body bytes read per response; listing markers sit near the start
    max_body_bytes: int = 65536

    # Worker pool size (one target per task)
    max_workers: int = field(default_factory=_default_workers)

    # urllib3 retry budget for connection errors (0 = single attempt)
    retries: int = 0

    user_agent: str = "bucketchecker/1.0"

    # Default region per regional provider, used when the identifier has none
    regions: Dict[str, str] = field(default_factory=lambda: {
        "digitalocean": "nyc3",
        "linode": "us-east-1",
    })

    # Object uploaded by the write probe
    test_object_key: str = "bucketchecker-test-object.txt"
    test_object_body: str = "bucketchecker write test"

    # Console output
    color: bool = True
    banner: bool = True

    @property
    def timeout(self):
        """(connect, read) tuple in the form requests expects"""
        return (self.connect_timeout, self.request_timeout)

    @property
    def deadline(self) -> float:
        """Wall-clock limit for one whole request, body included"""
        return self.connect_timeout + self.request_timeout

    def region_for(self, key: str) -> str:
        return self.regions[key]

    def validate(self) -> "ProbeConfig":
        """Raise ValueError on out-of-range settings"""
        if self.request_timeout <= 0 or self.connect_timeout <= 0:
            raise ValueError("Timeouts must be positive")
        if self.max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        if self.retries < 0:
            raise ValueError("retries cannot be negative")
        if self.max_body_bytes < 1:
            raise ValueError("max_body_bytes must be at least 1")
        if not self.test_object_key:
            raise ValueError("test_object_key cannot be empty")
        for key in ("digitalocean", "linode"):
            if not self.regions.get(key):
                raise ValueError(f"No default region configured for {key}")
        return self


# Accepted YAML types per key
_FIELD_TYPES = {
    "request_timeout": (int, float),
    "connect_timeout": (int, float),
    "max_body_bytes": (int,),
    "max_workers": (int,),
    "retries": (int,),
    "user_agent": (str,),
    "regions": (dict,),
    "test_object_key": (str,),
    "test_object_body": (str,),
    "color": (bool,),
    "banner": (bool,),
}


def load_probe_config(config_path: Optional[Path] = None) -> ProbeConfig:
    """
    Load configuration from a YAML file

    Args:
        config_path: Path to a YAML mapping of ProbeConfig fields. None gives defaults.

    Returns:
        Validated ProbeConfig

    Raises:
        FileNotFoundError: config_path does not exist
        ValueError: the file is not a mapping or a key has the wrong type
    """
    config = ProbeConfig()
    if config_path is None:
        return config.validate()

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {config_path}")

    known = {f.name for f in fields(ProbeConfig)}
    for key, value in data.items():
        if key not in known:
            continue
        # bool is an int subclass; don't let `retries: true` through
        expected = _FIELD_TYPES[key]
        if isinstance(value, bool) and bool not in expected:
            raise ValueError(f"Invalid value for '{key}': {value!r}")
        if not isinstance(value, expected):
            raise ValueError(f"Invalid value for '{key}': {value!r}")
        if key == "regions":
            merged = dict(config.regions)
            merged.update({str(k): str(v) for k, v in value.items()})
            value = merged
        setattr(config, key, value)

    return config.validate()


def get_probe_config(config_path: Optional[Path] = None, **overrides) -> ProbeConfig:
    """Load configuration and apply non-None keyword overrides (e.g. from the CLI)"""
    config = load_probe_config(config_path)
    for key, value in overrides.items():
        if value is None:
            continue
        if key in ("digitalocean_region", "linode_region"):
            config.regions[key.rsplit("_", 1)[0]] = value
            continue
        if not hasattr(config, key):
            raise ValueError(f"Unknown config override: {key}")
        setattr(config, key, value)
    return config.validate()
