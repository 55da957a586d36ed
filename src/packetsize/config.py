"""Estimator configuration loader.

Loads `.env` via python-dotenv, then optional config/packetsize.yml (or the file
named by PACKETSIZE_CONFIG), then environment overrides.

The overhead constants of the wire format are not configurable; only the
ambient knobs (log level, CLI budget limits) live here.
"""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

load_dotenv()

_DEFAULT = {
    "log_level": "INFO",
    # 0 disables the corresponding budget check
    "max_packet_bytes": 0,
    "max_value_bytes": 0,
}

_DEF_PATH = os.path.join(os.getcwd(), "config", "packetsize.yml")

_ENV_MAP = {
    "log_level": ("PACKETSIZE_LOG_LEVEL", str),
    "max_packet_bytes": ("PACKETSIZE_MAX_PACKET_BYTES", int),
    "max_value_bytes": ("PACKETSIZE_MAX_VALUE_BYTES", int),
}


@dataclass
class PacketSizeConfig:
    log_level: str = _DEFAULT["log_level"]
    max_packet_bytes: int = _DEFAULT["max_packet_bytes"]
    max_value_bytes: int = _DEFAULT["max_value_bytes"]

    def __post_init__(self):
        self.log_level = str(self.log_level).upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"unknown log level {self.log_level!r}")
        if self.max_packet_bytes < 0 or self.max_value_bytes < 0:
            raise ValueError("budget limits must be >= 0")


def _read_file(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        file_cfg = yaml.safe_load(f) or {}
    if not isinstance(file_cfg, dict):
        raise ValueError(f"{path}: top-level must be a mapping")
    return {k: v for k, v in file_cfg.items() if k in _DEFAULT}


def load_config(path: Optional[str] = None) -> PacketSizeConfig:
    data: Dict[str, Any] = {}
    # File first
    explicit = path or os.getenv("PACKETSIZE_CONFIG")
    if explicit:
        data.update(_read_file(explicit))
    elif os.path.exists(_DEF_PATH):
        data.update(_read_file(_DEF_PATH))
    # Env overrides
    for k, (env, cast) in _ENV_MAP.items():
        if env in os.environ:
            try:
                data[k] = cast(os.environ[env])
            except ValueError as e:
                raise ValueError(f"{env}: {e}") from e
    return PacketSizeConfig(
        log_level=data.get("log_level", _DEFAULT["log_level"]),
        max_packet_bytes=int(data.get("max_packet_bytes", _DEFAULT["max_packet_bytes"])),
        max_value_bytes=int(data.get("max_value_bytes", _DEFAULT["max_value_bytes"])),
    )
