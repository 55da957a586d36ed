"""Public packet size API.

A packet costs the transport envelope (9 bytes, unless skipped) plus, for each
top-level value, its estimated size and a 1-byte type tag. All values in one
packet share a visited-set, so a table passed twice is priced once.
"""
from __future__ import annotations
from typing import Any, Iterable, Set

from ..models import PacketConfig, PacketMeasurement
from ..obs.prom import observe_packet
from .estimator import estimate
from .type_sizes import TRANSPORT_OVERHEAD, TYPE_OVERHEAD

__all__ = [
    "TRANSPORT_OVERHEAD",
    "TYPE_OVERHEAD",
    "estimate_value",
    "estimate_packet",
    "estimate_packet_config",
    "measure",
    "over_limits",
]


def estimate_value(value: Any) -> int:
    """Estimated size of one value, without packet or type overhead."""
    visited: Set[int] = set()
    return estimate(value, visited)


def measure(values: Iterable[Any], skip_transport_overhead: bool = False) -> PacketMeasurement:
    # visited holds id()s, so every value must stay alive until the packet is priced
    values = list(values)
    visited: Set[int] = set()
    transport = 0 if skip_transport_overhead else TRANSPORT_OVERHEAD
    sizes = [estimate(v, visited) + TYPE_OVERHEAD for v in values]
    total = transport + sum(sizes)
    observe_packet(
        total_bytes=total,
        value_count=len(sizes),
        transport_included=not skip_transport_overhead,
    )
    return PacketMeasurement(
        total_bytes=total,
        transport_bytes=transport,
        value_bytes=sizes,
        largest_bytes=max(sizes, default=0),
    )


def estimate_packet(values: Iterable[Any], skip_transport_overhead: bool = False) -> int:
    return measure(values, skip_transport_overhead).total_bytes


def estimate_packet_config(config: PacketConfig) -> int:
    return estimate_packet(config.values, config.skip_transport_overhead)


def over_limits(measurement: PacketMeasurement, max_total: int, max_single: int) -> bool:
    """Limits of 0 or less are disabled."""
    if max_total > 0 and measurement.total_bytes > max_total:
        return True
    return max_single > 0 and measurement.largest_bytes > max_single
