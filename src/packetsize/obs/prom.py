"""Prometheus instrumentation for the packet size estimator.

Exports a registry and helpers the estimator calls after each packet and on
every unsupported value kind.
"""
from __future__ import annotations
from prometheus_client import (
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
    CONTENT_TYPE_LATEST,
)

# Registry must be created before metric objects reference it.
REGISTRY = CollectorRegistry()

PACKET_COUNTER = Counter(
    "packetsize_packets_total",
    "Packets estimated, by whether transport overhead was included.",
    ["transport"],
    registry=REGISTRY,
)
PACKET_HIST = Histogram(
    "packetsize_packet_bytes",
    "Histogram of estimated packet sizes (bytes).",
    buckets=(16, 32, 64, 128, 256, 512, 1024, 2048, 4096, 8192, 16384, 65536),
    registry=REGISTRY,
)
VALUE_COUNT_HIST = Histogram(
    "packetsize_packet_values",
    "Number of top-level values per estimated packet.",
    buckets=(0, 1, 2, 4, 8, 16, 32, 64),
    registry=REGISTRY,
)
UNSUPPORTED_COUNTER = Counter(
    "packetsize_unsupported_values_total",
    "Values whose kind has no size rule (estimated as 0 bytes).",
    ["kind"],
    registry=REGISTRY,
)


def observe_packet(*, total_bytes: int, value_count: int, transport_included: bool):
    PACKET_COUNTER.labels(transport="included" if transport_included else "skipped").inc()
    PACKET_HIST.observe(total_bytes)
    VALUE_COUNT_HIST.observe(value_count)


def observe_unsupported(kind: str):
    UNSUPPORTED_COUNTER.labels(kind=kind).inc()


def prometheus_latest() -> tuple[bytes, str]:
    return generate_latest(REGISTRY), CONTENT_TYPE_LATEST
