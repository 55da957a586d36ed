from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .config import load_config
from .loader import load_document
from .sizing.packet import measure, over_limits
from .sizing.type_sizes import TRANSPORT_OVERHEAD, TYPE_OVERHEAD, TYPE_SIZES
from .utils.logging import get_logger


def _read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def cmd_estimate(args: argparse.Namespace) -> int:
    cfg = load_config(args.config)
    get_logger().setLevel(cfg.log_level)
    try:
        packet = load_document(_read_input(args.input))
    except (OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    skip = args.skip_transport_overhead or packet.skip_transport_overhead
    m = measure(packet.values, skip)
    max_total = cfg.max_packet_bytes if args.max_bytes is None else args.max_bytes
    max_single = cfg.max_value_bytes if args.max_value_bytes is None else args.max_value_bytes
    over = over_limits(m, max_total, max_single)
    print(json.dumps({**m.model_dump(), "over_limits": over}))
    return 1 if over else 0


def cmd_table(args: argparse.Namespace) -> int:
    print(json.dumps({
        "transport_overhead": TRANSPORT_OVERHEAD,
        "type_overhead": TYPE_OVERHEAD,
        "type_sizes": dict(TYPE_SIZES),
    }, indent=2))
    return 0


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser("packetsize")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_est = sub.add_parser("estimate")
    p_est.add_argument("--input", required=True, help="packet document (YAML/JSON), or - for stdin")
    p_est.add_argument("--skip-transport-overhead", dest="skip_transport_overhead", action="store_true")
    p_est.add_argument("--max-bytes", dest="max_bytes", type=int)
    p_est.add_argument("--max-value-bytes", dest="max_value_bytes", type=int)
    p_est.add_argument("--config", help="YAML config file")
    p_est.set_defaults(func=cmd_estimate)

    p_tab = sub.add_parser("table")
    p_tab.set_defaults(func=cmd_table)

    args = p.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
