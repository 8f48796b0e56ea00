#!/usr/bin/env python3
"""
Build vendor requests for an auction round from a JSON file.

The input file holds the host objects of the round:
    {"bidRequests": [...], "bidderRequest": {...}, "userSync": {...}}

Usage:
    python run_adapter.py auction.json
    python run_adapter.py auction.json --config config/adapter.yaml
    python run_adapter.py auction.json --skip-validation
    python run_adapter.py auction.json --output requests.json
"""

import argparse
import json
import sys


def main():
    parser = argparse.ArgumentParser(description="Build bid adapter requests")
    parser.add_argument("input", help="JSON file with the auction round")
    parser.add_argument("--config", default=None, help="Adapter config YAML file")
    parser.add_argument(
        "--skip-validation",
        action="store_true",
        help="Build requests for invalid bid requests too",
    )
    parser.add_argument("--indent", type=int, default=2, help="JSON output indent")
    parser.add_argument("--output", default=None, help="Write JSON to a file instead of stdout")
    args = parser.parse_args()

    from src.dmx.adapter import DmxBidAdapter
    from src.dmx.config import AdapterConfigError, load_adapter_config

    try:
        config = load_adapter_config(args.config)
    except AdapterConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        with open(args.input) as f:
            auction = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error: cannot read {args.input}: {e}", file=sys.stderr)
        sys.exit(1)

    if not isinstance(auction, dict):
        print(f"Error: {args.input} must contain a JSON object", file=sys.stderr)
        sys.exit(1)

    adapter = DmxBidAdapter(config=config)
    bid_requests = auction.get("bidRequests") or []
    if not args.skip_validation:
        bid_requests = [b for b in bid_requests if adapter.is_bid_request_valid(b)]

    requests = adapter.build_requests(
        bid_requests,
        auction.get("bidderRequest"),
        auction.get("userSync"),
    )
    output = json.dumps([r.to_dict() for r in requests], indent=args.indent)
    if args.output:
        with open(args.output, "w") as f:
            f.write(output + "\n")
    else:
        print(output)


if __name__ == "__main__":
    main()
