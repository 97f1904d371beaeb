"""Quick check of a running API server.

Usage:
  python scripts/check_api.py --base-url http://localhost:3000
"""

from __future__ import annotations

import argparse
import json
from collections.abc import Sequence

import requests


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Call /api/results and summarize the response")
    parser.add_argument("--base-url", dest="base_url", type=str, default="http://localhost:3000")
    parser.add_argument("--timeout", dest="timeout_seconds", type=float, default=10.0)
    args = parser.parse_args(argv)

    url = f"{args.base_url.rstrip('/')}/api/results"
    print(f"Testing API endpoint: {url}\n")

    try:
        resp = requests.get(url, timeout=args.timeout_seconds)
    except requests.RequestException as exc:
        print(f"Error: {exc}")
        print("\nMake sure the API server is running: python main.py")
        return 1

    print("Status:", resp.status_code)
    try:
        payload = resp.json()
    except ValueError:
        print("Raw response:", resp.text)
        return 0

    print(json.dumps(payload, indent=2))

    latest = payload.get("latest")
    if latest:
        print("\nLatest result found!")
        print("   Draw:", latest.get("drawNumber"))
        print("   Numbers:", latest.get("numbers"))
    else:
        print("\nNo latest result found")

    previous = payload.get("previous") or []
    if previous:
        print(f"\nFound {len(previous)} previous results")
    else:
        print("\nNo previous results found")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
