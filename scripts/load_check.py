#!/usr/bin/env python3
"""
Send N parallel requests to a running jailbox server and tally the outcomes.

Each request is an independent invocation; all of them should finish with the
same status/body class even when they overlap.

  1. Start the server: jailbox listen --context ./context
  2. Run: python scripts/load_check.py --base-url http://127.0.0.1:3000 --concurrent 20

Usage:
  python scripts/load_check.py [--base-url URL] [--input TEXT] [--concurrent N] [--collect]
  Or set env: JAILBOX_URL, CONCURRENT
"""

import argparse
import os
import sys
from concurrent.futures import ThreadPoolExecutor, as_completed

try:
    import requests
except ImportError:
    print("Install requests: pip install requests", file=sys.stderr)
    sys.exit(1)


def do_request(
    base_url: str,
    user_input: str | None,
    index: int,
) -> tuple[int, int, str]:
    """Send one request; return (index, status_code, content_type)."""
    try:
        if user_input is None:
            r = requests.get(f"{base_url}/api/collect", timeout=60)
        else:
            r = requests.post(
                f"{base_url}/api/submit",
                data=user_input.encode("utf-8"),
                headers={"Content-Type": "text/plain"},
                timeout=60,
            )
        return (index, r.status_code, r.headers.get("content-type", ""))
    except requests.RequestException:
        return (index, -1, "")  # -1 = error


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Fire N parallel collect/submit requests at a jailbox server."
    )
    parser.add_argument(
        "--base-url",
        default=os.environ.get("JAILBOX_URL", "http://127.0.0.1:3000"),
        help="Server base URL (or set JAILBOX_URL env)",
    )
    parser.add_argument(
        "--input",
        default="",
        help="Body for POST /api/submit (ignored with --collect)",
    )
    parser.add_argument(
        "--collect",
        action="store_true",
        help="Call GET /api/collect instead of POST /api/submit",
    )
    parser.add_argument(
        "--concurrent",
        type=int,
        default=int(os.environ.get("CONCURRENT", "20")),
        help="Number of concurrent requests (default 20)",
    )
    args = parser.parse_args()
    user_input = None if args.collect else args.input
    target = "collect" if args.collect else "submit"

    print(f"Sending {args.concurrent} concurrent {target} requests to {args.base_url}")
    print("---")

    results: list[tuple[int, int, str]] = []
    with ThreadPoolExecutor(max_workers=args.concurrent) as executor:
        futures = {
            executor.submit(do_request, args.base_url, user_input, i): i
            for i in range(1, args.concurrent + 1)
        }
        for fut in as_completed(futures):
            idx, code, ctype = fut.result()
            results.append((idx, code, ctype))
            code_str = str(code) if code >= 0 else "ERR"
            print(f"{idx} HTTP {code_str} {ctype}")

    print("---")
    success = sum(1 for _, c, t in results if c == 200 and t.startswith("application/json"))
    rejected = sum(1 for _, c, t in results if c == 200 and t.startswith("text/plain"))
    faulted = sum(1 for _, c, _ in results if c == 500)
    err = sum(1 for _, c, _ in results if c < 0)
    print(f"Done. success={success} rejected={rejected} faulted={faulted} errors={err}")


if __name__ == "__main__":
    main()
