"""
Command line entry point.

Usage:
  jailbox listen  [--host H] [--port P] [--static DIR] [--context DIR] [--exec SCRIPT]
  jailbox collect [--context DIR] [--exec SCRIPT] [--parse]
  jailbox check   --input TEXT [--context DIR] [--exec SCRIPT] [--parse]

The script defaults to <context>/configure.py.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

import uvicorn

from jailbox.core.config import settings
from jailbox.core.scope import ScratchScopeManager
from jailbox.engines.script import Faulted, Outcome, Rejected, ScriptHost, Success


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "-c",
        "--context",
        type=Path,
        default=settings.CONTEXT_DIR,
        help=f"Context (data) directory scripts may read from (default {settings.CONTEXT_DIR})",
    )
    p.add_argument(
        "-e",
        "--exec",
        dest="script",
        type=Path,
        default=None,
        help=f"Script file (default <context>/{settings.MAIN_SCRIPT_NAME})",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jailbox",
        description="Run confined RestrictedPython scripts against a data directory.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    listen = sub.add_parser("listen", help="Start the HTTP server")
    listen.add_argument("-H", "--host", default="127.0.0.1", help="Bind address")
    listen.add_argument("-p", "--port", type=int, default=3000, help="Bind port")
    listen.add_argument(
        "-s",
        "--static",
        type=Path,
        default=settings.STATIC_DIR,
        help=f"Web UI directory served at / (default {settings.STATIC_DIR})",
    )
    _add_common(listen)

    collect = sub.add_parser("collect", help="Run collect() and print the result")
    _add_common(collect)
    collect.add_argument("-P", "--parse", action="store_true", help="Pretty-print JSON output")

    check = sub.add_parser("check", help="Run check(input) and print the result")
    check.add_argument("-i", "--input", "--user-input", dest="input", required=True, help="User input")
    _add_common(check)
    check.add_argument("-P", "--parse", action="store_true", help="Pretty-print JSON output")
    return parser


def _resolve_script(args: argparse.Namespace) -> Path:
    script = args.script or args.context / settings.MAIN_SCRIPT_NAME
    if not script.is_file():
        print(f"Error: script file does not exist: {script}", file=sys.stderr)
        sys.exit(1)
    if not args.context.is_dir():
        print(f"Error: context directory does not exist: {args.context}", file=sys.stderr)
        sys.exit(1)
    return script


def _make_host(args: argparse.Namespace) -> ScriptHost:
    script = _resolve_script(args)
    return ScriptHost.from_path(
        script,
        args.context,
        scopes=ScratchScopeManager(settings.SCRATCH_BASE_DIR),
    )


def print_outcome(outcome: Outcome, *, parse_json: bool = False) -> int:
    """Print an outcome for a local operator. Returns the process exit code."""
    if isinstance(outcome, Success):
        print("Script ran successfully: Ok()")
        if parse_json:
            value = json.loads(outcome.body)
            if isinstance(value, str):
                print(value)
            else:
                print(json.dumps(value, indent=2, ensure_ascii=False))
        else:
            print(outcome.body)
        return 0
    if isinstance(outcome, Rejected):
        print("Script ran successfully: Err()")
        print(outcome.reason)
        return 0
    if isinstance(outcome, Faulted):
        print(f"Script failed ({outcome.fault}): {outcome.diagnostic}", file=sys.stderr)
        return 1
    raise TypeError(f"Not an outcome: {outcome!r}")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    host = _make_host(args)

    if args.command == "listen":
        from jailbox.main import create_app

        print("Startup parameters:")
        print(f"  Server address: {args.host}:{args.port}")
        print(f"  Context directory: {host.root}")
        print(f"  Script: {host.filename}")
        print(f"  Web UI: {args.static}")
        uvicorn.run(create_app(host, args.static), host=args.host, port=args.port)
        return 0

    if args.command == "collect":
        outcome = host.collect()
    else:
        outcome = host.check(args.input)
    return print_outcome(outcome, parse_json=args.parse)


if __name__ == "__main__":
    sys.exit(main())
