"""
Ubersmith CLI entrypoint.

This CLI is intended for quick manual calls and debugging against a configured API
endpoint. Connection settings come from `ubersmith.config.settings` (YAML + env).

    python -m ubersmith.cli call client.get --param client_id=1000 --key full_name
"""

from __future__ import annotations

import argparse
import json
from typing import Any

from ubersmith.client import UbersmithClient
from ubersmith.config.settings import get_settings
from ubersmith.core.logging import configure_logging


def _parse_param_pairs(pairs: list[str]) -> dict[str, str]:
    """Parse `KEY=VALUE` CLI arguments into a dict (values stay strings)."""
    out: dict[str, str] = {}
    for pair in pairs:
        if "=" not in pair:
            raise ValueError(f"Invalid --param '{pair}', expected KEY=VALUE")
        key, value = pair.split("=", 1)
        out[key.strip()] = value
    return out


def _cmd_call(args: argparse.Namespace) -> int:
    """Handle the `call` subcommand."""
    settings = get_settings()
    api = settings.api
    updates: dict[str, Any] = {}
    if args.debug:
        updates["debug"] = True
    if args.insecure:
        updates["verify_tls"] = False
    if updates:
        settings = settings.model_copy(update={"api": api.model_copy(update=updates)})

    params: dict[str, Any] = {}
    if args.params_json:
        loaded = json.loads(args.params_json)
        if not isinstance(loaded, dict):
            raise ValueError("--params-json must be a JSON object")
        params.update(loaded)
    params.update(_parse_param_pairs(args.param))

    client = UbersmithClient.from_settings(settings)
    r = client.call(args.method, params)

    if args.key:
        for path in args.key:
            print(f"{path}: {json.dumps(r.key(path), ensure_ascii=False)}")
    elif args.json:
        payload = r.model_dump(exclude={"raw_data"})
        payload["data"] = r.data()
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        print(f"status: {r.status}")
        if not r.status:
            print(f"error_code: {r.error_code}")
            print(f"error_message: {r.error_message}")
            if r.decode_error:
                print(f"decode_error: {r.decode_error}")
        print(json.dumps(r.data(), ensure_ascii=False, indent=2))

    return 0 if r.status else 1


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the ubersmith CLI."""
    parser = argparse.ArgumentParser(prog="ubersmith")
    sub = parser.add_subparsers(dest="command", required=True)

    call = sub.add_parser("call", help="Call one API method and print the response.")
    call.add_argument("method", help="Remote method name (e.g. client.get)")
    call.add_argument("--param", action="append", default=[], help="Repeatable. KEY=VALUE")
    call.add_argument("--params-json", default=None, help="Parameters as a JSON object")
    call.add_argument(
        "--key", action="append", default=[], help="Repeatable. Print only this dotted path (e.g. tags.1.tag)"
    )
    call.add_argument("--json", action="store_true", help="Output the whole envelope as JSON")
    call.add_argument("--debug", action="store_true", help="Log request and response bodies")
    call.add_argument("--insecure", action="store_true", help="Skip TLS certificate verification")
    call.set_defaults(func=_cmd_call)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint callable used by `python -m ubersmith.cli`."""
    configure_logging()
    parser = build_parser()
    args = parser.parse_args(argv)
    func: Any = getattr(args, "func")
    return int(func(args))


if __name__ == "__main__":
    raise SystemExit(main())
