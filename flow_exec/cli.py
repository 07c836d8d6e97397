"""Terminal entry point for running a flow once.

Reads connection settings from the environment (or a .env file) and prints
the response body as JSON.

Usage:
    flow-exec run support-bot --payload '{"prompt": "hi"}'
    flow-exec run support-bot --payload-file request.json --timeout 30
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from argparse import ArgumentParser
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from flow_exec.client import ClientConfig, FlowClient
from flow_exec.errors import ConfigurationError, FlowClientError

EXIT_OK = 0
EXIT_FLOW_ERROR = 1
EXIT_USAGE = 2


def _load_payload(raw: str | None, payload_file: str | None) -> Any:
    if raw is not None and payload_file is not None:
        raise ValueError("--payload and --payload-file are mutually exclusive")
    if payload_file is not None:
        return json.loads(Path(payload_file).read_text(encoding="utf-8"))
    if raw is not None:
        return json.loads(raw)
    return {}


async def _run(config: ClientConfig, flow_id: str, payload: Any, timeout: float | None) -> int:
    async with FlowClient(config) as client:
        response = await client.execute_flow(flow_id, payload, timeout=timeout)
    print(json.dumps(response.to_dict(), indent=2))
    return EXIT_OK if response.ok else EXIT_FLOW_ERROR


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="flow-exec",
        description="Invoke a remote flow by id with a JSON payload",
    )
    sub = parser.add_subparsers(dest="command", metavar="COMMAND")

    run_p = sub.add_parser("run", help="Execute a flow and print its response")
    run_p.add_argument("flow_id", help="Identifier of the flow to execute")
    run_p.add_argument("--payload", metavar="JSON", help="Inline JSON payload (default: {})")
    run_p.add_argument("--payload-file", metavar="PATH", help="Read the JSON payload from a file")
    run_p.add_argument(
        "--timeout",
        type=float,
        default=None,
        metavar="SECONDS",
        help="Override FLOW_TIMEOUT for this request",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")
    load_dotenv()

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command != "run":
        parser.print_help()
        sys.exit(EXIT_FLOW_ERROR)

    try:
        payload = _load_payload(args.payload, args.payload_file)
    except (OSError, ValueError) as e:
        print(f"error: invalid payload: {e}", file=sys.stderr)
        sys.exit(EXIT_USAGE)

    try:
        config = ClientConfig.from_env()
    except ConfigurationError as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(EXIT_USAGE)

    logging.getLogger("flow_exec").setLevel(config.log_level)

    try:
        code = asyncio.run(_run(config, args.flow_id, payload, args.timeout))
    except (FlowClientError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(EXIT_FLOW_ERROR)
    sys.exit(code)


if __name__ == "__main__":
    main()
