from __future__ import annotations

import argparse
from typing import Sequence

from amsilence.cli.alerts import list_alerts_command
from amsilence.cli.serve import serve_command
from amsilence.cli.silences import (
    create_silence_command,
    expire_silence_command,
    get_silence_command,
    list_silences_command,
    update_silence_command,
)


def _add_config_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-c",
        "--config.file",
        dest="config_file",
        default=None,
        help="Path to config file (YAML, e.g. alertmanager_api: http://localhost:9093/api/v2)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="amsilence",
        description="Schedule recurring maintenance window silences in Alertmanager",
    )
    subparsers = parser.add_subparsers(dest="command")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    _add_config_flag(serve_parser)
    serve_parser.add_argument(
        "-p",
        "--web.listen-address",
        dest="port",
        type=int,
        default=None,
        help="Port for the application to listen on (default: 8080)",
    )

    silence_parser = subparsers.add_parser("silence", help="Manage silences")
    silence_sub = silence_parser.add_subparsers(dest="silence_command")

    create_parser = silence_sub.add_parser("create", help="Create silences for a maintenance window")
    create_parser.add_argument("request_file", help="Path to silence request (YAML or JSON)")
    _add_config_flag(create_parser)

    update_parser = silence_sub.add_parser("update", help="Expire a silence and recreate it")
    update_parser.add_argument("silence_id", help="Silence ID")
    update_parser.add_argument("request_file", help="Path to silence request (YAML or JSON)")
    _add_config_flag(update_parser)

    get_parser = silence_sub.add_parser("get", help="Show a silence")
    get_parser.add_argument("silence_id", help="Silence ID")
    _add_config_flag(get_parser)

    expire_parser = silence_sub.add_parser("expire", help="Expire a silence")
    expire_parser.add_argument("silence_id", help="Silence ID")
    _add_config_flag(expire_parser)

    list_parser = silence_sub.add_parser("list", help="List silences")
    list_parser.add_argument("--filtered", action="store_true", help="Hide expired silences")
    list_parser.add_argument("--output", choices=["text", "json"], default="text", help="Output format")
    _add_config_flag(list_parser)

    alerts_parser = subparsers.add_parser("alerts", help="Inspect alerts")
    alerts_sub = alerts_parser.add_subparsers(dest="alerts_command")
    alerts_list_parser = alerts_sub.add_parser("list", help="List alerts")
    alerts_list_parser.add_argument("--output", choices=["text", "json"], default="text", help="Output format")
    _add_config_flag(alerts_list_parser)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "serve":
        return serve_command(config_file=args.config_file, port=args.port)

    if args.command == "silence":
        if args.silence_command == "create":
            return create_silence_command(args.request_file, config_file=args.config_file)
        if args.silence_command == "update":
            return update_silence_command(
                args.silence_id, args.request_file, config_file=args.config_file
            )
        if args.silence_command == "get":
            return get_silence_command(args.silence_id, config_file=args.config_file)
        if args.silence_command == "expire":
            return expire_silence_command(args.silence_id, config_file=args.config_file)
        if args.silence_command == "list":
            return list_silences_command(
                filtered=args.filtered, output=args.output, config_file=args.config_file
            )

    if args.command == "alerts" and args.alerts_command == "list":
        return list_alerts_command(output=args.output, config_file=args.config_file)

    parser.print_help()
    return 1


if __name__ == "__main__":  # pragma: no cover - exercised via console script
    raise SystemExit(main())
