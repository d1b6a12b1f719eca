#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Main CLI for ballie."""

from __future__ import annotations

import argparse

from ballie import commands
from ballie.logging_config import configure_logging
from ballie.utils import ApiError, handle_error


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ballie",
        description="Ballie accounting API client",
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--base-url", help="API base URL (default: BALLIE_BASE_URL or https://ballie.co/api/v1)")
    common.add_argument("--session", help="Session file (default: ~/.ballie/session.json)")
    common.add_argument("--timeout", type=float, help="Request timeout in seconds")
    common.add_argument("--log-level", help="DEBUG, INFO, WARNING or ERROR")

    subparsers = parser.add_subparsers(dest="command")

    commands.add_login_parser(subparsers, [common])
    commands.add_logout_parser(subparsers, [common])
    commands.add_overview_parser(subparsers, [common])
    commands.add_accounts_parser(subparsers, [common])
    commands.add_vouchers_parser(subparsers, [common])
    commands.add_customers_parser(subparsers, [common])
    commands.add_vendors_parser(subparsers, [common])

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return
    configure_logging(getattr(args, "log_level", None))
    try:
        args.func(args)
    except ApiError as exc:
        handle_error(exc)


if __name__ == "__main__":
    main()
