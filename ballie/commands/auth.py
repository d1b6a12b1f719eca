#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""ballie login/logout commands."""

from __future__ import annotations

import getpass

from ballie.commands.common import open_client
from ballie.services import AuthService
from ballie.utils import print_json


def add_login_parser(subparsers, parents):
    parser = subparsers.add_parser("login", help="Log in and store the session", parents=parents)
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", help="Prompted for when omitted")
    parser.add_argument("--tenant-id", type=int, help="Workspace to log into")
    parser.add_argument("--device-name", default="Ballie CLI")
    parser.set_defaults(func=run_login)
    return parser


def add_logout_parser(subparsers, parents):
    parser = subparsers.add_parser("logout", help="Forget the stored session", parents=parents)
    parser.set_defaults(func=run_logout)
    return parser


def run_login(args):
    password = args.password or getpass.getpass("Password: ")
    with open_client(args) as client:
        service = AuthService(client)
        if args.tenant_id is not None:
            result = service.select_tenant(args.email, password, args.tenant_id, args.device_name)
        else:
            result = service.login(args.email, password, args.device_name)

    if result.get("multiple_tenants"):
        print_json(
            {
                "status": "select_tenant",
                "message": "Account belongs to several workspaces; rerun with --tenant-id",
                "tenants": result["tenants"],
            }
        )
        return
    print_json({"status": "success", "tenant": result["tenant"], "user": result["user"]})


def run_logout(args):
    with open_client(args) as client:
        AuthService(client).logout()
    print_json({"status": "success", "message": "Logged out"})
