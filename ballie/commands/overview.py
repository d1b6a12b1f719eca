#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""ballie overview command."""

from __future__ import annotations

from ballie.commands.common import open_client
from ballie.services import accounting_overview
from ballie.utils import print_json


def add_parser(subparsers, parents):
    parser = subparsers.add_parser("overview", help="Accounting dashboard figures", parents=parents)
    parser.set_defaults(func=run)
    return parser


def run(args):
    with open_client(args) as client:
        print_json(accounting_overview(client))
