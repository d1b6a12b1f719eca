#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Subcommands shared by ``ballie customers`` and ``ballie vendors``."""

from __future__ import annotations

from datetime import date

from ballie.commands.common import month_start, open_client, write_output
from ballie.exports import write_statement_xlsx
from ballie.filters import PartyFilters
from ballie.services.parties import STATEMENT_FORMATS
from ballie.utils import load_json_input, print_json


def add_party_parser(subparsers, parents, kind: str, service_cls):
    """Register ``<kind>s {list,show,create,update,toggle,statements,statement}``."""
    noun = f"{kind}s"
    parser = subparsers.add_parser(noun, help=f"CRM {noun}", parents=parents)
    sub = parser.add_subparsers(dest=f"{noun}_cmd")

    list_parser = sub.add_parser("list", help=f"List {noun}", parents=parents)
    _add_filter_args(list_parser)
    list_parser.set_defaults(func=run_list)

    show_parser = sub.add_parser("show", help=f"Show a {kind}", parents=parents)
    show_parser.add_argument("id", type=int)
    show_parser.set_defaults(func=run_show)

    create_parser = sub.add_parser("create", help=f"Create a {kind} from stdin JSON", parents=parents)
    create_parser.set_defaults(func=run_create)

    update_parser = sub.add_parser("update", help=f"Update a {kind} from stdin JSON", parents=parents)
    update_parser.add_argument("id", type=int)
    update_parser.set_defaults(func=run_update)

    toggle_parser = sub.add_parser("toggle", help="Toggle active status", parents=parents)
    toggle_parser.add_argument("id", type=int)
    toggle_parser.set_defaults(func=run_toggle)

    statements_parser = sub.add_parser("statements", help="Balances overview", parents=parents)
    _add_filter_args(statements_parser)
    statements_parser.set_defaults(func=run_statements)

    statement_parser = sub.add_parser("statement", help=f"Statement for one {kind}", parents=parents)
    statement_parser.add_argument("id", type=int)
    statement_parser.add_argument("--from", dest="start_date", help="Defaults to the first of this month")
    statement_parser.add_argument("--to", dest="end_date", help="Defaults to today")
    statement_parser.add_argument("--format", dest="fmt", choices=STATEMENT_FORMATS, help="Server export")
    statement_parser.add_argument("--output", help="Where to save the server export")
    statement_parser.add_argument("--xlsx", help="Write the statement workbook locally")
    statement_parser.add_argument("--url", action="store_true", help="Print a direct download link")
    statement_parser.set_defaults(func=run_statement)

    for sub_parser in (list_parser, show_parser, create_parser, update_parser,
                       toggle_parser, statements_parser, statement_parser):
        sub_parser.set_defaults(service_cls=service_cls, kind=kind)
    return parser


def _add_filter_args(parser):
    parser.add_argument("--search")
    parser.add_argument("--type", dest="party_type", choices=["individual", "business"])
    parser.add_argument("--status", choices=["active", "inactive"])
    parser.add_argument("--sort")
    parser.add_argument("--direction", choices=["asc", "desc"])
    parser.add_argument("--page", type=int, default=1)
    parser.add_argument("--per-page", type=int, default=20)


def _filters(args) -> PartyFilters:
    return PartyFilters(
        search=args.search,
        party_type=args.party_type,
        status=args.status,
        sort=args.sort,
        direction=args.direction,
        page=args.page,
        per_page=args.per_page,
    )


def run_list(args):
    with open_client(args) as client:
        page = args.service_cls(client).list(_filters(args))
    print_json(page.to_dict(f"{args.kind}s"))


def run_show(args):
    with open_client(args) as client:
        party = args.service_cls(client).show(args.id)
    print_json(party.to_dict())


def run_create(args):
    data = load_json_input()
    with open_client(args) as client:
        party = args.service_cls(client).create(data)
    print_json({"status": "success", args.kind: party.to_dict()})


def run_update(args):
    data = load_json_input()
    with open_client(args) as client:
        party = args.service_cls(client).update(args.id, data)
    print_json({"status": "success", args.kind: party.to_dict()})


def run_toggle(args):
    with open_client(args) as client:
        party = args.service_cls(client).toggle_status(args.id)
    print_json({"status": "success", "id": party.id, "party_status": party.status})


def run_statements(args):
    with open_client(args) as client:
        page = args.service_cls(client).statements(_filters(args))
    print_json(page.to_dict(f"{args.kind}s"))


def run_statement(args):
    start_date = args.start_date or month_start()
    end_date = args.end_date or date.today().isoformat()
    with open_client(args) as client:
        service = args.service_cls(client)
        if args.url:
            url = service.statement_url(args.id, start_date, end_date, args.fmt or "pdf")
            print_json({"url": url})
            return
        if args.fmt:
            data = service.export_statement(args.id, start_date, end_date, args.fmt)
            output = args.output or f"{args.kind}-{args.id}-statement.{'pdf' if args.fmt == 'pdf' else 'xlsx'}"
            print_json(write_output(data, output))
            return
        statement = service.statement(args.id, start_date, end_date)

    result = statement.to_dict()
    result["running_balances"] = statement.running_balances()
    if args.xlsx:
        result["xlsx"] = str(write_statement_xlsx(statement, args.xlsx))
    print_json(result)
