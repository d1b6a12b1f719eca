#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""ballie accounts command (chart of accounts)."""

from __future__ import annotations

from ballie.commands.common import open_client, parse_ids, write_output
from ballie.filters import LedgerAccountFilters
from ballie.services import LedgerAccountService
from ballie.services.ledger_accounts import BULK_ACTIONS, EXPORT_FORMATS
from ballie.utils import load_json_input, print_json


def add_parser(subparsers, parents):
    parser = subparsers.add_parser("accounts", help="Ledger accounts", parents=parents)
    sub = parser.add_subparsers(dest="accounts_cmd")

    list_parser = sub.add_parser("list", help="List ledger accounts", parents=parents)
    _add_filter_args(list_parser)
    list_parser.add_argument("--all", action="store_true", help="Follow pagination to the last page")
    list_parser.set_defaults(func=run_list)

    show_parser = sub.add_parser("show", help="Show one account", parents=parents)
    show_parser.add_argument("id", type=int)
    show_parser.set_defaults(func=run_show)

    create_parser = sub.add_parser("create", help="Create an account from stdin JSON", parents=parents)
    create_parser.set_defaults(func=run_create)

    update_parser = sub.add_parser("update", help="Update an account from stdin JSON", parents=parents)
    update_parser.add_argument("id", type=int)
    update_parser.set_defaults(func=run_update)

    toggle_parser = sub.add_parser("toggle", help="Activate/deactivate", parents=parents)
    toggle_parser.add_argument("id", type=int)
    toggle_parser.set_defaults(func=run_toggle)

    delete_parser = sub.add_parser("delete", help="Delete an account", parents=parents)
    delete_parser.add_argument("id", type=int)
    delete_parser.set_defaults(func=run_delete)

    search_parser = sub.add_parser("search", help="Quick search", parents=parents)
    search_parser.add_argument("query")
    search_parser.set_defaults(func=run_search)

    balance_parser = sub.add_parser("balance", help="Current balance", parents=parents)
    balance_parser.add_argument("id", type=int)
    balance_parser.set_defaults(func=run_balance)

    children_parser = sub.add_parser("children", help="Child accounts", parents=parents)
    children_parser.add_argument("id", type=int)
    children_parser.set_defaults(func=run_children)

    bulk_parser = sub.add_parser("bulk", help="Bulk activate/deactivate/delete", parents=parents)
    bulk_parser.add_argument("action", choices=BULK_ACTIONS)
    bulk_parser.add_argument("ids", nargs="+")
    bulk_parser.set_defaults(func=run_bulk)

    export_parser = sub.add_parser("export", help="Download an export", parents=parents)
    export_parser.add_argument("--format", dest="fmt", choices=EXPORT_FORMATS, default="excel")
    export_parser.add_argument("--output", required=True)
    _add_filter_args(export_parser)
    export_parser.set_defaults(func=run_export)

    import_parser = sub.add_parser("import", help="Upload an import file", parents=parents)
    import_parser.add_argument("path")
    import_parser.set_defaults(func=run_import)

    form_parser = sub.add_parser("form-data", help="Groups, parents and types for the create form", parents=parents)
    form_parser.set_defaults(func=run_form_data)

    return parser


def _add_filter_args(parser):
    parser.add_argument("--search")
    parser.add_argument("--type", dest="account_type")
    parser.add_argument("--group", dest="account_group_id", type=int)
    parser.add_argument("--parent", dest="parent_id", type=int)
    parser.add_argument("--status", choices=["all", "active", "inactive"])
    parser.add_argument("--has-balance", action="store_true", default=None)
    parser.add_argument("--level", type=int)
    parser.add_argument("--sort", default="code")
    parser.add_argument("--direction", choices=["asc", "desc"], default="asc")
    parser.add_argument("--view", dest="view_mode", choices=["list", "tree"], default="list")
    parser.add_argument("--page", type=int, default=1)
    parser.add_argument("--per-page", type=int, default=20)


def _filters(args) -> LedgerAccountFilters:
    return LedgerAccountFilters(
        search=args.search,
        account_type=args.account_type,
        account_group_id=args.account_group_id,
        parent_id=args.parent_id,
        status=args.status,
        has_balance=args.has_balance,
        level=args.level,
        sort=args.sort,
        direction=args.direction,
        view_mode=args.view_mode,
        page=args.page,
        per_page=args.per_page,
    )


def run_list(args):
    filters = _filters(args)
    with open_client(args) as client:
        service = LedgerAccountService(client)
        if args.all:
            accounts = [a.to_dict() for a in service.iter_all(filters)]
            print_json({"ledger_accounts": accounts, "total": len(accounts)})
            return
        page = service.list(filters)
    print_json(page.to_dict("ledger_accounts"))


def run_show(args):
    with open_client(args) as client:
        account = LedgerAccountService(client).show(args.id)
    print_json(account.to_dict())


def run_create(args):
    data = load_json_input()
    with open_client(args) as client:
        account = LedgerAccountService(client).create(data)
    print_json({"status": "success", "ledger_account": account.to_dict()})


def run_update(args):
    data = load_json_input()
    with open_client(args) as client:
        account = LedgerAccountService(client).update(args.id, data)
    print_json({"status": "success", "ledger_account": account.to_dict()})


def run_toggle(args):
    with open_client(args) as client:
        account = LedgerAccountService(client).toggle(args.id)
    print_json({"status": "success", "id": account.id, "is_active": account.is_active})


def run_delete(args):
    with open_client(args) as client:
        LedgerAccountService(client).delete(args.id)
    print_json({"status": "success", "id": args.id})


def run_search(args):
    with open_client(args) as client:
        accounts = LedgerAccountService(client).search(args.query)
    print_json({"accounts": [a.to_dict() for a in accounts]})


def run_balance(args):
    with open_client(args) as client:
        print_json({"id": args.id, **LedgerAccountService(client).balance(args.id)})


def run_children(args):
    with open_client(args) as client:
        children = LedgerAccountService(client).children(args.id)
    print_json({"children": [a.to_dict() for a in children]})


def run_bulk(args):
    ids = parse_ids(args.ids)
    with open_client(args) as client:
        result = LedgerAccountService(client).bulk_action(args.action, ids)
    print_json({"status": "success", "action": args.action, "result": result})


def run_export(args):
    with open_client(args) as client:
        data = LedgerAccountService(client).export(args.fmt, _filters(args))
    print_json(write_output(data, args.output))


def run_import(args):
    with open_client(args) as client:
        result = LedgerAccountService(client).import_file(args.path)
    print_json({"status": "success", "result": result})


def run_form_data(args):
    with open_client(args) as client:
        print_json(LedgerAccountService(client).form_data())
