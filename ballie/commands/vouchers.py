#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""ballie vouchers command."""

from __future__ import annotations

from datetime import date
from typing import Dict, List

from ballie.commands.common import open_client, parse_ids, write_output
from ballie.filters import VoucherFilters
from ballie.services import VoucherService
from ballie.services.vouchers import BULK_ACTIONS
from ballie.utils import ApiError, load_json_input, print_json
from ballie.voucher_form import (
    VOUCHER_TYPES_BY_CODE,
    build_entries,
    build_payload,
    ensure_balanced,
    validate_entries,
    voucher_type,
)

HEADER_KEYS = ("voucher_type_id", "voucher_date", "voucher_number", "narration", "reference_number")


def add_parser(subparsers, parents):
    parser = subparsers.add_parser("vouchers", help="Vouchers", parents=parents)
    sub = parser.add_subparsers(dest="vouchers_cmd")
    type_codes = sorted(VOUCHER_TYPES_BY_CODE)

    list_parser = sub.add_parser("list", help="List vouchers", parents=parents)
    list_parser.add_argument("--search")
    list_parser.add_argument("--type-id", dest="voucher_type_id", type=int)
    list_parser.add_argument("--status", choices=["draft", "posted"])
    list_parser.add_argument("--from", dest="date_from")
    list_parser.add_argument("--to", dest="date_to")
    list_parser.add_argument("--sort-by", default="voucher_date")
    list_parser.add_argument("--direction", choices=["asc", "desc"], default="desc")
    list_parser.add_argument("--page", type=int, default=1)
    list_parser.add_argument("--per-page", type=int, default=20)
    list_parser.set_defaults(func=run_list)

    show_parser = sub.add_parser("show", help="Show a voucher", parents=parents)
    show_parser.add_argument("id", type=int)
    show_parser.set_defaults(func=run_show)

    create_parser = sub.add_parser("create", help="Create a voucher from stdin JSON", parents=parents)
    create_parser.add_argument("--type", dest="type_code", choices=type_codes, default="JE")
    create_parser.add_argument("--post", action="store_true", help="Save and post")
    create_parser.add_argument(
        "--attach",
        action="append",
        default=[],
        metavar="INDEX=PATH",
        help="Attach a document to the entry at INDEX",
    )
    create_parser.set_defaults(func=run_create)

    update_parser = sub.add_parser("update", help="Update a draft from stdin JSON", parents=parents)
    update_parser.add_argument("id", type=int)
    update_parser.add_argument("--type", dest="type_code", choices=type_codes, default="JE")
    update_parser.set_defaults(func=run_update)

    for name, helptext, func in (
        ("delete", "Delete a draft", run_delete),
        ("post", "Post a draft", run_post),
        ("unpost", "Return a posted voucher to draft", run_unpost),
        ("duplicate", "Prefill a new draft from a voucher", run_duplicate),
    ):
        action_parser = sub.add_parser(name, help=helptext, parents=parents)
        action_parser.add_argument("id", type=int)
        action_parser.set_defaults(func=func)

    bulk_parser = sub.add_parser("bulk", help="Bulk post/unpost/delete", parents=parents)
    bulk_parser.add_argument("action", choices=BULK_ACTIONS)
    bulk_parser.add_argument("ids", nargs="+")
    bulk_parser.set_defaults(func=run_bulk)

    search_parser = sub.add_parser("search", help="Search vouchers", parents=parents)
    search_parser.add_argument("q", nargs="?")
    search_parser.add_argument("--status", choices=["draft", "posted"])
    search_parser.add_argument("--type-id", dest="voucher_type_id", type=int)
    search_parser.set_defaults(func=run_search)

    pdf_parser = sub.add_parser("pdf", help="Download the voucher PDF", parents=parents)
    pdf_parser.add_argument("id", type=int)
    pdf_parser.add_argument("--output", required=True)
    pdf_parser.set_defaults(func=run_pdf)

    form_parser = sub.add_parser("form-data", help="Voucher types and postable accounts", parents=parents)
    form_parser.add_argument("--type", dest="type_code")
    form_parser.set_defaults(func=run_form_data)

    check_parser = sub.add_parser("check", help="Balance-check stdin JSON without saving", parents=parents)
    check_parser.add_argument("--type", dest="type_code", choices=type_codes, default="JE")
    check_parser.set_defaults(func=run_check)

    return parser


def parse_attachments(values: List[str]) -> Dict[int, str]:
    documents: Dict[int, str] = {}
    for value in values:
        index, sep, path = value.partition("=")
        if not sep or not index.strip().isdigit() or not path:
            raise ApiError("INVALID_ARGUMENT", f"Expected INDEX=PATH, got: {value}")
        documents[int(index)] = path
    return documents


def _checked_entries(type_code: str, data):
    entries = build_entries(type_code, data)
    validate_entries(entries)
    summary = ensure_balanced(entries)
    return entries, summary


def run_list(args):
    filters = VoucherFilters(
        search=args.search,
        voucher_type_id=args.voucher_type_id,
        status=args.status,
        date_from=args.date_from,
        date_to=args.date_to,
        sort_by=args.sort_by,
        sort_direction=args.direction,
        page=args.page,
        per_page=args.per_page,
    )
    with open_client(args) as client:
        page = VoucherService(client).list(filters)
    print_json(page.to_dict("vouchers"))


def run_show(args):
    with open_client(args) as client:
        voucher = VoucherService(client).show(args.id)
    print_json(voucher.to_dict())


def run_create(args):
    data = load_json_input()
    info = voucher_type(args.type_code)
    entries, _ = _checked_entries(info.code, data)

    documents = {i: e.document for i, e in enumerate(entries) if e.document}
    documents.update(parse_attachments(args.attach))
    action = "save_and_post" if args.post else data.get("action", "save")
    payload = build_payload(
        data.get("voucher_type_id") or info.id,
        data.get("voucher_date") or date.today().isoformat(),
        entries,
        voucher_number=data.get("voucher_number") or "",
        narration=data.get("narration") or "",
        reference_number=data.get("reference_number") or "",
        action=action,
    )
    with open_client(args) as client:
        voucher = VoucherService(client).create(payload, documents or None)
    print_json({"status": "success", "voucher": voucher.to_dict()})


def run_update(args):
    data = load_json_input()
    payload = {key: data[key] for key in HEADER_KEYS if key in data}
    if "entries" in data or args.type_code != "JE":
        entries, _ = _checked_entries(args.type_code, data)
        payload["entries"] = [e.to_payload() for e in entries]
    with open_client(args) as client:
        service = VoucherService(client)
        _require(service.show(args.id), "edit")
        voucher = service.update(args.id, payload)
    print_json({"status": "success", "voucher": voucher.to_dict()})


def _require(voucher, action: str) -> None:
    if not voucher.can(action):
        raise ApiError(
            "INVALID_ACTION",
            f"Voucher {voucher.voucher_number or voucher.id} cannot {action} while {voucher.status}",
            {"id": voucher.id, "status": voucher.status, "action": action},
        )


def run_delete(args):
    with open_client(args) as client:
        service = VoucherService(client)
        _require(service.show(args.id), "delete")
        service.delete(args.id)
    print_json({"status": "success", "id": args.id})


def run_post(args):
    with open_client(args) as client:
        service = VoucherService(client)
        _require(service.show(args.id), "post")
        voucher = service.post(args.id)
    print_json({"status": "success", "voucher": voucher.to_dict()})


def run_unpost(args):
    with open_client(args) as client:
        service = VoucherService(client)
        _require(service.show(args.id), "unpost")
        voucher = service.unpost(args.id)
    print_json({"status": "success", "voucher": voucher.to_dict()})


def run_duplicate(args):
    with open_client(args) as client:
        result = VoucherService(client).duplicate(args.id)
    source = result["voucher"]
    print_json(
        {
            "voucher_type_id": source.voucher_type_id,
            "narration": source.narration,
            "reference_number": source.reference_number,
            "entries": [e.to_payload() for e in source.entries],
        }
    )


def run_bulk(args):
    ids = parse_ids(args.ids)
    with open_client(args) as client:
        result = VoucherService(client).bulk_action(args.action, ids)
    print_json({"status": "success", "action": args.action, "result": result})


def run_search(args):
    with open_client(args) as client:
        vouchers = VoucherService(client).search(args.q, args.status, args.voucher_type_id)
    print_json({"vouchers": [v.to_dict() for v in vouchers]})


def run_pdf(args):
    with open_client(args) as client:
        data = VoucherService(client).pdf(args.id)
    print_json(write_output(data, args.output))


def run_form_data(args):
    with open_client(args) as client:
        form = VoucherService(client).form_data(args.type_code)
    print_json(
        {
            "voucher_types": [vars(t) for t in form.voucher_types],
            "ledger_accounts": [vars(a) for a in form.ledger_accounts],
            "selected_type": vars(form.selected_type) if form.selected_type else None,
            "defaults": form.defaults,
        }
    )


def run_check(args):
    data = load_json_input()
    entries, summary = _checked_entries(args.type_code, data)
    print_json(
        {
            "status": "balanced",
            **summary.to_dict(),
            "entries": [e.to_payload() for e in entries],
        }
    )
