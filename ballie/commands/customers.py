#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""ballie customers command."""

from __future__ import annotations

from ballie.commands.parties import add_party_parser
from ballie.services import CustomerService


def add_parser(subparsers, parents):
    return add_party_parser(subparsers, parents, "customer", CustomerService)
