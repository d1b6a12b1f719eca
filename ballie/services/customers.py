#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Customer service."""

from __future__ import annotations

from ballie.models import Customer
from ballie.services.parties import PartyService


class CustomerService(PartyService):
    kind = "customer"
    model = Customer
