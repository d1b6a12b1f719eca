#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Vendor service."""

from __future__ import annotations

from ballie.models import Vendor
from ballie.services.parties import PartyService


class VendorService(PartyService):
    kind = "vendor"
    model = Vendor
