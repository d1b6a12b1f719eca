#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Pagination model."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from ballie.utils import to_int


@dataclass
class PaginationInfo:
    current_page: int = 1
    last_page: int = 1
    per_page: int = 20
    total: int = 0
    from_: Optional[int] = None
    to: Optional[int] = None

    @property
    def has_more(self) -> bool:
        return self.current_page < self.last_page

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "PaginationInfo":
        data = data or {}
        return cls(
            current_page=to_int(data.get("current_page"), 1),
            last_page=to_int(data.get("last_page"), 1),
            per_page=to_int(data.get("per_page"), 20),
            total=to_int(data.get("total"), 0),
            from_=data.get("from"),
            to=data.get("to"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "current_page": self.current_page,
            "last_page": self.last_page,
            "per_page": self.per_page,
            "total": self.total,
            "from": self.from_,
            "to": self.to,
        }


@dataclass
class Page:
    """One page of a list endpoint: items, pagination and optional statistics."""

    items: List[Any] = field(default_factory=list)
    pagination: PaginationInfo = field(default_factory=PaginationInfo)
    statistics: Any = None

    def to_dict(self, items_key: str = "items") -> Dict[str, Any]:
        stats = self.statistics
        if stats is not None and not isinstance(stats, dict):
            stats = asdict(stats)
        return {
            items_key: [item.to_dict() if hasattr(item, "to_dict") else asdict(item) for item in self.items],
            "pagination": self.pagination.to_dict(),
            "statistics": stats,
        }
