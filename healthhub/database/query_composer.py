"""
Composes parameter-bound metric selections.

The composer only ever appends static clause fragments to a base query;
user id and time bounds travel as typed bind parameters. Base fragments must
be authored internally: WHERE / ORDER BY detection is a plain
case-insensitive word match on the fragment text.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import DateTime, Text, bindparam, column, text
from sqlalchemy.sql.elements import TextClause
from sqlalchemy.sql.selectable import TextualSelect
from sqlalchemy.types import TypeEngine

_WHERE_RE = re.compile(r"\bwhere\b", re.IGNORECASE)
_ORDER_BY_RE = re.compile(r"\border\s+by\b", re.IGNORECASE)

_BIND_TYPES = {
    "user_id": Text(),
    "from_ts": DateTime(timezone=True),
    "to_ts": DateTime(timezone=True),
}


@dataclass(frozen=True)
class ComposedQuery:
    sql: str
    params: Dict[str, Any] = field(default_factory=dict)

    def statement(self, value_type: TypeEngine) -> TextualSelect:
        """Typed executable statement returning ``value`` and ``timestamp``."""
        clause: TextClause = text(self.sql).bindparams(
            *(bindparam(name, value=value, type_=_BIND_TYPES[name]) for name, value in self.params.items())
        )
        return clause.columns(
            column("value", value_type),
            column("timestamp", DateTime(timezone=True)),
        )


class QueryComposer:
    """Appends user, time-range and ordering clauses to a static base selection."""

    def __init__(self, base_query: str):
        self.base_query = base_query.strip()

    def compose(
        self,
        user_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> ComposedQuery:
        order_by = _ORDER_BY_RE.search(self.base_query)
        if order_by:
            head = self.base_query[:order_by.start()].rstrip()
            ordering = self.base_query[order_by.start():]
        else:
            head = self.base_query
            ordering = "ORDER BY timestamp"

        parts = [head]
        params: Dict[str, Any] = {"user_id": user_id}

        parts.append("AND" if _WHERE_RE.search(head) else "WHERE")
        parts.append("user_id = :user_id")

        if start is not None:
            parts.append("AND timestamp >= :from_ts")
            params["from_ts"] = start

        if end is not None:
            parts.append("AND timestamp <= :to_ts")
            params["to_ts"] = end

        parts.append(ordering)

        return ComposedQuery(sql=" ".join(parts), params=params)
