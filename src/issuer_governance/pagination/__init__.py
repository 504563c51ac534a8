"""Bidirectional navigation over forward-only, cursor-paginated list queries."""

from issuer_governance.pagination.engine import (
    CursorPaginator,
    Direction,
    NavigationState,
    PageRequest,
    PageStatus,
    PageView,
)

__all__ = [
    "CursorPaginator",
    "Direction",
    "NavigationState",
    "PageRequest",
    "PageStatus",
    "PageView",
]
