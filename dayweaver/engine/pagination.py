"""Pagination for Day Weaver task lists.

Each list key (pending, done, expired, search) has an independent page
cursor. Page requests are stored unclamped; clamping happens when the page
is resolved against the list's current size, so a stale request (for
example after deleting the only task on the last page) self-corrects on
the next render.
"""

import logging
import math
from typing import Any, Dict, List, Mapping, Optional, Sequence, TypeVar

from dayweaver.models.constants import ITEMS_PER_PAGE, LIST_KEYS, LIST_SEARCH

logger = logging.getLogger(__name__)

T = TypeVar('T')

QUERY_SUFFIX = "Page"


def coerce_page(value: Any) -> int:
    """Convert a raw page request to a page number >= 1.

    Non-numeric, missing or non-positive values become 1.
    """
    if value is None or isinstance(value, bool):
        return 1
    try:
        page = int(value)
    except (TypeError, ValueError):
        return 1
    return page if page >= 1 else 1


def query_param_for(list_key: str) -> str:
    """URL query parameter carrying a list's page (e.g. 'pendingPage')."""
    return f"{list_key}{QUERY_SUFFIX}"


class PaginationController:
    """Per-list page state plus clamping and slicing."""

    def __init__(self, page_size: int = ITEMS_PER_PAGE, pages: Optional[Mapping[str, Any]] = None):
        if page_size < 1:
            raise ValueError(f"page_size must be positive, got {page_size}")
        self.page_size = page_size
        self._pages: Dict[str, Any] = {key: 1 for key in LIST_KEYS}
        self._search_term = ""
        for key, value in (pages or {}).items():
            self.change_page(key, value)

    @classmethod
    def from_query(cls, params: Mapping[str, Any], page_size: int = ITEMS_PER_PAGE) -> "PaginationController":
        """Build page state from URL query parameters like ``pendingPage=2``."""
        pages = {
            key: params[query_param_for(key)]
            for key in LIST_KEYS
            if query_param_for(key) in params
        }
        return cls(page_size=page_size, pages=pages)

    def to_query(self) -> Dict[str, str]:
        """Serialize page state back to URL query parameters."""
        return {query_param_for(key): str(coerce_page(self._pages[key])) for key in LIST_KEYS}

    def current_page(self, list_key: str) -> int:
        """Stored (unclamped) page for a list, coerced to a number."""
        return coerce_page(self._pages.get(list_key))

    def total_pages(self, total_items: int) -> int:
        if total_items <= 0:
            return 0
        return math.ceil(total_items / self.page_size)

    def resolve_page(self, list_key: str, total_items: int, requested_page: Any = None) -> int:
        """Clamp a page request to the list's current range.

        Args:
            list_key: List whose page is being resolved
            total_items: Current size of the list
            requested_page: Page to resolve; defaults to the stored page

        Returns:
            Page number in [1, total_pages], or 1 for an empty list
        """
        if requested_page is None:
            requested_page = self._pages.get(list_key)
        page = coerce_page(requested_page)

        total_pages = self.total_pages(total_items)
        if total_pages == 0:
            page = 1
        elif page > total_pages:
            page = total_pages

        if list_key in self._pages:
            self._pages[list_key] = page
        return page

    def slice(self, items: Sequence[T], page: Any) -> List[T]:
        """Return the page-sized window of items for a page."""
        if not items:
            return []
        start = (coerce_page(page) - 1) * self.page_size
        return list(items[start:start + self.page_size])

    def change_page(self, list_key: str, new_page: Any) -> None:
        """Request a page transition. Clamping is deferred to resolve_page()."""
        if list_key not in self._pages:
            logger.warning(f"Ignoring page change for unknown list key {list_key!r}")
            return
        self._pages[list_key] = new_page

    def sync_search_term(self, search_term: Optional[str]) -> bool:
        """Reset the search page to 1 when the committed term changes.

        Returns:
            True if the term changed and the search page was reset
        """
        search_term = search_term or ""
        if search_term == self._search_term:
            return False
        self._search_term = search_term
        self._pages[LIST_SEARCH] = 1
        return True
