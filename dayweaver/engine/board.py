"""Board composition for Day Weaver.

Derives every list a view shows (pending, done, expired tabs and the
search results) from a single snapshot of the task collection, so all
lists and counts on one board agree with each other.
"""

from datetime import datetime
from typing import Iterable, List

from dayweaver.models.board import BoardView, PageView
from dayweaver.models.constants import BUCKET_LIST_KEYS, LIST_SEARCH
from dayweaver.models.task import Task
from dayweaver.engine.classifier import classify
from dayweaver.engine.pagination import PaginationController


def build_page_view(list_key: str, items: List[Task], pagination: PaginationController) -> PageView:
    """Resolve the list's page against its size and slice out that page."""
    page = pagination.resolve_page(list_key, len(items))
    return PageView(
        list_key=list_key,
        items=pagination.slice(items, page),
        page=page,
        total_pages=pagination.total_pages(len(items)),
        total_items=len(items),
    )


def compose_board(
    tasks: Iterable[Task],
    now: datetime,
    pagination: PaginationController,
    search_input: str = "",
    search_term: str = "",
    is_debouncing: bool = False,
) -> BoardView:
    """Compose a full board view.

    The search list is empty while a non-empty input is still waiting for
    its first commit; otherwise it holds every task matching the committed
    term. Bucket lists are filtered by the committed term as well.

    Args:
        tasks: Task collection (snapshotted before any derivation)
        now: Reference instant for expiry
        pagination: Page state, updated with the resolved pages
        search_input: Raw search box value
        search_term: Committed search term
        is_debouncing: Whether a commit is pending

    Returns:
        BoardView with one PageView per list
    """
    snapshot = list(tasks)
    classification = classify(snapshot, now, search_term)

    lists = {
        key: build_page_view(key, getattr(classification, key), pagination)
        for key in BUCKET_LIST_KEYS
    }

    search_items: List[Task] = []
    if search_input and search_term:
        search_items = classification.matching
    lists[LIST_SEARCH] = build_page_view(LIST_SEARCH, search_items, pagination)

    return BoardView(
        now=now,
        search_input=search_input,
        search_term=search_term,
        is_debouncing=is_debouncing,
        search_mode=bool(search_input),
        counts=classification.counts(),
        **lists,
    )
