"""Classification, pagination and search engine for Day Weaver."""

from dayweaver.engine.classifier import classify, bucket_for, is_expired, parse_deadline, Classification
from dayweaver.engine.ordering import sort_by_recency, rank_for_suggestion
from dayweaver.engine.pagination import PaginationController
from dayweaver.engine.search import SearchDebouncer
from dayweaver.engine.board import compose_board
from dayweaver.engine.suggestions import build_schedule_request

__all__ = [
    "classify",
    "bucket_for",
    "is_expired",
    "parse_deadline",
    "Classification",
    "sort_by_recency",
    "rank_for_suggestion",
    "PaginationController",
    "SearchDebouncer",
    "compose_board",
    "build_schedule_request",
]
