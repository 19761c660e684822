"""Tests for board composition from a single collection snapshot."""

from datetime import datetime

from dayweaver.engine.board import compose_board
from dayweaver.engine.pagination import PaginationController


NOW = datetime(2024, 1, 1, 0, 0)


class TestComposeBoard:
    """Test compose_board() lists, counts and search mode."""

    def test_end_to_end_scenario(self, make_task):
        tasks = [
            make_task(text="A", is_completed=False, deadline="2000-01-01 00:00"),
            make_task(text="B", is_completed=True, deadline="2099-01-01 00:00"),
            make_task(text="C", is_completed=False, deadline="2099-01-01 00:00"),
        ]

        board = compose_board(tasks, NOW, PaginationController())

        assert [t.text for t in board.expired.items] == ["A"]
        assert [t.text for t in board.done.items] == ["B"]
        assert [t.text for t in board.pending.items] == ["C"]
        assert board.counts == {"pending": 1, "done": 1, "expired": 1}
        assert board.search_mode is False
        assert board.search.total_items == 0

    def test_pages_each_list_independently(self, make_task):
        pending = [make_task(text=f"p{i}") for i in range(1, 13)]
        done = [make_task(text=f"d{i}", is_completed=True) for i in range(1, 4)]
        pagination = PaginationController(page_size=5)
        pagination.change_page("pending", 2)
        pagination.change_page("done", 5)

        board = compose_board(pending + done, NOW, pagination)

        assert [t.text for t in board.pending.items] == ["p6", "p7", "p8", "p9", "p10"]
        assert board.pending.page == 2
        assert board.pending.total_pages == 3
        assert board.pending.total_items == 12
        # Out-of-range request clamps to the last page
        assert board.done.page == 1
        assert len(board.done.items) == 3
        assert board.expired.page == 1
        assert board.expired.total_pages == 0

    def test_search_results_use_committed_term(self, make_task):
        tasks = [
            make_task(text="Buy milk"),
            make_task(text="Milk the cow", is_completed=True),
            make_task(text="Write report"),
        ]

        board = compose_board(tasks, NOW, PaginationController(), search_input="milk", search_term="milk")

        assert board.search_mode is True
        assert [t.text for t in board.search.items] == ["Buy milk", "Milk the cow"]
        assert board.counts == {"pending": 1, "done": 1, "expired": 0}

    def test_search_list_empty_until_first_commit(self, make_task):
        """While the first term is still debouncing the results list is empty."""
        tasks = [make_task(text="Buy milk")]

        board = compose_board(
            tasks, NOW, PaginationController(),
            search_input="mil", search_term="", is_debouncing=True,
        )

        assert board.search_mode is True
        assert board.is_debouncing is True
        assert board.search.items == []
        assert board.pending.total_items == 1

    def test_cleared_search_leaves_search_mode(self, make_task):
        board = compose_board([make_task()], NOW, PaginationController(), search_input="", search_term="")
        assert board.search_mode is False
        assert board.search.items == []

    def test_board_does_not_mutate_input(self, make_task):
        tasks = [make_task(text="b"), make_task(text="a")]
        snapshot = list(tasks)
        compose_board(tasks, NOW, PaginationController())
        assert tasks == snapshot
