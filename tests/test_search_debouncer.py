"""Tests for debounced search term commits."""

import asyncio

from dayweaver.engine.search import SearchDebouncer


def _debouncer(scheduler, commits):
    def on_commit(term):
        commits.append((round(scheduler.now * 1000), term))
    return SearchDebouncer(on_commit=on_commit, delay=0.3, call_later=scheduler.call_later)


class TestSearchDebouncer:
    """Test SearchDebouncer timing with a manual clock."""

    def test_commits_once_after_last_keystroke(self, scheduler):
        """Keystrokes at 0, 50, 100, 350 ms commit once at 650 ms."""
        commits = []
        debouncer = _debouncer(scheduler, commits)

        for at_ms, value in [(0, "m"), (50, "mi"), (100, "mil"), (350, "milk")]:
            scheduler.advance_to(at_ms / 1000)
            debouncer.set_input(value)

        scheduler.advance_to(0.649)
        assert commits == []
        assert debouncer.is_debouncing is True

        scheduler.advance_to(2.0)
        assert commits == [(650, "milk")]
        assert debouncer.committed_term == "milk"
        assert debouncer.is_debouncing is False

    def test_clearing_input_commits_immediately(self, scheduler):
        commits = []
        debouncer = _debouncer(scheduler, commits)

        debouncer.set_input("milk")
        scheduler.advance(0.1)
        debouncer.set_input("")

        assert commits == [(100, "")]
        assert debouncer.committed_term == ""
        assert debouncer.is_debouncing is False

        # The pending "milk" timer never fires
        scheduler.advance(1.0)
        assert commits == [(100, "")]

    def test_none_is_treated_as_empty(self, scheduler):
        commits = []
        debouncer = _debouncer(scheduler, commits)
        debouncer.set_input(None)
        assert commits == [(0, "")]

    def test_raw_value_updates_immediately(self, scheduler):
        debouncer = _debouncer(scheduler, [])
        debouncer.set_input("br")
        assert debouncer.raw_value == "br"
        assert debouncer.committed_term == ""

    def test_cancel_drops_pending_commit(self, scheduler):
        commits = []
        debouncer = _debouncer(scheduler, commits)
        debouncer.set_input("milk")
        debouncer.cancel()
        scheduler.advance(1.0)
        assert commits == []
        assert debouncer.is_debouncing is False

    def test_same_value_recommits_after_delay(self, scheduler):
        commits = []
        debouncer = _debouncer(scheduler, commits)
        debouncer.set_input("milk")
        scheduler.advance(0.3)
        debouncer.set_input("milk")
        scheduler.advance(0.3)
        assert [term for _, term in commits] == ["milk", "milk"]

    def test_default_scheduler_uses_running_loop(self):
        """Without an explicit scheduler the asyncio loop drives the timer."""
        commits = []

        async def scenario():
            debouncer = SearchDebouncer(on_commit=commits.append, delay=0.01)
            debouncer.set_input("a")
            debouncer.set_input("ab")
            await asyncio.sleep(0.05)

        asyncio.run(scenario())
        assert commits == ["ab"]
