"""Tests for payload tab navigation."""

from __future__ import annotations

import pytest

from navigation import NavigationController, PayloadTab, parse_tabs


class TestNavigationController:
    """The active tab index wraps in both directions."""

    def test_defaults_to_headers_then_body(self):
        nav = NavigationController()

        assert nav.tabs == (PayloadTab.Headers, PayloadTab.Body)
        assert nav.active() == PayloadTab.Headers

    def test_next_wraps_to_first(self):
        nav = NavigationController()

        assert nav.next() == PayloadTab.Body
        assert nav.next() == PayloadTab.Headers
        assert nav.index == 0

    def test_previous_from_zero_goes_to_last(self):
        nav = NavigationController()

        assert nav.previous() == PayloadTab.Body
        assert nav.index == 1

    @pytest.mark.parametrize("tabs", [
        [PayloadTab.Body],
        [PayloadTab.Headers, PayloadTab.Body],
        [PayloadTab.Body, PayloadTab.Headers],
    ])
    def test_count_nexts_return_to_start(self, tabs):
        nav = NavigationController(tabs)
        start = nav.active()
        for _ in range(len(tabs)):
            nav.next()

        assert nav.active() == start

    def test_single_tab_previous_stays(self):
        nav = NavigationController([PayloadTab.Body])

        assert nav.previous() == PayloadTab.Body
        assert nav.index == 0

    def test_empty_tab_list_rejected(self):
        with pytest.raises(ValueError, match="At least one payload tab"):
            NavigationController([])


class TestParseTabs:
    """Payload tabs can be restricted or reordered from the command line."""

    def test_keeps_given_order(self):
        assert parse_tabs("body, headers") == [PayloadTab.Body, PayloadTab.Headers]

    def test_case_insensitive(self):
        assert parse_tabs("BODY") == [PayloadTab.Body]

    def test_unknown_tab(self):
        with pytest.raises(ValueError, match="Unknown payload tab"):
            parse_tabs("cookies")

    def test_duplicate_tab(self):
        with pytest.raises(ValueError, match="given twice"):
            parse_tabs("body,body")

    def test_empty_list(self):
        with pytest.raises(ValueError):
            parse_tabs(" , ")
