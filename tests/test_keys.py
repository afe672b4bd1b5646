"""Tests for decoding raw terminal input into key events."""

from __future__ import annotations

import pytest

from keys import KeyCode, KeyEvent, Modifier, decode, split_incomplete


class TestPlainKeys:

    def test_printable_characters(self):
        assert decode("aZ{") == [
            KeyEvent(KeyCode.Char, "a"),
            KeyEvent(KeyCode.Char, "Z"),
            KeyEvent(KeyCode.Char, "{"),
        ]

    def test_unicode_character(self):
        assert decode("é") == [KeyEvent(KeyCode.Char, "é")]

    @pytest.mark.parametrize("raw,code", [
        ("\r", KeyCode.Enter),
        ("\n", KeyCode.Enter),
        ("\x7f", KeyCode.Backspace),
        ("\x08", KeyCode.Backspace),
        ("\t", KeyCode.Tab),
        ("\x1b", KeyCode.Escape),
    ])
    def test_control_keys(self, raw, code):
        assert decode(raw) == [KeyEvent(code)]

    def test_ctrl_letter(self):
        assert decode("\x11") == [KeyEvent(KeyCode.Char, "q", Modifier.CTRL)]

    def test_pasted_text_splits_into_events(self):
        events = decode("ab\rc")

        assert [event.code for event in events] == [
            KeyCode.Char, KeyCode.Char, KeyCode.Enter, KeyCode.Char
        ]


class TestEscapeSequences:

    @pytest.mark.parametrize("raw,code", [
        ("\x1b[A", KeyCode.Up),
        ("\x1b[B", KeyCode.Down),
        ("\x1b[C", KeyCode.Right),
        ("\x1b[D", KeyCode.Left),
        ("\x1bOA", KeyCode.Up),
        ("\x1b[H", KeyCode.Home),
        ("\x1b[F", KeyCode.End),
        ("\x1b[1~", KeyCode.Home),
        ("\x1b[4~", KeyCode.End),
        ("\x1b[3~", KeyCode.Delete),
    ])
    def test_unmodified_keys(self, raw, code):
        assert decode(raw) == [KeyEvent(code)]

    def test_shift_arrows(self):
        assert decode("\x1b[1;2B") == [KeyEvent(KeyCode.Down, modifiers=Modifier.SHIFT)]
        assert decode("\x1b[1;2A") == [KeyEvent(KeyCode.Up, modifiers=Modifier.SHIFT)]

    def test_combined_modifiers(self):
        (event,) = decode("\x1b[1;6C")

        assert event.code == KeyCode.Right
        assert event.modifiers == Modifier.SHIFT | Modifier.CTRL

    def test_alt_character(self):
        assert decode("\x1bq") == [KeyEvent(KeyCode.Char, "q", Modifier.ALT)]

    def test_backtab(self):
        assert decode("\x1b[Z") == [KeyEvent(KeyCode.BackTab, modifiers=Modifier.SHIFT)]

    def test_unknown_sequence(self):
        assert decode("\x1b[99~") == [KeyEvent(KeyCode.Unknown)]

    def test_truncated_sequence(self):
        assert decode("\x1b[1;") == [KeyEvent(KeyCode.Unknown)]

    def test_sequence_followed_by_text(self):
        assert decode("\x1b[Dx") == [
            KeyEvent(KeyCode.Left),
            KeyEvent(KeyCode.Char, "x"),
        ]

    def test_double_escape(self):
        assert decode("\x1b\x1b[A") == [
            KeyEvent(KeyCode.Escape),
            KeyEvent(KeyCode.Up),
        ]


class TestSplitIncomplete:
    """A sequence cut off by the end of a read is held back."""

    def test_plain_text_is_complete(self):
        assert split_incomplete("abc") == ("abc", "")

    def test_finished_sequence_is_complete(self):
        assert split_incomplete("a\x1b[1;2B") == ("a\x1b[1;2B", "")

    def test_cut_sequence_is_held_back(self):
        assert split_incomplete("ab\x1b[1;") == ("ab", "\x1b[1;")
        assert split_incomplete("\x1bO") == ("", "\x1bO")

    def test_lone_escape_is_complete(self):
        assert split_incomplete("a\x1b") == ("a\x1b", "")

    def test_alt_key_is_complete(self):
        assert split_incomplete("\x1bq") == ("\x1bq", "")
