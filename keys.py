from enum import Enum, Flag
from dataclasses import dataclass


ESC = "\x1b"            # Escape
CSI = f"{ESC}["         # Control Sequence Introducer
SS3 = f"{ESC}O"         # Single Shift Three, application cursor keys


class KeyCode(Enum):
    # KeyCode {{{
    Char = "char"
    Enter = "enter"
    Backspace = "backspace"
    Delete = "delete"
    Tab = "tab"
    BackTab = "backtab"
    Escape = "escape"
    Up = "up"
    Down = "down"
    Left = "left"
    Right = "right"
    Home = "home"
    End = "end"
    Unknown = "unknown"
    # }}}


class Modifier(Flag):
    # Modifier {{{
    NONE = 0
    SHIFT = 1
    ALT = 2
    CTRL = 4
    # }}}


class KeyKind(Enum):
    """
    Terminals only ever report presses,
    other input sources may also send
    releases and repeats.
    """
    # KeyKind {{{
    Press = "press"
    Repeat = "repeat"
    Release = "release"
    # }}}


@dataclass(frozen=True)
class KeyEvent:
    # KeyEvent {{{
    code: KeyCode
    char: str = ""
    modifiers: Modifier = Modifier.NONE
    kind: KeyKind = KeyKind.Press
    # }}}


# Final byte of a CSI/SS3 sequence
FINAL_KEYS = {
    "A": KeyCode.Up,
    "B": KeyCode.Down,
    "C": KeyCode.Right,
    "D": KeyCode.Left,
    "H": KeyCode.Home,
    "F": KeyCode.End,
    "Z": KeyCode.BackTab,
}

# Numeric parameter of a CSI ... ~ sequence
TILDE_KEYS = {
    "1": KeyCode.Home,
    "3": KeyCode.Delete,
    "4": KeyCode.End,
    "7": KeyCode.Home,
    "8": KeyCode.End,
}

SINGLE_KEYS = {
    "\r": KeyCode.Enter,
    "\n": KeyCode.Enter,
    "\t": KeyCode.Tab,
    "\x7f": KeyCode.Backspace,
    "\x08": KeyCode.Backspace,
}


def decode(data: str) -> list[KeyEvent]:
    """
    Splits one chunk of raw terminal input into
    key events. A chunk may hold several keys,
    for instance when text is pasted.
    """
    # decode {{{
    events = []
    position = 0

    while position < len(data):
        event, position = _decode_one(data, position)
        events.append(event)

    return events
    # }}}


def _decode_one(data: str, position: int) -> (KeyEvent, int):
    # _decode_one {{{
    char = data[position]

    if char == ESC:
        return _decode_escape(data, position)

    if char in SINGLE_KEYS:
        return (KeyEvent(SINGLE_KEYS[char]), position + 1)

    if ord(char) < 0x20:
        # Ctrl+A is 0x01 through Ctrl+Z at 0x1a
        letter = chr(ord(char) + 0x60)
        return (KeyEvent(KeyCode.Char, letter, Modifier.CTRL), position + 1)

    return (KeyEvent(KeyCode.Char, char), position + 1)
    # }}}


def _decode_escape(data: str, position: int) -> (KeyEvent, int):
    """
    Handles everything starting with ESC: a lone
    escape, Alt+key, and CSI/SS3 sequences with
    an optional xterm modifier parameter.
    """
    # _decode_escape {{{
    rest = data[position + 1:]

    if rest == "" or rest[0] == ESC:
        return (KeyEvent(KeyCode.Escape), position + 1)

    if data.startswith(CSI, position) or data.startswith(SS3, position):
        start = position + 2
        end = start
        # Parameter bytes 0x30-0x3f then a single final byte
        while end < len(data) and "0" <= data[end] <= "?":
            end += 1

        if end >= len(data):
            return (KeyEvent(KeyCode.Unknown), len(data))

        params = data[start:end]
        final = data[end]
        return (_sequence_event(params, final), end + 1)

    event, next_position = _decode_one(data, position + 1)
    event = KeyEvent(event.code, event.char, event.modifiers | Modifier.ALT)
    return (event, next_position)
    # }}}


def _sequence_event(params: str, final: str) -> KeyEvent:
    # _sequence_event {{{
    split = params.split(";") if params != "" else []

    modifiers = Modifier.NONE
    if len(split) > 1 and split[1].isdigit():
        # xterm sends 1 + bitmask of shift(1), alt(2), ctrl(4)
        mask = int(split[1]) - 1
        if mask & 1:
            modifiers |= Modifier.SHIFT
        if mask & 2:
            modifiers |= Modifier.ALT
        if mask & 4:
            modifiers |= Modifier.CTRL

    if final == "~":
        key = split[0] if len(split) > 0 else ""
        return KeyEvent(TILDE_KEYS.get(key, KeyCode.Unknown),
                        modifiers=modifiers)

    if final == "Z":
        return KeyEvent(KeyCode.BackTab, modifiers=Modifier.SHIFT)

    return KeyEvent(FINAL_KEYS.get(final, KeyCode.Unknown),
                    modifiers=modifiers)
    # }}}


def split_incomplete(data: str) -> (str, str):
    """
    Separates a CSI or SS3 sequence cut off at the
    end of a read from the input before it, so the
    caller can wait for the rest. A lone trailing
    ESC is complete, it is the Escape key.
    """
    # split_incomplete {{{
    start = data.rfind(ESC)
    if start == -1:
        return (data, "")

    tail = data[start:]
    if not (tail.startswith(CSI) or tail.startswith(SS3)):
        return (data, "")

    if all("0" <= char <= "?" for char in tail[2:]):
        return (data[:start], tail)
    return (data, "")
    # }}}
