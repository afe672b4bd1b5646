import os
import sys
import tty
import codecs
import termios
from keys import split_incomplete


READ_SIZE = 1024  # Large enough for a pasted line

# Keeps the partial bytes of a character split between two reads
decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

# Start of an escape sequence still waiting for its final byte
pending = ""


def initialize() -> list:
    """
    Puts the terminal in raw mode so every key
    arrives unbuffered, including escape
    sequences and Alt combinations. Returns the
    original state, applicable to reset.
    """
    # initialize {{{
    fileno = sys.stdin.fileno()
    state = termios.tcgetattr(fileno)
    tty.setraw(fileno)
    return state
    # }}}


def reset(original_state: list) -> None:
    """
    This is required because some terminals on unix-like systems
    will not return, by default, to their original state. This
    function is used to address this.
    """
    # reset {{{
    fileno = sys.stdin.fileno()
    termios.tcsetattr(fileno, termios.TCSADRAIN, original_state)
    # }}}


def read_input() -> str:
    """
    Blocks until input is available and returns
    everything that arrived with it, so escape
    sequences are never split across reads.
    """
    # read_input {{{
    global pending
    fileno = sys.stdin.fileno()
    text = ""
    while text == "":
        data = os.read(fileno, READ_SIZE)
        if data == b"":
            raise EOFError("Terminal input closed")
        text, pending = split_incomplete(pending + decoder.decode(data))
    return text
    # }}}
