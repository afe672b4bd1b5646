import re
import math
from enum import Enum
from dataclasses import dataclass, field
from focus import FocusMode
from text_field import TextField
from req_struct import Response
from state import ComposerState, FieldSlot, TAB_SLOTS
from validator import validate_uri, validate_json, validate_headers


TITLE = "HTTP/COMPOSE"  # For main application

ESC = "\x1b"            # Escape
CSI = f"{ESC}["         # Control Sequence Introducer

EN_ALT_BUF = "?1049h"   # Enable Alternate Buffer
DIS_ALT_BUF = "?1049l"  # Disable Alternate Buffer

FIELD_HEIGHT = 3        # Border, one line of text, border
HELP = "Shift+Up/Down mode | Left/Right tab | Alt+S send | Alt+Q quit"

# C0 controls except newline, DEL and C1 controls
CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b-\x1f\x7f-\x9f]")


class ColorMode(Enum):
    """
    Indicates the structure of the escape equence
    """
    # ColorMode {{{
    Bit4 = "4bit"       # Color immediately after CSI
    Bit8 = "8bit"       # Sequence is as follows: 38:5:{color}
    Bit24 = "24bit"     # RGB color sequence
    # }}}


@dataclass
class Theme:
    # Theme {{{
    text_color:    str
    title_color:   str
    border_color:  str
    active_color:  str
    invalid_color: str
    selected_color: str
    # }}}


@dataclass
class Border:
    # Border {{{
    h_single = "─"
    h_double = "═"
    v_single = "│"
    v_double = "║"
    ltc_single = "┌"
    ltc_double = "╔"
    ltc_rounded = "╭"
    lbc_single = "└"
    lbc_double = "╚"
    lbc_rounded = "╰"
    rtc_single = "┐"
    rtc_double = "╗"
    rtc_rounded = "╮"
    rbc_single = "┘"
    rbc_double = "╝"
    rbc_rounded = "╯"
    # }}}


class BorderStyle(Enum):
    # BorderStyle {{{
    Single = "single"
    Double = "double"
    Rounded = "rounded"
    # }}}


@dataclass
class RenderState:
    """
    Everything the screen needs besides the
    composer itself. The response lines are
    filled in by the main loop after a submit.
    """
    # RenderState {{{
    borders:    dict
    theme:      Theme
    color_mode: ColorMode
    size:       tuple[int, int]

    debug:    bool = False
    response: list[str] = field(default_factory=list)
    # }}}


def break_line_width(max_w: int, line: str) -> list[str]:
    """
    This breaks a line into a list of strings based on
    a provided width, indenting the broken peices.
    """
    # break_line_width {{{
    line = str(line)
    if len(line) <= max_w:
        return [line]

    indent = "  "
    step = max(max_w - len(indent), 1)
    result = [line[:max_w]]

    sample = line[max_w:]
    for offset in range(0, len(sample), step):
        result.append(f"{indent}{sample[offset:offset + step]}")

    return result
    # }}}


def cap_line_width(max_w: int, line: str) -> str:
    """
    Cuts a line short, appending with ..
    to indicate this
    """
    # cap_line_width {{{
    if len(str(line)) > max_w:
        capped = str(line)[:max_w - 2]  # Length of ..
        capped = capped + ".."

        line = capped
    return line
    # }}}


def clear_screen() -> None:
    # clear_screen {{{
    print(f"{CSI}2J", end="")
    # }}}


def disable_buffer() -> None:
    """
    Reverts screen back to
    previous state before script
    """
    # disable_buffer {{{
    print(f"{CSI}{DIS_ALT_BUF}", end="", flush=True)
    # }}}


def enable_buffer() -> None:
    """
    Creates a new screen buffer
    """
    # enable_buffer {{{
    print(f"{CSI}{EN_ALT_BUF}", end="", flush=True)
    # }}}


def get_foreground(color: str, mode: ColorMode) -> str:
    # get_foreground {{{
    match mode:
        case ColorMode.Bit4:
            prefix = f"{CSI}"
            return f"{prefix}{color}m"
        case ColorMode.Bit8:
            prefix = f"{CSI}38;5;"
            return f"{prefix}{color}m"
        case ColorMode.Bit24:
            r, g, b = color.split(",")
            prefix = f"{CSI}38;2;"
            return f"{prefix}{r};{g};{b}m"
    # }}}


def get_top_bottom_borders(state: RenderState, width: int) -> (str, str):
    # get_top_bottom_borders {{{
    top = f"{state.borders['lt_corner']}" +        \
          f"{state.borders['h_border'] * width}" + \
          f"{state.borders['rt_corner']}"

    bottom = f"{state.borders['lb_corner']}" +        \
             f"{state.borders['h_border'] * width}" + \
             f"{state.borders['rb_corner']}"

    return (top, bottom)
    # }}}


def hide_cursor() -> None:
    # hide_cursor {{{
    print(f"{CSI}?25l", end="")
    # }}}


def printable(line: str) -> str:
    """
    Replaces control characters in text that came
    from elsewhere, so it can not move the cursor
    or change the terminal state when printed.
    """
    # printable {{{
    line = line.replace("\t", "    ")
    return CONTROL_CHARS.sub("\ufffd", line)
    # }}}


def populate_borders(style: BorderStyle) -> dict:
    # populate_borders {{{
    borders = {}
    if style == BorderStyle.Single:
        borders["h_border"] = Border.h_single
        borders["v_border"] = Border.v_single
        borders["lt_corner"] = Border.ltc_single
        borders["lb_corner"] = Border.lbc_single
        borders["rt_corner"] = Border.rtc_single
        borders["rb_corner"] = Border.rbc_single
    elif style == BorderStyle.Rounded:
        borders["h_border"] = Border.h_single
        borders["v_border"] = Border.v_single
        borders["lt_corner"] = Border.ltc_rounded
        borders["lb_corner"] = Border.lbc_rounded
        borders["rt_corner"] = Border.rtc_rounded
        borders["rb_corner"] = Border.rbc_rounded
    else:
        borders["h_border"] = Border.h_double
        borders["v_border"] = Border.v_double
        borders["lt_corner"] = Border.ltc_double
        borders["lb_corner"] = Border.lbc_double
        borders["rt_corner"] = Border.rtc_double
        borders["rb_corner"] = Border.rbc_double
    return borders
    # }}}


def populate_response(response: Response, width: int) -> list[str]:
    """
    Given a response object, this parses the content
    and creates an array of that content for the
    application to use for rendering.
    """
    # populate_response {{{
    content = []
    status = f"Status code -> {response.status} {response.reason}"
    content.append(printable(status))
    content += break_line_width(width, printable(f"URL -> {response.url}"))
    content.append("")
    content.append("Headers:")
    for key, value in response.headers.items():
        content += break_line_width(width, printable(f"{key}: {value}"))

    if response.body != "":
        content.append("")  # Additional separation after headers
        content.append("Body:")
        for line in response.body.splitlines():
            content += break_line_width(width, printable(line))

    return content
    # }}}


def populate_response_error(error: str, width: int) -> list[str]:
    # populate_response_error {{{
    content = []
    for line in error.splitlines():
        content += break_line_width(width, printable(line))

    return content
    # }}}


def render(state: RenderState, composer: ComposerState,
           resize: bool) -> None:
    """
    Main render function
    """
    # render {{{
    if resize:
        clear_screen()

    hide_cursor()
    left, right = split_columns(state)
    mode = composer.focus.current()
    uri = composer.uri_field
    payload = composer.active_payload_field()

    uri_color = _field_color(state, mode == FocusMode.UriEditing,
                             uri.joined_text() == "" or
                             validate_uri(uri.joined_text()))
    render_field(state, uri, 1, 1, left, FIELD_HEIGHT, uri_color)

    render_tabs(state, composer, 1, 1 + FIELD_HEIGHT, left)

    payload_y = 1 + FIELD_HEIGHT * 2
    payload_color = _field_color(state, mode == FocusMode.PayloadEditing,
                                 payload_valid(composer))
    render_field(state, payload, 1, payload_y, left,
                 state.size.lines - payload_y, payload_color)

    render_response(state, left + 1, 1, right, state.size.lines - 1)
    render_help(state)

    if state.debug:
        _render_debug(state, composer)

    reset_style()
    place_cursor(state, composer)
    print("", end="", flush=True)
    # }}}


def render_box(state: RenderState, title: str, x: int, y: int,
               width: int, height: int, color: str,
               rows: list[str]) -> None:
    """
    Draws a bordered box with its title set into
    the top border, the rows are capped to the
    inner width and padded with blanks.
    ╭─ Title ────────────╮
    │ row                │
    ╰────────────────────╯
    """
    # render_box {{{
    inner_w = max(width - 2, 0)
    top, bottom = get_top_bottom_borders(state, inner_w)

    set_foreground(color, state.color_mode)
    set_cursor(x, y)
    print(top, end="")

    # Magic 2 represents offset for section title
    set_cursor(x + 2, y)
    set_foreground(state.theme.title_color, state.color_mode)
    print(cap_line_width(max(inner_w - 2, 0), f" {title} "), end="")

    for index in range(height - 2):
        line = get_foreground(color, state.color_mode)
        line += state.borders["v_border"]
        row = rows[index] if index < len(rows) else ""
        row = cap_line_width(inner_w, row)
        line += get_foreground(state.theme.text_color, state.color_mode)
        line += f"{row}{' ' * (inner_w - len(row))}"
        line += get_foreground(color, state.color_mode)
        line += state.borders["v_border"]

        set_cursor(x, y + index + 1)
        print(line, end="")

    set_foreground(color, state.color_mode)
    set_cursor(x, y + height - 1)
    print(bottom, end="")
    # }}}


def render_field(state: RenderState, text_field: TextField, x: int, y: int,
                 width: int, height: int, color: str) -> None:
    # render_field {{{
    row_offset, col_offset = field_offsets(text_field, width, height)
    rows = [line[col_offset:]
            for line in text_field.content()[row_offset:]]
    render_box(state, text_field.title, x, y, width, height, color, rows)
    # }}}


def render_help(state: RenderState) -> None:
    # render_help {{{
    set_cursor(1, state.size.lines)
    set_foreground(state.theme.text_color, state.color_mode)
    help_line = cap_line_width(state.size.columns - 1, f" {TITLE} | {HELP}")
    print(f"{help_line}{' ' * (state.size.columns - 1 - len(help_line))}",
          end="")
    # }}}


def render_response(state: RenderState, x: int, y: int,
                    width: int, height: int) -> None:
    # render_response {{{
    render_box(state, "Response", x, y, width, height,
               state.theme.border_color, state.response)
    # }}}


def render_tabs(state: RenderState, composer: ComposerState,
                x: int, y: int, width: int) -> None:
    """
    Renders the payload tab bar, marking
    the active tab in the selected color.
    ╭─ Payload ──────────╮
    │ [Headers]  Body    │
    ╰────────────────────╯
    """
    # render_tabs {{{
    active = composer.navigation.active()
    color = state.theme.active_color                    \
        if composer.focus.current() == FocusMode.Normal \
        else state.theme.border_color

    render_box(state, "Payload", x, y, width, FIELD_HEIGHT, color, [])

    set_cursor(x + 1, y + 1)
    for tab in composer.navigation.tabs:
        if tab == active:
            set_foreground(state.theme.selected_color, state.color_mode)
            print(f"[{tab.value}]", end="")
        else:
            set_foreground(state.theme.text_color, state.color_mode)
            print(f" {tab.value} ", end="")
        print(" ", end="")
    # }}}


def reset_style() -> None:
    # reset_style {{{
    print(f"{CSI}0m", end="")
    # }}}


def field_offsets(text_field: TextField, width: int,
                  height: int) -> (int, int):
    """
    Returns the first visible row and column of
    a field so that its cursor stays inside the
    box when the text outgrows it.
    """
    # field_offsets {{{
    row, col = text_field.cursor
    inner_w = max(width - 2, 1)
    inner_h = max(height - 2, 1)
    row_offset = max(0, row - inner_h + 1)
    col_offset = max(0, col - inner_w + 1)
    return (row_offset, col_offset)
    # }}}


def payload_valid(composer: ComposerState) -> bool:
    """
    Empty payloads count as valid, they
    are simply left out of the request.
    """
    # payload_valid {{{
    slot = TAB_SLOTS[composer.navigation.active()]
    text = composer.fields[slot].joined_text()

    if text.strip() == "":
        return True
    if slot == FieldSlot.Headers:
        return validate_headers(text)
    return validate_json(text)
    # }}}


def place_cursor(state: RenderState, composer: ComposerState) -> None:
    """
    Shows the terminal cursor at the addressed
    field's cursor, hidden in Normal mode.
    """
    # place_cursor {{{
    text_field = composer.addressed_field()
    if text_field is None:
        hide_cursor()
        return

    left, _ = split_columns(state)
    if composer.addressed_slot() == FieldSlot.Uri:
        y, height = 1, FIELD_HEIGHT
    else:
        y = 1 + FIELD_HEIGHT * 2
        height = state.size.lines - y

    row_offset, col_offset = field_offsets(text_field, left, height)
    row, col = text_field.cursor
    set_cursor(1 + 1 + col - col_offset, y + 1 + row - row_offset)
    show_cursor()
    # }}}


def set_cursor(x: int, y: int) -> None:
    """
    Escape sequence to move the
    cursor with the assumption that
    location (1,1) is at the top
    left of the screen.

    It also assumes that {x} and {y}
    are based on character size.
    """
    # set_cursor {{{
    print(f'{CSI}{y};{x}H', end="")
    # }}}


def set_foreground(color: str, mode: ColorMode) -> None:
    # set_foreground {{{
    print(get_foreground(color, mode), end="")
    # }}}


def show_cursor() -> None:
    # show_cursor {{{
    print(f"{CSI}?25h", end="")
    # }}}


def split_columns(state: RenderState) -> (int, int):
    """
    Returns the outer widths of the left (request)
    and right (response) halves of the screen.
    """
    # split_columns {{{
    left = math.floor(state.size.columns / 2)
    right = state.size.columns - left
    return (left, right)
    # }}}


def _field_color(state: RenderState, focused: bool, valid: bool) -> str:
    # _field_color {{{
    if not valid:
        return state.theme.invalid_color
    if focused:
        return state.theme.active_color
    return state.theme.border_color
    # }}}


def _render_debug(state: RenderState, composer: ComposerState) -> None:
    # _render_debug {{{
    slot = composer.addressed_slot()
    row, col = composer.addressed_field().cursor \
        if slot is not None else (0, 0)

    debug = \
        f"wid {state.size.columns} hgt {state.size.lines} | " +      \
        f"mode {composer.focus.current().value} | " +                \
        f"tab {composer.navigation.active().value} | " +             \
        f"slot {slot.value if slot is not None else '-'} | " +       \
        f"cur {row} {col} | " +                                      \
        f"uri {validate_uri(composer.uri_field.joined_text())} | " + \
        f"reslen {len(state.response)}"

    debug = cap_line_width(state.size.columns - 2, debug)
    set_cursor(state.size.columns - len(debug), state.size.lines)
    set_foreground(state.theme.title_color, state.color_mode)
    print(debug, end="")
    # }}}
