from enum import Enum
from focus import FocusMode
from state import ComposerState
from text_field import TextField
from keys import KeyEvent, KeyCode, KeyKind, Modifier


class Message(Enum):
    """
    Outcome of routing a single key event,
    used by the main loop to decide whether
    to redraw, submit or leave.
    """
    # Message {{{
    Ignored = 0
    Edited = 1
    TabChanged = 2
    ModeChanged = 3
    Submit = 4
    Quit = 5
    # }}}


# Keys moving the cursor inside whichever field is addressed
URI_CURSOR_KEYS = {
    KeyCode.Left: TextField.move_left,
    KeyCode.Right: TextField.move_right,
    KeyCode.Home: TextField.move_home,
    KeyCode.End: TextField.move_end,
    KeyCode.Delete: TextField.delete_at_cursor,
}

PAYLOAD_CURSOR_KEYS = {
    **URI_CURSOR_KEYS,
    KeyCode.Up: TextField.move_up,
    KeyCode.Down: TextField.move_down,
}


class InputRouter:
    """
    Dispatches key events to the focus and
    navigation controllers or to the field
    addressed by the current focus mode.
    """
    # InputRouter {{{
    def __init__(self, state: ComposerState) -> None:
        self.state = state

    def route(self, event: KeyEvent) -> Message:
        # route {{{
        if event.kind != KeyKind.Press:
            return Message.Ignored

        match event.modifiers:
            case Modifier.SHIFT:
                return self._route_shift(event)
            case Modifier.ALT:
                return self._route_alt(event)
            case Modifier.NONE:
                pass
            case _:
                return Message.Ignored

        match self.state.focus.current():
            case FocusMode.Normal:
                return self._route_normal(event)
            case FocusMode.UriEditing:
                return self._route_uri(event)
            case FocusMode.PayloadEditing:
                return self._route_payload(event)
        # }}}

    def _route_shift(self, event: KeyEvent) -> Message:
        # Shift only cycles modes, shifted characters are not inserted
        match event.code:
            case KeyCode.Down:
                self.state.focus.advance()
                return Message.ModeChanged
            case KeyCode.Up:
                self.state.focus.retreat()
                return Message.ModeChanged
        return Message.Ignored

    def _route_alt(self, event: KeyEvent) -> Message:
        if event.code != KeyCode.Char:
            return Message.Ignored

        match event.char:
            case "q":
                return Message.Quit
            case "s":
                return Message.Submit
        return Message.Ignored

    def _route_normal(self, event: KeyEvent) -> Message:
        match event.code:
            case KeyCode.Right:
                self.state.navigation.next()
                return Message.TabChanged
            case KeyCode.Left:
                self.state.navigation.previous()
                return Message.TabChanged
        return Message.Ignored

    def _route_uri(self, event: KeyEvent) -> Message:
        """
        The URI is a single line, Enter is
        not routed into it.
        """
        # _route_uri {{{
        field = self.state.uri_field

        match event.code:
            case KeyCode.Char:
                field.insert_char(event.char)
                return Message.Edited
            case KeyCode.Backspace:
                field.delete_before_cursor()
                return Message.Edited

        return _move_cursor(field, event, URI_CURSOR_KEYS)
        # }}}

    def _route_payload(self, event: KeyEvent) -> Message:
        # _route_payload {{{
        field = self.state.active_payload_field()

        match event.code:
            case KeyCode.Char:
                field.insert_char(event.char)
                return Message.Edited
            case KeyCode.Backspace:
                field.delete_before_cursor()
                return Message.Edited
            case KeyCode.Enter:
                field.insert_line_break()
                return Message.Edited

        return _move_cursor(field, event, PAYLOAD_CURSOR_KEYS)
        # }}}
    # }}}


def _move_cursor(field: TextField, event: KeyEvent, keys: dict) -> Message:
    action = keys.get(event.code)
    if action is None:
        return Message.Ignored

    action(field)
    return Message.Edited
