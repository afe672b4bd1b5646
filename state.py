from enum import Enum
from text_field import TextField
from focus import FocusMode, FocusController
from navigation import PayloadTab, NavigationController


class FieldSlot(Enum):
    # FieldSlot {{{
    Uri = "uri"
    Headers = "headers"
    Body = "body"
    # }}}


TAB_SLOTS = {
    PayloadTab.Headers: FieldSlot.Headers,
    PayloadTab.Body: FieldSlot.Body,
}


def resolve_field(mode: FocusMode, tab: PayloadTab) -> FieldSlot | None:
    """
    The single place deciding which field receives
    character input. Returns None in Normal mode.
    """
    # resolve_field {{{
    match mode:
        case FocusMode.UriEditing:
            return FieldSlot.Uri
        case FocusMode.PayloadEditing:
            return TAB_SLOTS[tab]
        case FocusMode.Normal:
            return None
    # }}}


class ComposerState:
    """
    Everything the input side mutates: focus,
    the active tab and one TextField per slot.
    Renderers only read from it.
    """
    # ComposerState {{{
    def __init__(self, tabs: list[PayloadTab] | None = None) -> None:
        self.focus = FocusController()
        self.navigation = NavigationController(tabs)
        self.fields = {
            FieldSlot.Uri: TextField("URI"),
            FieldSlot.Headers: TextField("Headers"),
            FieldSlot.Body: TextField("Body"),
        }

    @property
    def uri_field(self) -> TextField:
        return self.fields[FieldSlot.Uri]

    def payload_fields(self) -> dict[PayloadTab, TextField]:
        return {tab: self.fields[TAB_SLOTS[tab]]
                for tab in self.navigation.tabs}

    def active_payload_field(self) -> TextField:
        return self.fields[TAB_SLOTS[self.navigation.active()]]

    def addressed_slot(self) -> FieldSlot | None:
        return resolve_field(self.focus.current(), self.navigation.active())

    def addressed_field(self) -> TextField | None:
        slot = self.addressed_slot()
        if slot is None:
            return None
        return self.fields[slot]
    # }}}
