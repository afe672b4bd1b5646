from enum import Enum


class FocusMode(Enum):
    """
    Which field, if any, receives
    character input. Declaration order
    is the cycle order.
    """
    # FocusMode {{{
    UriEditing = "uri"
    Normal = "normal"
    PayloadEditing = "payload"
    # }}}


CYCLE = list(FocusMode)


class FocusController:
    """
    Owns the current FocusMode and moves it
    around the cycle UriEditing -> Normal ->
    PayloadEditing -> UriEditing.
    """
    # FocusController {{{
    def __init__(self, mode: FocusMode = FocusMode.UriEditing) -> None:
        self._index = CYCLE.index(mode)

    def advance(self) -> FocusMode:
        self._index = (self._index + 1) % len(CYCLE)
        return self.current()

    def retreat(self) -> FocusMode:
        self._index = (self._index - 1 + len(CYCLE)) % len(CYCLE)
        return self.current()

    def current(self) -> FocusMode:
        return CYCLE[self._index]
    # }}}
