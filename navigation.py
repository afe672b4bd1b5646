from enum import Enum


class PayloadTab(Enum):
    # PayloadTab {{{
    Headers = "Headers"
    Body = "Body"
    # }}}


def parse_tabs(names: str) -> list[PayloadTab]:
    """
    Turns a comma separated list such as
    'body,headers' into payload tabs,
    keeping the given order.
    """
    # parse_tabs {{{
    tabs = []
    for name in names.split(","):
        name = name.strip()
        if name == "":
            continue

        matched = [tab for tab in PayloadTab
                   if tab.value.lower() == name.lower()]
        if len(matched) == 0:
            raise ValueError(f"Unknown payload tab [{name}]")
        if matched[0] in tabs:
            raise ValueError(f"Payload tab [{name}] given twice")
        tabs.append(matched[0])

    if len(tabs) == 0:
        raise ValueError("At least one payload tab is required")

    return tabs
    # }}}


class NavigationController:
    """
    Tracks the active payload tab. The tab
    list is fixed once constructed and the
    index only ever moves by wrapping, so it
    can not leave the range of the list.
    """
    # NavigationController {{{
    def __init__(self, tabs: list[PayloadTab] | None = None) -> None:
        if tabs is None:
            tabs = list(PayloadTab)
        if len(tabs) == 0:
            raise ValueError("At least one payload tab is required")

        self._tabs = tuple(tabs)
        self._index = 0

    @property
    def index(self) -> int:
        return self._index

    @property
    def tabs(self) -> tuple[PayloadTab, ...]:
        return self._tabs

    def next(self) -> PayloadTab:
        self._index = (self._index + 1) % len(self._tabs)
        return self.active()

    def previous(self) -> PayloadTab:
        self._index = (self._index - 1 + len(self._tabs)) % len(self._tabs)
        return self.active()

    def active(self) -> PayloadTab:
        return self._tabs[self._index]
    # }}}
