class TextField:
    """
    Line structured text buffer with a title
    and a cursor. The cursor is a (row, col)
    pair where col may sit one past the last
    character of its line.
    """
    # TextField {{{
    def __init__(self, title: str, text: str = "") -> None:
        self.title = title
        self._lines = text.split("\n")
        self._row = len(self._lines) - 1
        self._col = len(self._lines[self._row])

    @property
    def cursor(self) -> tuple[int, int]:
        return (self._row, self._col)

    def content(self) -> list[str]:
        return list(self._lines)

    def joined_text(self) -> str:
        return "\n".join(self._lines)

    def insert_char(self, char: str) -> None:
        line = self._lines[self._row]
        self._lines[self._row] = line[:self._col] + char + line[self._col:]
        self._col += len(char)

    def insert_line_break(self) -> None:
        line = self._lines[self._row]
        self._lines[self._row] = line[:self._col]
        self._lines.insert(self._row + 1, line[self._col:])
        self._row += 1
        self._col = 0

    def delete_before_cursor(self) -> bool:
        """
        Backspace. At the start of a line the line
        is joined onto the previous one, at the
        start of the buffer nothing happens.
        """
        # delete_before_cursor {{{
        if self._col > 0:
            line = self._lines[self._row]
            self._lines[self._row] = line[:self._col - 1] + line[self._col:]
            self._col -= 1
            return True

        if self._row > 0:
            previous = self._lines[self._row - 1]
            self._lines[self._row - 1] = previous + self._lines[self._row]
            del self._lines[self._row]
            self._row -= 1
            self._col = len(previous)
            return True

        return False
        # }}}

    def delete_at_cursor(self) -> bool:
        # delete_at_cursor {{{
        line = self._lines[self._row]
        if self._col < len(line):
            self._lines[self._row] = line[:self._col] + line[self._col + 1:]
            return True

        if self._row < len(self._lines) - 1:
            self._lines[self._row] = line + self._lines[self._row + 1]
            del self._lines[self._row + 1]
            return True

        return False
        # }}}

    def move_left(self) -> bool:
        # move_left {{{
        if self._col > 0:
            self._col -= 1
        elif self._row > 0:
            self._row -= 1
            self._col = len(self._lines[self._row])
        else:
            return False
        return True
        # }}}

    def move_right(self) -> bool:
        # move_right {{{
        if self._col < len(self._lines[self._row]):
            self._col += 1
        elif self._row < len(self._lines) - 1:
            self._row += 1
            self._col = 0
        else:
            return False
        return True
        # }}}

    def move_up(self) -> bool:
        if self._row == 0:
            return False
        self._row -= 1
        self._col = min(self._col, len(self._lines[self._row]))
        return True

    def move_down(self) -> bool:
        if self._row == len(self._lines) - 1:
            return False
        self._row += 1
        self._col = min(self._col, len(self._lines[self._row]))
        return True

    def move_home(self) -> bool:
        moved = self._col != 0
        self._col = 0
        return moved

    def move_end(self) -> bool:
        end = len(self._lines[self._row])
        moved = self._col != end
        self._col = end
        return moved
    # }}}
