import os
import sys
from enum import Enum, auto

from oscsh.config import (
    BACKSPACE_KEYS,
    CLEAR_LINE,
    ENTER_KEYS,
    ERASE_CHAR,
    ESC,
    MAX_LENGTH,
)

HISTORY_PREVIOUS = b"[A"
HISTORY_NEXT = b"[B"


class EditorState(Enum):
    READING = auto()
    ESCAPE_SEQ1 = auto()
    ESCAPE_SEQ2 = auto()
    DONE = auto()


class LineBuffer:
    """Bytes of the line being edited, capped at ``limit`` bytes."""

    def __init__(self, limit=MAX_LENGTH - 1):
        self._data = bytearray()
        self._limit = limit

    def __len__(self):
        return len(self._data)

    @property
    def data(self) -> bytes:
        return bytes(self._data)

    @property
    def text(self) -> str:
        return self._data.decode("utf-8", errors="replace")

    def append(self, byte: int) -> bool:
        """Append one byte. Returns False when the buffer is full."""
        if len(self._data) >= self._limit:
            return False
        self._data.append(byte)
        return True

    def backspace(self) -> bool:
        """Drop the last character. Returns False when there was nothing to drop."""
        if not self._data:
            return False
        end = len(self._data) - 1
        # UTF-8 continuation bytes go together with their lead byte
        while end > 0 and self._data[end] & 0xC0 == 0x80:
            end -= 1
        del self._data[end:]
        return True

    def set_text(self, text: str):
        """Replace the whole buffer, truncated to the limit."""
        self._data = bytearray(text.encode("utf-8")[: self._limit])


def _stdin_read(n):
    return os.read(sys.stdin.fileno(), n)


def _stdout_write(data):
    sys.stdout.flush()
    os.write(sys.stdout.fileno(), data)


class LineEditor:
    """Byte-at-a-time line editor for a terminal in non-canonical mode.

    Handles Enter, Backspace/Delete and the ``ESC [ A`` / ``ESC [ B`` arrow
    sequences, which recall entries from a HistoryStore. Everything else is
    taken as literal input and echoed.
    """

    def __init__(self, history, prompt=None, read=None, write=None, max_length=MAX_LENGTH):
        self.history = history
        self._prompt = prompt or (lambda: "")
        self._read = read or _stdin_read
        self._write = write or _stdout_write
        self.max_length = max_length
        self.buffer = LineBuffer(max_length - 1)
        self.state = EditorState.DONE
        self._seq = bytearray()

    def start(self):
        """Begin a new editing session with an empty line."""
        self.history.reset_browse_cursor()
        self.buffer = LineBuffer(self.max_length - 1)
        self._seq = bytearray()
        self.state = EditorState.READING

    def show_prompt(self):
        self._write(self._prompt().encode("utf-8"))

    def read_line(self):
        """Read one line from the terminal.

        Returns the finished line, or None once the input stream is closed.
        """
        self.start()
        while self.state is not EditorState.DONE:
            chunk = self._read(1)
            if not chunk:
                return None
            self.feed(chunk[0])
        return self.buffer.text

    def feed(self, byte: int) -> EditorState:
        """Advance the editor by one input byte and return the new state."""
        if self.state is EditorState.READING:
            self._on_reading(byte)
        elif self.state is EditorState.ESCAPE_SEQ1:
            self._seq.append(byte)
            self.state = EditorState.ESCAPE_SEQ2
        elif self.state is EditorState.ESCAPE_SEQ2:
            self._seq.append(byte)
            self._on_escape_sequence(bytes(self._seq))
            self._seq = bytearray()
            self.state = EditorState.READING
        return self.state

    def _on_reading(self, byte):
        if byte in ENTER_KEYS:
            self._write(b"\n")
            self.state = EditorState.DONE
        elif byte in BACKSPACE_KEYS:
            if self.buffer.backspace():
                self._write(ERASE_CHAR)
        elif byte == ESC:
            self.state = EditorState.ESCAPE_SEQ1
        elif self.buffer.append(byte):
            self._write(bytes((byte,)))

    def _on_escape_sequence(self, seq):
        if seq == HISTORY_PREVIOUS:
            entry = self.history.navigate_previous()
            if entry is not None:
                self._replace_line(entry)
        elif seq == HISTORY_NEXT:
            entry = self.history.navigate_next()
            if entry is not None:
                self._replace_line(entry)
        # Other sequences are dropped

    def _replace_line(self, text):
        self.buffer.set_text(text)
        self._write(CLEAR_LINE + self._prompt().encode("utf-8") + self.buffer.data)
