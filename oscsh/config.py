"""Shell-wide limits and terminal control strings."""

# Longest command line accepted by the line editor, terminator included
MAX_LENGTH = 1024

# Most argument tokens kept from one command line
MAX_ARGS = 64

# Number of command lines kept for up/down recall
HISTORY_SIZE = 5

PROMPT_FORMAT = "osc:{dir}> "

# Erase the whole current line and return to column one
CLEAR_LINE = b"\x1b[2K\r"
ERASE_CHAR = b"\b \b"

ESC = 0x1B
BACKSPACE_KEYS = (0x7F, 0x08)
ENTER_KEYS = (ord("\n"), ord("\r"))
