import signal
import sys
import termios


class RawMode:
    """Put the terminal in non-canonical, no-echo mode for the duration of a ``with`` block.

    Signals generated by the terminal stay enabled. SIGTERM and SIGHUP are
    turned into SystemExit while active so the previous settings are
    restored on those paths too.
    """

    def __init__(self, stream=None):
        self._stream = stream or sys.stdin
        self._fd = -1
        self._old = None
        self._old_handlers = {}

    @property
    def active(self):
        return self._old is not None

    def __enter__(self):
        try:
            self._fd = self._stream.fileno()
        except (AttributeError, ValueError, OSError):
            self._fd = -1
            return self
        if not self._stream.isatty():
            print("Warning: not running in a terminal, line editing keys may not work.", file=sys.stderr)
            return self
        try:
            self._old = termios.tcgetattr(self._fd)
            new = termios.tcgetattr(self._fd)
            new[3] = new[3] & ~(termios.ICANON | termios.ECHO)
            new[3] = new[3] | termios.ISIG
            new[6][termios.VMIN] = 1
            new[6][termios.VTIME] = 0
            termios.tcsetattr(self._fd, termios.TCSAFLUSH, new)
        except termios.error as e:
            print(f"Warning: could not enable raw mode: {e}", file=sys.stderr)
            self._old = None
            return self
        for signum in (signal.SIGTERM, signal.SIGHUP):
            self._old_handlers[signum] = signal.signal(signum, _exit_on_signal)
        return self

    def __exit__(self, exc_type, exc, tb):
        for signum, handler in self._old_handlers.items():
            signal.signal(signum, handler)
        self._old_handlers = {}
        if self._old is None:
            return False
        try:
            termios.tcsetattr(self._fd, termios.TCSAFLUSH, self._old)
        except termios.error as e:
            print(f"Warning: could not restore terminal mode: {e}", file=sys.stderr)
        self._old = None
        return False


def _exit_on_signal(signum, frame):
    raise SystemExit(128 + signum)
