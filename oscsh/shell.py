import argparse

from oscsh import __version__
from oscsh.builtin import execute_builtin
from oscsh.config import HISTORY_SIZE
from oscsh.executor import execute, report
from oscsh.history import HistoryStore
from oscsh.job_control import JobTable
from oscsh.line_editor import LineEditor
from oscsh.parser import ParseError, scan, tokenize
from oscsh.prompt import get_prompt
from oscsh.terminal import RawMode

REPEAT_LAST = "!!"


class Shell:
    """Read-evaluate loop tying the line editor to the execution engine."""

    def __init__(self, history_size=HISTORY_SIZE, read=None, write=None):
        self.history = HistoryStore(history_size)
        self.jobs = JobTable()
        self.editor = LineEditor(self.history, prompt=get_prompt, read=read, write=write)

    def run(self):
        """
        Prompt, read and dispatch lines until the input stream closes.
        Returns: exit status for the shell process
        """
        while True:
            try:
                self.jobs.reap()
                self.editor.show_prompt()
                line = self.editor.read_line()
                if line is None:
                    print()
                    return 0
                self.dispatch(line)
            except KeyboardInterrupt:
                print()

    def dispatch(self, line):
        """Run one submitted line. Errors are reported, never raised."""
        if not line.strip():
            return None

        if line.strip() == REPEAT_LAST:
            last = self.history.most_recent()
            if last is None:
                print("No commands in history.")
                return None
            print(last, flush=True)
            line = last
        else:
            self.history.record(line)

        tokens, background = tokenize(line)
        if not tokens:
            return None

        executed, exit_code = execute_builtin(tokens, self.history, self.jobs)
        if executed:
            return exit_code

        try:
            cmd = scan(tokens, background)
        except ParseError as e:
            report(f"oscsh: {e}")
            return None

        try:
            return execute(cmd, self.jobs)
        except OSError as e:
            report(f"oscsh: {e}")
            return None


def _history_size(value):
    size = int(value)
    if size < 1:
        raise argparse.ArgumentTypeError("history size must be at least 1")
    return size


def main(argv=None):
    p = argparse.ArgumentParser(prog="oscsh", description="Interactive shell with pipes, redirection and history recall")
    p.add_argument("-v", "--version", action="version",
                   version=f"%(prog)s {__version__}")
    p.add_argument("--history-size", type=_history_size, default=HISTORY_SIZE,
                   help=f"Number of commands kept for arrow-key recall (default: {HISTORY_SIZE})")
    args = p.parse_args(argv)

    with RawMode():
        return Shell(history_size=args.history_size).run()
