import os
import shutil
import subprocess
import sys


def report(message):
    print(message, file=sys.stderr, flush=True)


def run_external(args, stdin=None, stdout=None, background=False):
    """
    Start an external command.
    Returns: Popen object or None
    """
    if shutil.which(args[0]) is None:
        report(f"oscsh: command not found: {args[0]}")
        return None

    try:
        # A background child gets its own process group so Ctrl+C at the
        # prompt does not reach it
        return subprocess.Popen(
            args,
            stdin=stdin,
            stdout=stdout,
            preexec_fn=os.setpgrp if background else None,
        )
    except PermissionError:
        report(f"oscsh: permission denied: {args[0]}")
    except FileNotFoundError:
        report(f"oscsh: command not found: {args[0]}")
    except OSError as e:
        report(f"oscsh: failed to execute '{args[0]}': {e}")
    return None


def wait_foreground(*procs):
    """
    Block until every process has exited.
    An interrupt while waiting is re-raised only after all of them are gone.
    Returns: list of exit codes
    """
    codes = []
    interrupted = False
    for proc in procs:
        while True:
            try:
                codes.append(proc.wait())
                break
            except KeyboardInterrupt:
                interrupted = True
    if interrupted:
        raise KeyboardInterrupt
    return codes


def run_command(args, background=False, input_file=None, output_file=None, jobs=None):
    """
    Run a single command, optionally redirected and/or in the background.
    Only one redirection applies; output wins over input.
    Returns: exit code of a foreground command, None otherwise
    """
    stdin_f = stdout_f = None
    try:
        if output_file is not None:
            stdout_f = open(output_file, "wb")
        elif input_file is not None:
            stdin_f = open(input_file, "rb")
    except OSError as e:
        kind = "output" if output_file is not None else "input"
        report(f"Error: Unable to open {kind} file '{e.filename}': {e.strerror}")
        return None

    try:
        proc = run_external(args, stdin=stdin_f, stdout=stdout_f, background=background)
    finally:
        # The child holds its own copy of the descriptor
        for f in (stdin_f, stdout_f):
            if f is not None:
                f.close()

    if proc is None:
        return None

    if background:
        cmdline = " ".join(args)
        if jobs is not None:
            jobs.add(proc, cmdline)
        else:
            print(f"Process running in background (PID: {proc.pid})", flush=True)
        return None

    (code,) = wait_foreground(proc)
    return code


def run_pipeline(left, right):
    """
    Run `left | right` and wait for both sides.
    Returns: (left exit code, right exit code) or None if nothing ran
    """
    for args in (left, right):
        if shutil.which(args[0]) is None:
            report(f"oscsh: command not found: {args[0]}")
            return None

    try:
        read_fd, write_fd = os.pipe()
    except OSError as e:
        report(f"oscsh: pipe failed: {e}")
        return None

    try:
        p1 = run_external(left, stdout=write_fd)
        if p1 is None:
            return None
        p2 = run_external(right, stdin=read_fd)
        if p2 is None:
            p1.kill()
            p1.wait()
            return None
    finally:
        # Without this the reader never sees end-of-stream
        os.close(read_fd)
        os.close(write_fd)

    return tuple(wait_foreground(p1, p2))


def execute(cmd, jobs=None):
    """
    Execute a ParsedCommand.
    Pipelines always run in the foreground.
    """
    if cmd.is_pipeline:
        return run_pipeline(cmd.left, cmd.right)
    return run_command(
        cmd.args,
        background=cmd.background,
        input_file=cmd.input_file,
        output_file=cmd.output_file,
        jobs=jobs,
    )
