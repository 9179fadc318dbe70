import os
import sys


def builtin_help():
    """Print help message"""
    print("""oscsh help:
 Built-in commands:
  cd <dir>      : change directory
  exit          : exit shell
  help          : print this help
  history       : show recent commands
  pmon          : show background processes
  !!            : run the most recent command again

Features:
  Pipe two commands using |
  Redirection using > or <
  Background with & (run command in background)
  Up/Down arrows recall recent commands
""")


def builtin_cd(args):
    """Change directory"""
    if not args:
        print("cd: expected argument", file=sys.stderr)
        return 1
    try:
        os.chdir(args[0])
        return 0
    except OSError as e:
        print(f"cd: {args[0]}: {e.strerror}", file=sys.stderr)
        return 1


def builtin_exit():
    """Leave the shell. Terminal state is restored by the enclosing RawMode."""
    raise SystemExit(0)


def execute_builtin(tokens, history, jobs):
    """
    Execute built-in command if it matches.
    Returns (executed: bool, exit_code: int)
    """
    if not tokens:
        return False, 0

    cmd = tokens[0]
    args = tokens[1:]

    builtins = {
        'help': builtin_help,
        'history': history.show,
        'pmon': jobs.show,
    }

    if cmd == 'exit':
        builtin_exit()
    elif cmd == 'cd':
        return True, builtin_cd(args)
    elif cmd in builtins:
        builtins[cmd]()
        return True, 0

    return False, 0
