from dataclasses import dataclass, field
from typing import List, Optional

from oscsh.config import MAX_ARGS

PIPE = "|"
BACKGROUND = "&"
REDIRECT_OUT = ">"
REDIRECT_IN = "<"


class ParseError(ValueError):
    """Raised when operators in a command line cannot be applied."""


@dataclass
class ParsedCommand:
    args: List[str] = field(default_factory=list)
    background: bool = False
    input_file: Optional[str] = None
    output_file: Optional[str] = None
    pipe_index: Optional[int] = None

    @property
    def is_pipeline(self):
        return self.pipe_index is not None

    @property
    def left(self):
        return self.args[: self.pipe_index] if self.is_pipeline else self.args

    @property
    def right(self):
        return self.args[self.pipe_index + 1 :] if self.is_pipeline else []


def tokenize(line, max_args=MAX_ARGS):
    """
    Split a command line on whitespace and pull out the background marker.
    Returns: (tokens, background)
    """
    tokens, background = [], False
    for word in line.split():
        if len(tokens) >= max_args:
            break
        if word == BACKGROUND:
            background = True
        else:
            tokens.append(word)
    return tokens, background


def find_pipe(tokens):
    """Index of the first pipe operator, or None."""
    for i, tok in enumerate(tokens):
        if tok == PIPE:
            return i
    return None


def find_redirection(tokens):
    """
    Apply the first '<' or '>' found in tokens.
    Returns: (args, input_file, output_file)
    """
    for i, tok in enumerate(tokens):
        if tok in (REDIRECT_OUT, REDIRECT_IN):
            if i + 1 >= len(tokens):
                raise ParseError("missing redirection target")
            target = tokens[i + 1]
            if tok == REDIRECT_OUT:
                return tokens[:i], None, target
            return tokens[:i], target, None
    return list(tokens), None, None


def scan(tokens, background=False):
    """
    Build a ParsedCommand from a token list.
    A pipe takes precedence; redirection is only looked for without one.
    """
    pipe_index = find_pipe(tokens)
    if pipe_index is not None:
        cmd = ParsedCommand(list(tokens), background, pipe_index=pipe_index)
        if not cmd.left:
            raise ParseError("missing command before '|'")
        if not cmd.right:
            raise ParseError("missing command after '|'")
        return cmd

    args, input_file, output_file = find_redirection(tokens)
    if not args:
        raise ParseError("missing command")
    return ParsedCommand(args, background, input_file, output_file)
