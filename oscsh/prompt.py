import os

from oscsh.config import PROMPT_FORMAT


def get_prompt(cwd=None):
    """Generate shell prompt from the last component of the working directory"""
    cwd = cwd or os.getcwd()
    base = os.path.basename(cwd.rstrip("/")) or "/"
    return PROMPT_FORMAT.format(dir=base)
