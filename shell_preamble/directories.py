import os
import re
from pathlib import Path
from typing import Union

# "/method:host:/dir" remote prefixes and "scheme://host/dir" URLs.
_REMOTE_PREFIX_RE = re.compile(r"^(/[A-Za-z][\w-]*:[^/:]*:|[A-Za-z][\w+.-]*://)")


def is_remote_path(path: Union[str, Path]) -> bool:
    return _REMOTE_PREFIX_RE.match(str(path)) is not None


def normalize_directory(path: Union[str, Path]) -> str:
    text = str(path)
    if is_remote_path(text):
        return text
    return os.path.abspath(os.path.expanduser(text))


def current_directory() -> str:
    return normalize_directory(os.getcwd())
