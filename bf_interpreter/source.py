"""
Program source loading.

Reads a program file as UTF-8 text and strips every whitespace
character before it reaches the Lexer.
"""

from pathlib import Path
from typing import Union


class SourceUnavailable(Exception):
    def __init__(self, path: Union[str, Path], reason: str):
        self.path = str(path)
        super().__init__(f"Cannot read source {self.path}: {reason}")


def strip_whitespace(text: str) -> str:
    return ''.join(ch for ch in text if not ch.isspace())


def load_source(path: Union[str, Path]) -> str:
    """Read ``path`` and return its text with all whitespace removed."""
    try:
        text = Path(path).read_text(encoding='utf-8')
    except FileNotFoundError as e:
        raise SourceUnavailable(path, "file not found") from e
    except (OSError, UnicodeDecodeError) as e:
        raise SourceUnavailable(path, str(e)) from e
    return strip_whitespace(text)
