"""In-memory line sources for embedded or programmatically built mixes."""

from __future__ import annotations

from typing import Iterable, List, Sequence

from .base import LineSource


class TextLineSource(LineSource):
    """Serve lines from a string or an already split sequence of lines."""

    def __init__(self, content: str | Sequence[str], name: str = "<text>") -> None:
        if isinstance(content, str):
            self._lines: List[str] = content.splitlines()
        else:
            self._lines = [str(line).rstrip("\r\n") for line in content]
        self._name = name

    def describe(self) -> str:
        return self._name

    def read_lines(self) -> Iterable[str]:
        return list(self._lines)
