"""Abstract line source definitions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, List


class LineSource(ABC):
    """Common interface for reading the non-blank lines of a mix file."""

    @abstractmethod
    def describe(self) -> str:
        """Return a short human-readable name used in diagnostics."""

    @abstractmethod
    def read_lines(self) -> Iterable[str]:
        """Yield raw lines (without trailing newlines) in file order."""

    def lines(self) -> List[str]:
        """Return the ordered non-blank lines."""

        return [line for line in self.read_lines() if line.strip()]
