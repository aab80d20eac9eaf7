"""File-backed line source."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from ..errors import SourceUnavailable
from .base import LineSource

logger = logging.getLogger(__name__)


class FileLineSource(LineSource):
    """Read a mix file from disk."""

    def __init__(self, path: str | Path, encoding: str = "utf-8") -> None:
        self._path = Path(path)
        self._encoding = encoding

    @property
    def path(self) -> Path:
        return self._path

    def describe(self) -> str:
        return str(self._path)

    def read_lines(self) -> Iterable[str]:
        """Read the whole file up front so I/O errors surface before parsing."""

        try:
            text = self._path.read_text(encoding=self._encoding)
        except (OSError, UnicodeDecodeError) as exc:
            raise SourceUnavailable(f"cannot read {self._path}: {exc}") from exc
        logger.debug("Read %d bytes from %s", len(text), self._path)
        return text.splitlines()
