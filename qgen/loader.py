"""Convenience constructors from mix-file content to a ``TemplateIndex``."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from .datasource import FileLineSource, LineSource
from .parser import parse_lines, parse_source
from .templates import DEFAULT_TOLERANCE, TemplateIndex


def build_index(lines: Iterable[str], tolerance: float = DEFAULT_TOLERANCE) -> TemplateIndex:
    """Parse ``lines`` and build a validated index."""

    parsed = parse_lines(lines, tolerance=tolerance)
    return TemplateIndex.build(parsed.mix, parsed.records, tolerance=tolerance)


def load_index(
    source: LineSource | str | Path,
    tolerance: float = DEFAULT_TOLERANCE,
) -> TemplateIndex:
    """Build an index from a line source or a path to a mix file."""

    if not isinstance(source, LineSource):
        source = FileLineSource(source)
    parsed = parse_source(source, tolerance=tolerance)
    return TemplateIndex.build(parsed.mix, parsed.records, tolerance=tolerance)
