"""
Parser for mix files.

A mix file has the following shape::

    <PercInsert> <PercModify> <PercSearch>
    <T> <share> <attr1> ... <attrN>
    ...

where ``T`` is the operation kind: I(nsert), M(odify) or S(earch). Tokens are
separated by whitespace and blank lines are ignored.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from ..datasource.base import LineSource
from ..errors import (
    InsufficientInput,
    MalformedHeader,
    MalformedTemplateLine,
    UnparseableShare,
)
from ..templates.model import DEFAULT_TOLERANCE, KindMix, OperationKind, TemplateRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParsedMix:
    """Header percentages plus template records in file order."""

    mix: KindMix
    records: List[TemplateRecord] = field(default_factory=list)


def _parse_float(token: str) -> Optional[float]:
    try:
        value = float(token)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def parse_header(
    line: str,
    line_no: int = 1,
    tolerance: float = DEFAULT_TOLERANCE,
) -> KindMix:
    """Parse ``<PercInsert> <PercModify> <PercSearch>`` and check the sum."""

    tokens = line.split()
    if len(tokens) != 3:
        raise MalformedHeader(
            "must configure 3 percentages for: <PercInsert> <PercModify> <PercSearch>, "
            f"got {len(tokens)} token(s)",
            line_no=line_no,
        )
    values = []
    for token in tokens:
        value = _parse_float(token)
        if value is None:
            raise MalformedHeader(f"percentage {token!r} is not a number", line_no=line_no)
        if value < 0.0:
            raise MalformedHeader(f"percentage {token!r} is negative", line_no=line_no)
        values.append(value)
    return KindMix(*values).check(tolerance, line_no=line_no)


def parse_template_line(line: str, line_no: Optional[int] = None) -> TemplateRecord:
    """Parse ``<T> <share> <attr1> ... <attrN>``."""

    tokens = line.split()
    if len(tokens) < 3:
        raise MalformedTemplateLine(f"incorrect query template {line.strip()!r}", line_no=line_no)
    kind = OperationKind.from_tag(tokens[0], line_no=line_no)
    share = _parse_float(tokens[1])
    if share is None:
        raise UnparseableShare(f"template share {tokens[1]!r} is not a number", line_no=line_no)
    return TemplateRecord(kind=kind, share=share, attributes=tuple(tokens[2:]), line_no=line_no)


def parse_lines(lines: Iterable[str], tolerance: float = DEFAULT_TOLERANCE) -> ParsedMix:
    """Parse the header and every template line of a mix file."""

    numbered = [(no, line) for no, line in enumerate(lines, start=1) if line.strip()]
    if len(numbered) < 2:
        raise InsufficientInput(
            "must have at least a line for percentages of operations and one query template"
        )
    header_no, header = numbered[0]
    mix = parse_header(header, line_no=header_no, tolerance=tolerance)
    records = [parse_template_line(line, line_no=no) for no, line in numbered[1:]]
    logger.debug("Parsed mix %s with %d template line(s)", mix.as_dict(), len(records))
    return ParsedMix(mix=mix, records=records)


def parse_source(source: LineSource, tolerance: float = DEFAULT_TOLERANCE) -> ParsedMix:
    """Read ``source`` and parse its lines."""

    logger.info("Loading template mix from %s", source.describe())
    return parse_lines(source.read_lines(), tolerance=tolerance)
