"""Core value types: operation kinds, kind mixes and templates."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple

import numpy as np

from ..errors import PercentageSumMismatch, TemplateNotFound, UnknownOperationKind

FULL_RANGE = 100.0
DEFAULT_TOLERANCE = 1e-9


def percent_equals(value: float, target: float, tolerance: float = DEFAULT_TOLERANCE) -> bool:
    """Compare two percentages; ``tolerance=0.0`` means exact equality."""

    if tolerance <= 0.0:
        return value == target
    return math.isclose(value, target, rel_tol=0.0, abs_tol=tolerance)


def check_draw(draw: float) -> float:
    """Validate that ``draw`` is a finite value above zero."""

    value = float(draw)
    if not math.isfinite(value) or value <= 0.0:
        raise ValueError(f"draw must be a finite value in (0, 100], got {draw!r}")
    return value


class OperationKind(Enum):
    """Category of a generated workload operation, keyed by its mix-file tag."""

    INSERT = "I"
    MODIFY = "M"
    SEARCH = "S"

    @property
    def tag(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def from_tag(cls, tag: str, line_no: Optional[int] = None) -> "OperationKind":
        """Resolve a one-character mix-file tag."""

        try:
            return cls(tag)
        except ValueError:
            raise UnknownOperationKind(
                f"unknown operation kind {tag!r} (expected I, M or S)", line_no=line_no
            ) from None

    @classmethod
    def coerce(cls, value: "OperationKind | str") -> "OperationKind":
        """Accept a kind, its tag (``"I"``) or its name (``"insert"``)."""

        if isinstance(value, cls):
            return value
        text = str(value).strip()
        if text.upper() in cls.__members__:
            return cls[text.upper()]
        return cls.from_tag(text.upper())


@dataclass(frozen=True)
class KindMix:
    """Top-level share of the workload assigned to each operation kind."""

    insert: float
    modify: float
    search: float

    @property
    def total(self) -> float:
        return self.insert + self.modify + self.search

    def share(self, kind: OperationKind) -> float:
        return getattr(self, kind.label)

    def as_dict(self) -> Dict[str, float]:
        return {kind.label: float(self.share(kind)) for kind in OperationKind}

    def check(
        self,
        tolerance: float = DEFAULT_TOLERANCE,
        line_no: Optional[int] = None,
    ) -> "KindMix":
        """Raise ``PercentageSumMismatch`` unless the shares add up to 100."""

        if not percent_equals(self.total, FULL_RANGE, tolerance):
            raise PercentageSumMismatch(
                "the sum of percentages of each type of operation must be 100.0, "
                f"got {self.total:g}",
                line_no=line_no,
            )
        return self

    def roofs(self) -> np.ndarray:
        """Cumulative roofs in insert, modify, search order.

        The last kind with a nonzero share, and every kind after it, gets a
        roof of exactly 100 so trailing unused kinds own an empty interval.
        """

        shares = [self.share(kind) for kind in OperationKind]
        roofs = np.cumsum(shares, dtype=float)
        used = [pos for pos, share in enumerate(shares) if share > 0.0]
        last = used[-1] if used else len(shares) - 1
        roofs[last:] = FULL_RANGE
        return roofs

    def pick(self, draw: float) -> OperationKind:
        """Map a draw in (0, 100] to the kind whose interval contains it."""

        value = check_draw(draw)
        idx = int(np.searchsorted(self.roofs(), value, side="left"))
        kinds = list(OperationKind)
        if idx >= len(kinds):
            raise TemplateNotFound(f"draw {value:g} exceeds the operation mix range")
        return kinds[idx]


@dataclass(frozen=True)
class TemplateRecord:
    """One parsed template line, before shares become cumulative roofs."""

    kind: OperationKind
    share: float
    attributes: Tuple[str, ...]
    line_no: Optional[int] = None


@dataclass(frozen=True)
class Template:
    """A query shape owning the interval ``(previous roof, roof]`` of its kind."""

    kind: OperationKind
    roof: float
    share: float
    attributes: Tuple[str, ...] = field(default_factory=tuple)
    line_no: Optional[int] = None
