"""Per-kind template index backed by cumulative percentage roofs."""

from __future__ import annotations

import dataclasses
import logging
from typing import Dict, Iterable, List, Mapping, Sequence, Tuple

import numpy as np

from ..errors import PartitionInvariantViolation, TemplateNotFound
from .model import (
    DEFAULT_TOLERANCE,
    FULL_RANGE,
    KindMix,
    OperationKind,
    Template,
    TemplateRecord,
    check_draw,
    percent_equals,
)

logger = logging.getLogger(__name__)


class TemplateIndex:
    """
    Immutable mapping from (kind, draw) to the template owning that draw.

    Templates of one kind are kept sorted by ascending roof. With roofs
    ``R1 <= R2 <= ... <= Rn`` the first template owns ``]0, R1]``, the second
    ``]R1, R2]`` and so on; ``Rn`` is 100 for every kind with a nonzero share.
    Equal roofs keep declaration order and the earliest one wins a lookup.
    """

    def __init__(
        self,
        mix: KindMix,
        buckets: Mapping[OperationKind, Sequence[Template]],
    ) -> None:
        self._mix = mix
        self._buckets: Dict[OperationKind, Tuple[Template, ...]] = {}
        self._roofs: Dict[OperationKind, np.ndarray] = {}
        for kind in OperationKind:
            ordered = tuple(sorted(buckets.get(kind, ()), key=lambda tpl: tpl.roof))
            self._buckets[kind] = ordered
            roofs = np.asarray([tpl.roof for tpl in ordered], dtype=float)
            roofs.setflags(write=False)
            self._roofs[kind] = roofs

    @classmethod
    def build(
        cls,
        mix: KindMix,
        records: Iterable[TemplateRecord],
        tolerance: float = DEFAULT_TOLERANCE,
    ) -> "TemplateIndex":
        """Accumulate per-kind roofs in declaration order and validate them."""

        mix.check(tolerance)
        running: Dict[OperationKind, float] = {kind: 0.0 for kind in OperationKind}
        buckets: Dict[OperationKind, List[Template]] = {kind: [] for kind in OperationKind}
        for record in records:
            if record.share < 0.0:
                raise PartitionInvariantViolation(
                    f"{record.kind.label} template share {record.share:g} is negative; "
                    "roofs must never decrease",
                    line_no=record.line_no,
                )
            # the previous roof of this kind is the floor of the new interval
            roof = running[record.kind] + record.share
            buckets[record.kind].append(
                Template(
                    kind=record.kind,
                    roof=roof,
                    share=record.share,
                    attributes=tuple(record.attributes),
                    line_no=record.line_no,
                )
            )
            running[record.kind] = roof

        for kind in OperationKind:
            _validate_partition(kind, mix.share(kind), running[kind], tolerance)
            bucket = buckets[kind]
            if bucket and percent_equals(running[kind], FULL_RANGE, tolerance):
                bucket[-1] = dataclasses.replace(bucket[-1], roof=FULL_RANGE)
            logger.debug(
                "Indexed %d %s template(s), roof total %g",
                len(bucket),
                kind.label,
                running[kind],
            )
        return cls(mix, buckets)

    # ------------------------------------------------------------------ access
    @property
    def mix(self) -> KindMix:
        return self._mix

    def templates(self, kind: OperationKind | str) -> Tuple[Template, ...]:
        """Templates of ``kind`` in ascending roof order."""

        return self._buckets[OperationKind.coerce(kind)]

    def kinds(self) -> List[OperationKind]:
        """Kinds that have at least one template."""

        return [kind for kind in OperationKind if self._buckets[kind]]

    def max_roof(self, kind: OperationKind | str) -> float:
        roofs = self._roofs[OperationKind.coerce(kind)]
        return float(roofs[-1]) if roofs.size else 0.0

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._buckets.values())

    # ------------------------------------------------------------------ lookup
    def lookup(self, kind: OperationKind | str, draw: float) -> Template:
        """Return the first template whose roof is at least ``draw``."""

        kind = OperationKind.coerce(kind)
        value = check_draw(draw)
        roofs = self._roofs[kind]
        if roofs.size == 0:
            raise TemplateNotFound(f"no {kind.label} templates declared")
        idx = int(np.searchsorted(roofs, value, side="left"))
        if idx >= roofs.size:
            raise TemplateNotFound(
                f"draw {value:g} exceeds the highest {kind.label} roof {roofs[-1]:g}"
            )
        return self._buckets[kind][idx]

    def pick_kind(self, draw: float) -> OperationKind:
        """Choose the operation kind for a draw using the top-level mix."""

        return self._mix.pick(draw)


def _validate_partition(
    kind: OperationKind,
    declared: float,
    reached: float,
    tolerance: float,
) -> None:
    """A kind is valid when its roofs reach 100, or it is unused and empty."""

    if percent_equals(reached, FULL_RANGE, tolerance):
        if percent_equals(declared, 0.0, tolerance):
            logger.warning(
                "%s templates are declared but the %s share is 0; they will never be drawn",
                kind.label.capitalize(),
                kind.label,
            )
        return
    if percent_equals(declared, 0.0, tolerance) and percent_equals(reached, 0.0, tolerance):
        return
    raise PartitionInvariantViolation(
        f"the sum of percentages for templates of {kind.label} is {reached:g}, not 100.0 "
        f"(declared {kind.label} share {declared:g})"
    )
