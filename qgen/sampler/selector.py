"""Draw operation kinds and templates from a ``TemplateIndex``."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Dict, List, Optional

from ..templates import FULL_RANGE, OperationKind, Template, TemplateIndex


@dataclass(frozen=True)
class Operation:
    """One planned workload operation."""

    seq: int
    kind: OperationKind
    template: Template

    def to_dict(self) -> Dict[str, object]:
        return {
            "seq": self.seq,
            "kind": self.kind.tag,
            "roof": float(self.template.roof),
            "attributes": list(self.template.attributes),
        }


def draw_percentage(rng: random.Random) -> float:
    """Uniform draw in ``(0, 100]``."""

    return FULL_RANGE * (1.0 - rng.random())


class TemplateSelector:
    """Seeded two-stage selector: kind from the mix, then template within the kind."""

    def __init__(self, index: TemplateIndex, seed: Optional[int] = None) -> None:
        self.index = index
        self.rng = random.Random(0 if seed is None else seed)
        self._seq = 0

    def next_operation(self) -> Operation:
        kind = self.index.pick_kind(draw_percentage(self.rng))
        template = self.index.lookup(kind, draw_percentage(self.rng))
        self._seq += 1
        return Operation(seq=self._seq, kind=kind, template=template)

    def plan(self, n: int) -> List[Operation]:
        """Return the next ``n`` operations."""

        if n < 0:
            raise ValueError("n must be non-negative")
        return [self.next_operation() for _ in range(n)]
