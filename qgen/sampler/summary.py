"""Compare an operation plan against the mix it was drawn from."""

from __future__ import annotations

from collections import Counter
from typing import Dict, List, Sequence

import pandas as pd

from ..templates import FULL_RANGE, TemplateIndex
from .selector import Operation

SUMMARY_COLUMNS = [
    "kind",
    "attributes",
    "roof",
    "expected_pct",
    "observed",
    "observed_pct",
]


def summarize_plan(index: TemplateIndex, operations: Sequence[Operation]) -> pd.DataFrame:
    """
    One row per template with its expected and observed workload percentage.

    ``expected_pct`` is the kind's top-level share scaled by the template's
    share within the kind. ``observed_pct`` is relative to the plan size.
    """

    counts = Counter(op.template for op in operations)
    total = len(operations)
    rows: List[Dict[str, object]] = []
    for kind in index.kinds():
        kind_share = index.mix.share(kind)
        for template in index.templates(kind):
            observed = counts.get(template, 0)
            rows.append(
                {
                    "kind": kind.label,
                    "attributes": " ".join(template.attributes),
                    "roof": float(template.roof),
                    "expected_pct": kind_share * template.share / FULL_RANGE,
                    "observed": int(observed),
                    "observed_pct": (FULL_RANGE * observed / total) if total else 0.0,
                }
            )
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)
