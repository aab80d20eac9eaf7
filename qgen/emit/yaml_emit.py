"""YAML plan emission."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import yaml

from ..sampler.selector import Operation
from ..templates import KindMix


def write_plan(path: str | Path, operations: Sequence[Operation], mix: KindMix) -> None:
    """Persist the operation mix and the planned operations to YAML."""

    payload = {
        "mix": mix.as_dict(),
        "plan": [op.to_dict() for op in operations],
    }
    with Path(path).open("w", encoding="utf-8") as handle:
        yaml.safe_dump(payload, handle, sort_keys=False)
