"""Operation kinds, templates and the roof-ordered template index."""

from .model import (
    DEFAULT_TOLERANCE,
    FULL_RANGE,
    KindMix,
    OperationKind,
    Template,
    TemplateRecord,
)
from .index import TemplateIndex

__all__ = [
    "DEFAULT_TOLERANCE",
    "FULL_RANGE",
    "KindMix",
    "OperationKind",
    "Template",
    "TemplateRecord",
    "TemplateIndex",
]
