"""
Query template mix (qgen) package.

This package builds the planning structure of a synthetic benchmark workload
generator: a mix file assigns percentages to insert, modify and search
operations and to the query templates inside each kind, and the resulting
index maps a uniform draw in (0, 100] to the template that should be used.
"""

from .errors import ConfigError, TemplateNotFound
from .loader import build_index, load_index
from .templates import KindMix, OperationKind, Template, TemplateIndex

__all__ = [
    "ConfigError",
    "TemplateNotFound",
    "build_index",
    "load_index",
    "KindMix",
    "OperationKind",
    "Template",
    "TemplateIndex",
]
