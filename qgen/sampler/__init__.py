"""Template sampling helpers."""

from .selector import Operation, TemplateSelector, draw_percentage
from .summary import summarize_plan

__all__ = [
    "Operation",
    "TemplateSelector",
    "draw_percentage",
    "summarize_plan",
]
