"""Emit operation plans to external representations."""

from .yaml_emit import write_plan

__all__ = ["write_plan"]
