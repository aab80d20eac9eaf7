"""Mix-file parsing."""

from .mixfile import ParsedMix, parse_header, parse_lines, parse_source, parse_template_line

__all__ = [
    "ParsedMix",
    "parse_header",
    "parse_lines",
    "parse_source",
    "parse_template_line",
]
