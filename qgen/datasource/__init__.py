"""Line sources that feed mix files into the parser."""

from .base import LineSource
from .file import FileLineSource
from .text import TextLineSource

__all__ = [
    "LineSource",
    "FileLineSource",
    "TextLineSource",
]
