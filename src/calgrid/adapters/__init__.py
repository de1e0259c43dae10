"""Adapters - I/O implementations of ports."""

from .json_file import JsonFileEventSource
from .http_feed import HttpEventSource
from .composite_source import CompositeEventSource
from .text_renderer import TextRenderer
from .json_renderer import JsonRenderer

__all__ = [
    "JsonFileEventSource",
    "HttpEventSource",
    "CompositeEventSource",
    "TextRenderer",
    "JsonRenderer",
]
