"""Ports - interfaces/protocols for external dependencies."""

from .event_source import EventSource
from .renderer import Renderer

__all__ = [
    "EventSource",
    "Renderer",
]
