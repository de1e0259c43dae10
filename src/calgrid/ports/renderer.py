"""Renderer interface."""

from typing import Any, Protocol

from calgrid.calendar import TemplateData


class Renderer(Protocol):
    """Interface for turning template data into markup."""

    def __call__(self, data: TemplateData) -> Any:
        """Render one view. The return value is opaque to the calendar."""
        ...
