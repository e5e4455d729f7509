"""Serializer contract shared with sibling content-type codecs.

A request library picks a serializer by ``content_type`` and never needs
to know which engine backs it.
"""

from __future__ import annotations

from typing import Any, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class Serializer(Protocol):
    """Converts between wire text of one content type and Python objects."""

    @property
    def content_type(self) -> str:
        """MIME type handled by this serializer."""
        ...

    def serialize(self, graph: Any) -> str:
        """Render *graph* as wire text."""
        ...

    def deserialize(self, target: type[T], serialized: str | None) -> T:
        """Build an instance of *target* from wire text."""
        ...
