"""Binding enums shared by selector metadata and binders."""

from __future__ import annotations

from enum import StrEnum


class BindingBehavior(StrEnum):
    """Which part of a matched element feeds a leaf binder."""

    TEXT = "text"
    HTML = "html"
    ATTRIBUTE = "attribute"
    # Form value: the value attribute, a textarea's content, or the
    # selected option of a select.
    VALUE = "value"


class BinderKind(StrEnum):
    """Binding strategy chosen for a field type at resolution time."""

    LEAF = "leaf"
    COMPOSITE = "composite"
    COLLECTION = "collection"
