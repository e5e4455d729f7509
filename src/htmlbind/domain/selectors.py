"""Per-field selector metadata.

Fields opt into binding by carrying an :class:`HtmlElement`, either through
``typing.Annotated``::

    class Person:
        first_name: Annotated[str | None, HtmlElement("#firstName")] = None

or through a dataclass field built by :func:`html_field`::

    @dataclass
    class Person:
        first_name: str | None = html_field("#firstName")

Fields without an ``HtmlElement`` are never bound and keep their default.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any

from htmlbind.domain.types import BindingBehavior

METADATA_KEY = "htmlbind"


@dataclass(frozen=True)
class HtmlElement:
    """Selector annotation for a single field.

    Attributes:
        selector: CSS selector evaluated within the parent field's match.
        behavior: Which part of the matched element feeds leaf binders.
        attribute: Attribute name, required for ``BindingBehavior.ATTRIBUTE``.
        strip: Strip surrounding whitespace from extracted text.
        multiple: Force scalar (False) or multi-match (True) binding.
            ``None`` infers it from the field type.
    """

    selector: str
    behavior: BindingBehavior = BindingBehavior.TEXT
    attribute: str | None = None
    strip: bool = True
    multiple: bool | None = None

    def __post_init__(self) -> None:
        if not self.selector or not self.selector.strip():
            raise ValueError("HtmlElement selector must not be blank")
        if self.behavior is BindingBehavior.ATTRIBUTE and not self.attribute:
            raise ValueError("BindingBehavior.ATTRIBUTE requires an attribute name")


def html_field(
    selector: str,
    *,
    behavior: BindingBehavior = BindingBehavior.TEXT,
    attribute: str | None = None,
    strip: bool = True,
    multiple: bool | None = None,
    default: Any = None,
    default_factory: Any = dataclasses.MISSING,
) -> Any:
    """Return a ``dataclasses.field`` carrying an :class:`HtmlElement`.

    The field defaults to ``None`` unless *default* or *default_factory* is
    given, so the owning dataclass stays default-constructible.
    """
    element = HtmlElement(
        selector,
        behavior=behavior,
        attribute=attribute,
        strip=strip,
        multiple=multiple,
    )
    metadata = {METADATA_KEY: element}
    if default_factory is not dataclasses.MISSING:
        return dataclasses.field(default_factory=default_factory, metadata=metadata)
    return dataclasses.field(default=default, metadata=metadata)


def find_element(metadata: Any) -> HtmlElement | None:
    """Return the first :class:`HtmlElement` among *metadata* items, if any."""
    for item in metadata:
        if isinstance(item, HtmlElement):
            return item
    return None
