"""htmlbind: bind HTML documents to typed Python objects with CSS selectors.

Usage:
    from dataclasses import dataclass
    from htmlbind import HtmlSerializer, html_field

    @dataclass
    class Person:
        first_name: str | None = html_field("#firstName")
        last_name: str | None = html_field("#lastName")

    person = HtmlSerializer().deserialize(Person, markup)
"""

__version__ = "0.1.0"

from htmlbind.binding import BinderResolver, FieldBindingSpec, LeafBinder
from htmlbind.domain.errors import (
    BindingError,
    ConstructorNotFoundError,
    NullInputError,
    ParseError,
    UnsupportedOperationError,
    UnsupportedTypeError,
    ValueConversionError,
)
from htmlbind.domain.selectors import HtmlElement, html_field
from htmlbind.domain.types import BinderKind, BindingBehavior
from htmlbind.serializers import BindingFailure, BindingResult, HtmlSerializer, Serializer

__all__ = [
    "__version__",
    "BinderKind",
    "BinderResolver",
    "BindingBehavior",
    "BindingError",
    "BindingFailure",
    "BindingResult",
    "ConstructorNotFoundError",
    "FieldBindingSpec",
    "HtmlElement",
    "HtmlSerializer",
    "LeafBinder",
    "NullInputError",
    "ParseError",
    "Serializer",
    "UnsupportedOperationError",
    "UnsupportedTypeError",
    "ValueConversionError",
    "html_field",
]
