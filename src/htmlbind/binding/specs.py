"""Field binding plans compiled from a target type's annotations.

A type's plan is built once by :func:`compile_field_specs` when the
resolver first meets the type, and never changes afterwards.
"""

from __future__ import annotations

import collections.abc
import dataclasses
import types
import typing
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Annotated, Any, ClassVar, Union, get_args, get_origin

from htmlbind.domain.errors import BindingError, UnsupportedTypeError
from htmlbind.domain.selectors import METADATA_KEY, HtmlElement, find_element
from htmlbind.domain.types import BinderKind, BindingBehavior

if TYPE_CHECKING:
    from htmlbind.binding.base import Binder
    from htmlbind.binding.resolver import BinderResolver

_SEQUENCE_ORIGINS: frozenset[Any] = frozenset(
    {
        list,
        collections.abc.Sequence,
        collections.abc.MutableSequence,
        collections.abc.Collection,
        collections.abc.Iterable,
    }
)


@dataclass(frozen=True)
class FieldBindingSpec:
    """How one field of ``owner`` is located and bound.

    Keyed by ``(owner, name)``. ``binder`` is the resolved strategy for
    ``field_type`` and is excluded from equality.
    """

    owner: type
    name: str
    selector: str
    field_type: Any
    kind: BinderKind
    behavior: BindingBehavior = BindingBehavior.TEXT
    attribute: str | None = None
    strip: bool = True
    binder: Binder | None = field(default=None, compare=False, repr=False)

    @property
    def key(self) -> tuple[type, str]:
        return (self.owner, self.name)


def strip_annotated(tp: Any) -> Any:
    while get_origin(tp) is Annotated:
        tp = get_args(tp)[0]
    return tp


def unwrap_optional(tp: Any) -> Any:
    """Return ``T`` for ``T | None``; other unions are unsupported."""
    tp = strip_annotated(tp)
    if get_origin(tp) in (Union, types.UnionType):
        members = [strip_annotated(arg) for arg in get_args(tp) if arg is not type(None)]
        if len(members) != 1:
            raise UnsupportedTypeError(f"union type {tp!r} has no single binding strategy")
        return members[0]
    return tp


def sequence_item(tp: Any) -> tuple[Any, type] | None:
    """Return ``(item_type, container)`` if *tp* is a sequence-of-T."""
    origin = get_origin(tp)
    args = get_args(tp)
    if origin in _SEQUENCE_ORIGINS and len(args) == 1:
        return args[0], list
    if origin is tuple and len(args) == 2 and args[1] is Ellipsis:
        return args[0], tuple
    if tp in (list, tuple) or origin is tuple or tp in _SEQUENCE_ORIGINS:
        raise UnsupportedTypeError(f"sequence type {tp!r} must declare a single item type")
    return None


def _field_elements(owner: type) -> dict[str, tuple[Any, HtmlElement]]:
    """Collect each bound field's type hint and metadata, in declaration order."""
    try:
        hints = typing.get_type_hints(owner, include_extras=True)
    except (NameError, TypeError) as exc:
        raise UnsupportedTypeError(
            f"cannot evaluate annotations of {owner.__qualname__}: {exc}"
        ) from exc

    dc_metadata: dict[str, HtmlElement] = {}
    if dataclasses.is_dataclass(owner):
        for f in dataclasses.fields(owner):
            element = f.metadata.get(METADATA_KEY)
            if isinstance(element, HtmlElement):
                dc_metadata[f.name] = element

    elements: dict[str, tuple[Any, HtmlElement]] = {}
    for name, hint in hints.items():
        if get_origin(hint) is ClassVar:
            continue
        element = None
        if get_origin(hint) is Annotated:
            element = find_element(hint.__metadata__)
        if element is None:
            element = dc_metadata.get(name)
        if element is not None:
            elements[name] = (hint, element)
    return elements


def compile_field_specs(owner: type, resolver: BinderResolver) -> tuple[FieldBindingSpec, ...]:
    """Compile the binding plan for every annotated field of *owner*.

    Field types are resolved through *resolver*; failures carry the field
    name in their path.
    """
    specs: list[FieldBindingSpec] = []
    for name, (hint, element) in _field_elements(owner).items():
        try:
            field_type = unwrap_optional(hint)
            binder = resolver.resolve(field_type)
            kind = binder.kind
            if element.multiple is not None and element.multiple != (
                kind is BinderKind.COLLECTION
            ):
                raise UnsupportedTypeError(
                    f"multiple={element.multiple} contradicts field type {field_type!r}"
                )
        except BindingError as exc:
            exc.prepend(name)
            raise
        specs.append(
            FieldBindingSpec(
                owner=owner,
                name=name,
                selector=element.selector,
                field_type=field_type,
                kind=kind,
                behavior=element.behavior,
                attribute=element.attribute,
                strip=element.strip,
                binder=binder,
            )
        )
    return tuple(specs)
