"""Composite binder: builds an object by binding each annotated field.

Scoping rule: scalar fields are searched for within the scope handed to
this binder, and nested binders receive the *matched element* as their
scope, never the document root. Collection fields search the current
scope for all matches.
"""

from __future__ import annotations

import dataclasses
import inspect
from typing import TYPE_CHECKING, Any

from htmlbind.binding.base import Binder
from htmlbind.binding.specs import compile_field_specs
from htmlbind.domain.errors import BindingError
from htmlbind.domain.types import BinderKind
from htmlbind.infrastructure.document import query

if TYPE_CHECKING:
    from htmlbind.binding.resolver import BinderResolver
    from htmlbind.binding.specs import FieldBindingSpec
    from htmlbind.infrastructure.document import ScopedElement


def is_default_constructible(cls: type) -> bool:
    """True when *cls* can be called without arguments."""
    if cls.__init__ is object.__init__ and cls.__new__ is object.__new__:
        return True
    try:
        signature = inspect.signature(cls)
    except (TypeError, ValueError):
        return False
    for param in signature.parameters.values():
        if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
            continue
        if param.default is param.empty:
            return False
    return True


class CompositeBinder(Binder):
    """Binder for user-defined classes with ``HtmlElement`` fields.

    Created by :class:`BinderResolver` and compiled once through
    :meth:`compile`; ``field_specs`` is immutable afterwards.
    """

    kind = BinderKind.COMPOSITE

    def __init__(self, target: type) -> None:
        super().__init__(target)
        self.field_specs: tuple[FieldBindingSpec, ...] = ()
        params = getattr(target, "__dataclass_params__", None)
        self._frozen = bool(dataclasses.is_dataclass(target) and params and params.frozen)

    def compile(self, resolver: BinderResolver) -> None:
        self.field_specs = compile_field_specs(self.target, resolver)

    def bind(self, scope: ScopedElement, spec: FieldBindingSpec | None = None) -> Any:
        instance = self.target()
        for field_spec in self.field_specs:
            try:
                found, value = self._bind_field(scope, field_spec)
            except BindingError as exc:
                exc.prepend(field_spec.name)
                raise
            if found:
                self._assign(instance, field_spec.name, value)
        return instance

    def _bind_field(self, scope: ScopedElement, field_spec: FieldBindingSpec) -> tuple[bool, Any]:
        binder = field_spec.binder
        assert binder is not None
        if field_spec.kind is BinderKind.COLLECTION:
            return True, binder.bind(scope, field_spec)

        matches = query(scope, field_spec.selector, multiple=False)
        if not matches:
            return False, None
        match = matches[0]
        if field_spec.kind is BinderKind.LEAF:
            raw = binder.extract(match, field_spec)  # type: ignore[attr-defined]
            if raw is None:
                return False, None
            return True, binder.convert(raw)  # type: ignore[attr-defined]
        return True, binder.bind(match, field_spec)

    def _assign(self, instance: Any, name: str, value: Any) -> None:
        if self._frozen:
            object.__setattr__(instance, name, value)
        else:
            setattr(instance, name, value)
