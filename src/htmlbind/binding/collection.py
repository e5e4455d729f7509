"""Collection binder: every match of a selector, bound in document order."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from htmlbind.binding.base import Binder
from htmlbind.domain.errors import BindingError, UnsupportedTypeError
from htmlbind.domain.types import BinderKind
from htmlbind.infrastructure.document import query

if TYPE_CHECKING:
    from htmlbind.binding.specs import FieldBindingSpec
    from htmlbind.infrastructure.document import ScopedElement


class CollectionBinder(Binder):
    """Binds ``list[T]`` or ``tuple[T, ...]`` through the binder for ``T``.

    Each matched element is bound with itself as scope. An empty match
    set yields an empty sequence. Leaf items whose configured attribute
    is missing fail, since the element itself did match.
    """

    kind = BinderKind.COLLECTION

    def __init__(self, target: Any, item_binder: Binder, container: type = list) -> None:
        super().__init__(target)
        self.item_binder = item_binder
        self.container = container

    def bind(self, scope: ScopedElement, spec: FieldBindingSpec | None = None) -> Any:
        if spec is None:
            raise UnsupportedTypeError(
                f"{self.target!r} can only be bound from a field with a selector"
            )
        items: list[Any] = []
        for index, match in enumerate(query(scope, spec.selector, multiple=True)):
            try:
                items.append(self.item_binder.bind(match, spec))
            except BindingError as exc:
                exc.prepend(index)
                raise
        return self.container(items)
