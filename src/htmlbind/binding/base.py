"""Binder contract shared by leaf, composite, and collection strategies."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from htmlbind.binding.specs import FieldBindingSpec
    from htmlbind.domain.types import BinderKind
    from htmlbind.infrastructure.document import ScopedElement


class Binder(ABC):
    """Converts markup within a scope into a value of ``target``.

    Every binder receives the scope explicitly. A binder never looks
    outside the element it is handed.
    """

    kind: ClassVar[BinderKind]

    def __init__(self, target: Any) -> None:
        self.target = target

    @abstractmethod
    def bind(self, scope: ScopedElement, spec: FieldBindingSpec | None = None) -> Any:
        """Bind a value from *scope*.

        *spec* is the field being bound, or None at the top level.
        """

    def __repr__(self) -> str:
        name = getattr(self.target, "__qualname__", repr(self.target))
        return f"{type(self).__name__}({name})"
