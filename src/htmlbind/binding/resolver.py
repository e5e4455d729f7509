"""Binder resolver: maps a type descriptor to its binding strategy.

Classification, in order:
  1. Leaf kinds (built-in primitives, enums, plugin-registered types)
  2. Sequence-of-T  -> CollectionBinder over resolve(T)
  3. Anything else  -> CompositeBinder with a compiled field plan

INVARIANT: At most one cache entry per type; entries are never evicted.
Reads are lock-free. Population runs under one RLock that is never held
while a document is traversed. Composite binders are parked in a private
in-progress table while their fields compile, so self-referencing types
resolve, and are published to the shared cache only once the outermost
resolution succeeds.
"""

from __future__ import annotations

import inspect
import logging
import threading
import typing
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any

from htmlbind.binding.base import Binder
from htmlbind.binding.collection import CollectionBinder
from htmlbind.binding.composite import CompositeBinder, is_default_constructible
from htmlbind.binding.leaves import EnumBinder, LeafBinder, default_leaf_binders
from htmlbind.binding.specs import sequence_item, unwrap_optional
from htmlbind.domain.errors import ConstructorNotFoundError, UnsupportedTypeError

logger = logging.getLogger(__name__)


class BinderResolver:
    """Factory and cache of binders, safe to share between threads."""

    def __init__(self, *, date_formats: Iterable[str] = ()) -> None:
        self._leaves: dict[type, LeafBinder] = default_leaf_binders(date_formats)
        self._cache: dict[Any, Binder] = {}
        self._pending: dict[Any, Binder] = {}
        self._lock = threading.RLock()
        self._depth = 0

    def register_leaf(self, target: type, binder: LeafBinder) -> None:
        """Add a leaf binder for *target*.

        Raises:
            ValueError: *target* was already resolved by this resolver.
        """
        with self._lock:
            if target in self._cache:
                raise ValueError(f"{target!r} is already resolved; register leaf binders first")
            self._leaves[target] = binder
        logger.debug("Registered leaf binder for %s", _describe(target))

    def is_cached(self, tp: Any) -> bool:
        return unwrap_optional(tp) in self._cache

    def resolve(self, tp: Any) -> Binder:
        """Return the binder for *tp*, building and caching it on first use.

        ``Annotated`` wrappers are ignored and ``T | None`` resolves as ``T``.

        Raises:
            UnsupportedTypeError: *tp* (or a field type reached from it) has
                no binding strategy.
            ConstructorNotFoundError: a composite type cannot be constructed
                without arguments.
        """
        key = unwrap_optional(tp)
        binder = self._cache.get(key)
        if binder is not None:
            return binder

        with self._lock:
            binder = self._cache.get(key) or self._pending.get(key)
            if binder is not None:
                return binder
            self._depth += 1
            try:
                binder = self._build(key)
            except BaseException:
                if self._depth == 1:
                    self._pending.clear()
                raise
            finally:
                self._depth -= 1
            self._pending[key] = binder
            if self._depth == 0:
                self._cache.update(self._pending)
                logger.debug(
                    "Cached %d binder(s) resolving %s (cache size %d)",
                    len(self._pending),
                    _describe(key),
                    len(self._cache),
                )
                self._pending.clear()
            return binder

    def resolve_for_model(self, model: object) -> Binder:
        """Return the binder for ``type(model)``."""
        if model is None:
            raise TypeError("model must not be None")
        return self.resolve(type(model))

    def _build(self, tp: Any) -> Binder:
        leaf = self._leaf_for(tp)
        if leaf is not None:
            return leaf

        item = sequence_item(tp)
        if item is not None:
            item_type, container = item
            return CollectionBinder(tp, self.resolve(item_type), container)

        self._check_composite(tp)
        if not is_default_constructible(tp):
            raise ConstructorNotFoundError(tp)
        binder = CompositeBinder(tp)
        self._pending[tp] = binder
        binder.compile(self)
        return binder

    def _leaf_for(self, tp: Any) -> LeafBinder | None:
        if isinstance(tp, type) and issubclass(tp, Enum):
            registered = self._leaves.get(tp)
            return registered if registered is not None else EnumBinder(tp)
        if isinstance(tp, type):
            return self._leaves.get(tp)
        return None

    @staticmethod
    def _check_composite(tp: Any) -> None:
        if tp is typing.Any or not isinstance(tp, type):
            raise UnsupportedTypeError(f"{tp!r} has no binding strategy")
        if tp.__module__ == "builtins" or issubclass(tp, Mapping):
            raise UnsupportedTypeError(f"{tp.__qualname__} has no binding strategy")
        if inspect.isabstract(tp) or getattr(tp, "_is_protocol", False):
            raise UnsupportedTypeError(
                f"{tp.__qualname__} is abstract and has no concrete binding strategy"
            )


def _describe(tp: Any) -> str:
    return getattr(tp, "__qualname__", None) or repr(tp)
