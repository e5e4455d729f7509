"""HTML serializer: the public entry point of the binding engine.

Converts an HTML response into an object graph. Given::

    <span id="firstName">John</span>
    <span id="lastName">Doe</span>

and::

    @dataclass
    class Person:
        first_name: str | None = html_field("#firstName")
        last_name: str | None = html_field("#lastName")

``HtmlSerializer().deserialize(Person, markup)`` returns
``Person(first_name="John", last_name="Doe")``.

Serialization (object -> HTML) is deliberately unsupported.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any, TypeVar

from htmlbind.binding.resolver import BinderResolver
from htmlbind.domain.errors import BindingError, NullInputError, UnsupportedOperationError
from htmlbind.infrastructure.document import parse_markup
from htmlbind.serializers.result import BindingResult

if TYPE_CHECKING:
    from htmlbind.config.settings import HtmlBindSettings

T = TypeVar("T")

CONTENT_TYPE = "text/html"

logger = logging.getLogger(__name__)

_default_resolver: BinderResolver | None = None
_default_lock = threading.Lock()


def default_resolver() -> BinderResolver:
    """Process-wide resolver shared by serializers built without one."""
    global _default_resolver
    with _default_lock:
        if _default_resolver is None:
            _default_resolver = BinderResolver()
        return _default_resolver


class HtmlSerializer:
    """Deserializer for ``text/html`` content.

    Args:
        settings: Parser backend and binding options. Defaults apply when
            omitted.
        resolver: Binder cache to use. Serializers built without
            *settings* or *resolver* share :func:`default_resolver`.
    """

    def __init__(
        self,
        settings: HtmlBindSettings | None = None,
        resolver: BinderResolver | None = None,
    ) -> None:
        self._parser = settings.parser.backend if settings is not None else "html.parser"
        if resolver is None:
            if settings is not None and settings.binding.date_formats:
                resolver = BinderResolver(date_formats=settings.binding.date_formats)
            else:
                resolver = default_resolver()
        self.resolver = resolver

    @property
    def content_type(self) -> str:
        return CONTENT_TYPE

    def deserialize(self, target: type[T], serialized: str | bytes | None) -> T:
        """Bind *serialized* HTML into a new instance of *target*.

        Raises:
            NullInputError: *serialized* is None.
            ParseError: *serialized* could not be parsed.
            ConstructorNotFoundError: a composite type needs constructor
                arguments.
            UnsupportedTypeError: a declared type has no binding strategy.
            ValueConversionError: a present value could not be converted.
        """
        if serialized is None:
            raise NullInputError("cannot deserialize None markup")
        document = parse_markup(serialized, parser=self._parser)
        binder = self.resolver.resolve(target)
        name = getattr(target, "__qualname__", repr(target))
        try:
            value = binder.bind(document.root)
        except BindingError as exc:
            logger.debug("Binding %s failed: %s", name, exc)
            raise
        logger.debug("Bound %s from %d characters of markup", name, len(serialized))
        return value

    def try_deserialize(self, target: type[Any], serialized: str | bytes | None) -> BindingResult:
        """Like :meth:`deserialize` but report failures as a BindingResult."""
        try:
            return BindingResult.success(self.deserialize(target, serialized))
        except BindingError as exc:
            return BindingResult.failure(exc)

    def serialize(self, graph: Any) -> str:
        """Always fails: HTML serialization is not supported."""
        raise UnsupportedOperationError("HTML serialization is not supported")

    @classmethod
    def from_settings(cls, settings: HtmlBindSettings) -> HtmlSerializer:
        """Build a serializer with its own resolver and plugin leaf binders.

        Plugins are discovered only when ``settings.plugins.enabled``.
        """
        resolver = BinderResolver(date_formats=settings.binding.date_formats)
        if settings.plugins.enabled:
            from htmlbind.plugins.manager import PluginManager

            manager = PluginManager(blocked=settings.plugins.disabled)
            manager.discover_and_load()
            manager.apply_leaf_binders(resolver)
        return cls(settings, resolver=resolver)
