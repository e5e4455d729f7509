"""Error taxonomy for HTML binding.

Every failure raised by the binding engine is a :class:`BindingError`.
Errors raised deep in a nested graph bubble up through composite and
collection binders, which prepend the field name or positional index, so
the final ``path`` locates the offending markup from the root
(e.g. ``children[1].first_name``).
"""

from __future__ import annotations

from typing import Any


class BindingError(Exception):
    """Base class for all binding failures.

    Attributes:
        code: Stable machine-readable error code.
        segments: Field names (``str``) and sequence indexes (``int``)
            from the root type down to the failing value.
    """

    code = "binding_error"

    def __init__(self, message: str, *, segments: tuple[str | int, ...] = ()) -> None:
        super().__init__(message)
        self.message = message
        self.segments: tuple[str | int, ...] = segments

    @property
    def path(self) -> str:
        """Render ``segments`` as a dotted path with ``[n]`` indexes."""
        out = ""
        for segment in self.segments:
            if isinstance(segment, int):
                out += f"[{segment}]"
            elif out:
                out += f".{segment}"
            else:
                out = segment
        return out

    def prepend(self, segment: str | int) -> None:
        """Record that this error occurred beneath *segment*."""
        self.segments = (segment, *self.segments)

    def detail(self) -> dict[str, Any]:
        """Extra structured context for result payloads."""
        return {}

    def __str__(self) -> str:
        if self.segments:
            return f"{self.message} (at {self.path})"
        return self.message


class NullInputError(BindingError, ValueError):
    """Markup input was ``None``."""

    code = "null_input"


class ParseError(BindingError, ValueError):
    """Markup could not be parsed into a document tree."""

    code = "parse_failure"


class ConstructorNotFoundError(BindingError, TypeError):
    """A composite target type cannot be instantiated without arguments."""

    code = "constructor_not_found"

    def __init__(self, target_type: Any, *, segments: tuple[str | int, ...] = ()) -> None:
        name = getattr(target_type, "__qualname__", repr(target_type))
        super().__init__(
            f"{name} has no parameterless constructor",
            segments=segments,
        )
        self.target_type = target_type

    def detail(self) -> dict[str, Any]:
        return {"target_type": getattr(self.target_type, "__qualname__", repr(self.target_type))}


class ValueConversionError(BindingError, ValueError):
    """Element content could not be converted to the declared leaf type."""

    code = "value_conversion"

    def __init__(
        self,
        raw_text: str | None,
        target_type: Any,
        *,
        reason: str | None = None,
        segments: tuple[str | int, ...] = (),
    ) -> None:
        name = getattr(target_type, "__name__", repr(target_type))
        message = f"cannot convert {raw_text!r} to {name}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, segments=segments)
        self.raw_text = raw_text
        self.target_type = target_type

    def detail(self) -> dict[str, Any]:
        return {
            "raw_text": self.raw_text,
            "target_type": getattr(self.target_type, "__name__", repr(self.target_type)),
        }


class UnsupportedTypeError(BindingError, TypeError):
    """A declared type has no binding strategy."""

    code = "unsupported_type"


class UnsupportedOperationError(BindingError, NotImplementedError):
    """The requested operation is not available for this format."""

    code = "unsupported_operation"
