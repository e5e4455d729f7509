"""Leaf binders: one element's text or attribute to one primitive value.

All parsing is culture-invariant. Numbers are plain ASCII decimal literals
with an optional sign, fraction and exponent. Booleans are ``true``/``false``
in any case. Dates try ISO 8601 before the configured ``strptime``
patterns. Malformed input always surfaces as :class:`ValueConversionError`.
"""

from __future__ import annotations

import re
from abc import abstractmethod
from collections.abc import Iterable
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Any

from htmlbind.binding.base import Binder
from htmlbind.domain.errors import ValueConversionError
from htmlbind.domain.types import BinderKind, BindingBehavior

if TYPE_CHECKING:
    from htmlbind.binding.specs import FieldBindingSpec
    from htmlbind.infrastructure.document import ScopedElement


# ASCII-only grammars: no digit separators, no non-ASCII digits, no nan or infinity.
_INTEGER = re.compile(r"[+-]?[0-9]+")
_REAL = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def _numeric_text(raw: str, pattern: re.Pattern[str], kind: str) -> str:
    text = raw.strip()
    if pattern.fullmatch(text) is None:
        raise ValueError(f"not an invariant {kind} literal")
    return text


class LeafBinder(Binder):
    """Base class for primitive binders.

    Subclasses implement :meth:`parse`; it may raise ``ValueError``,
    ``TypeError``, or ``ArithmeticError`` and :meth:`convert` turns those
    into :class:`ValueConversionError`. Plugins extend the leaf set by
    subclassing this.
    """

    kind = BinderKind.LEAF

    @abstractmethod
    def parse(self, raw: str) -> Any:
        """Convert *raw* to ``target``."""

    def convert(self, raw: str) -> Any:
        try:
            return self.parse(raw)
        except ValueConversionError:
            raise
        except (ValueError, TypeError, ArithmeticError) as exc:
            raise ValueConversionError(raw, self.target, reason=str(exc) or None) from exc

    def extract(self, scope: ScopedElement, spec: FieldBindingSpec | None) -> str | None:
        """Pull the raw content for this leaf out of *scope*."""
        if spec is None:
            return scope.content(BindingBehavior.TEXT)
        return scope.content(spec.behavior, attribute=spec.attribute, strip=spec.strip)

    def bind(self, scope: ScopedElement, spec: FieldBindingSpec | None = None) -> Any:
        raw = self.extract(scope, spec)
        if raw is None:
            attribute = spec.attribute if spec is not None else None
            raise ValueConversionError(
                None,
                self.target,
                reason=f"attribute {attribute or 'value'!r} is missing",
            )
        return self.convert(raw)


class StringBinder(LeafBinder):
    def __init__(self) -> None:
        super().__init__(str)

    def parse(self, raw: str) -> str:
        return raw


class IntBinder(LeafBinder):
    def __init__(self) -> None:
        super().__init__(int)

    def parse(self, raw: str) -> int:
        return int(_numeric_text(raw, _INTEGER, "integer"))


class FloatBinder(LeafBinder):
    def __init__(self) -> None:
        super().__init__(float)

    def parse(self, raw: str) -> float:
        return float(_numeric_text(raw, _REAL, "number"))


class DecimalBinder(LeafBinder):
    def __init__(self) -> None:
        super().__init__(Decimal)

    def parse(self, raw: str) -> Decimal:
        return Decimal(_numeric_text(raw, _REAL, "number"))


class BoolBinder(LeafBinder):
    """Accepts ``true``/``false`` only, ignoring case and whitespace."""

    def __init__(self) -> None:
        super().__init__(bool)

    def parse(self, raw: str) -> bool:
        token = raw.strip().lower()
        if token == "true":
            return True
        if token == "false":
            return False
        raise ValueError("expected 'true' or 'false'")


class TemporalBinder(LeafBinder):
    """Binder for ``datetime``, ``date``, and ``time``.

    ISO 8601 is tried first, then each ``strptime`` pattern in *formats*.
    """

    def __init__(self, target: type, formats: Iterable[str] = ()) -> None:
        if target not in (datetime, date, time):
            raise TypeError(f"TemporalBinder does not support {target!r}")
        super().__init__(target)
        self.formats = tuple(formats)

    def parse(self, raw: str) -> datetime | date | time:
        text = raw.strip()
        try:
            return self.target.fromisoformat(text)
        except ValueError:
            pass
        for fmt in self.formats:
            try:
                parsed = datetime.strptime(text, fmt)
            except ValueError:
                continue
            if self.target is date:
                return parsed.date()
            if self.target is time:
                return parsed.time()
            return parsed
        raise ValueError(f"not an ISO 8601 {self.target.__name__} or a configured format")


class EnumBinder(LeafBinder):
    """Matches a member by name, then by the string form of its value."""

    def __init__(self, target: type[Enum]) -> None:
        super().__init__(target)

    def parse(self, raw: str) -> Enum:
        token = raw.strip()
        members = self.target.__members__
        if token in members:
            return members[token]
        for member in self.target:
            if str(member.value) == token:
                return member
        raise ValueError(f"no {self.target.__name__} member named or valued {token!r}")


def default_leaf_binders(date_formats: Iterable[str] = ()) -> dict[type, LeafBinder]:
    """Built-in leaf binders keyed by exact target type."""
    formats = tuple(date_formats)
    return {
        str: StringBinder(),
        int: IntBinder(),
        float: FloatBinder(),
        Decimal: DecimalBinder(),
        bool: BoolBinder(),
        datetime: TemporalBinder(datetime, formats),
        date: TemporalBinder(date, formats),
        time: TemporalBinder(time, formats),
    }
