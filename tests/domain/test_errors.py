"""Tests for the binding error taxonomy."""

from __future__ import annotations

from decimal import Decimal

import pytest

from htmlbind.domain.errors import (
    BindingError,
    ConstructorNotFoundError,
    NullInputError,
    ParseError,
    UnsupportedOperationError,
    UnsupportedTypeError,
    ValueConversionError,
)


class TestPath:
    def test_empty_path(self) -> None:
        exc = BindingError("boom")
        assert exc.path == ""
        assert str(exc) == "boom"

    def test_prepend_builds_dotted_path_with_indexes(self) -> None:
        exc = BindingError("boom")
        exc.prepend("first_name")
        exc.prepend(1)
        exc.prepend("children")
        assert exc.segments == ("children", 1, "first_name")
        assert exc.path == "children[1].first_name"
        assert str(exc) == "boom (at children[1].first_name)"

    def test_leading_index(self) -> None:
        exc = BindingError("boom", segments=(0, "name"))
        assert exc.path == "[0].name"


class TestTaxonomy:
    @pytest.mark.parametrize(
        ("error_cls", "builtin"),
        [
            (NullInputError, ValueError),
            (ParseError, ValueError),
            (ValueConversionError, ValueError),
            (ConstructorNotFoundError, TypeError),
            (UnsupportedTypeError, TypeError),
            (UnsupportedOperationError, NotImplementedError),
        ],
    )
    def test_builtin_bases(self, error_cls: type[BindingError], builtin: type) -> None:
        assert issubclass(error_cls, BindingError)
        assert issubclass(error_cls, builtin)

    def test_codes_are_distinct(self) -> None:
        codes = {
            cls.code
            for cls in (
                NullInputError,
                ParseError,
                ConstructorNotFoundError,
                ValueConversionError,
                UnsupportedTypeError,
                UnsupportedOperationError,
            )
        }
        assert len(codes) == 6

    def test_value_conversion_carries_context(self) -> None:
        exc = ValueConversionError("abc", Decimal, reason="bad digits")
        assert exc.raw_text == "abc"
        assert exc.target_type is Decimal
        assert exc.message == "cannot convert 'abc' to Decimal: bad digits"
        assert exc.detail() == {"raw_text": "abc", "target_type": "Decimal"}

    def test_constructor_not_found_names_type(self) -> None:
        class NeedsArgs:
            def __init__(self, x: int) -> None:
                self.x = x

        exc = ConstructorNotFoundError(NeedsArgs)
        assert "NeedsArgs" in exc.message
        assert exc.detail()["target_type"].endswith("NeedsArgs")
