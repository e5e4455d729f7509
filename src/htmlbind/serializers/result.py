"""BindingResult and BindingFailure: the non-raising deserialize contract.

INVARIANT: ``ok`` is True exactly when ``error`` is None.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from htmlbind.domain.errors import BindingError


class BindingFailure(BaseModel):
    """Structured error payload within a BindingResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    path: str = ""
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_error(cls, exc: BindingError) -> BindingFailure:
        return cls(code=exc.code, message=exc.message, path=exc.path, detail=exc.detail())


class BindingResult(BaseModel):
    """Outcome of one deserialize call.

    Attributes:
        ok: Whether binding succeeded.
        value: The populated object graph on success.
        error: Structured failure if ``ok`` is False.
    """

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    ok: bool
    value: Any = None
    error: BindingFailure | None = None

    @classmethod
    def success(cls, value: Any) -> BindingResult:
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, exc: BindingError) -> BindingResult:
        return cls(ok=False, error=BindingFailure.from_error(exc))
