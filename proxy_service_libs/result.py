"""Minimal Result[T, E] type for explicit success/failure returns."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E")

_UNSET = object()


@dataclass(frozen=True)
class Result(Generic[T, E]):
    """Success value or error, never both.

    Components return Result for expected failure modes so callers branch on
    ``is_ok``/``is_err`` instead of catching exceptions.
    """

    _value: object = _UNSET
    _error: object = _UNSET

    @classmethod
    def ok(cls, value: T) -> Result[T, E]:
        return cls(_value=value)

    @classmethod
    def err(cls, error: E) -> Result[T, E]:
        return cls(_error=error)

    @property
    def is_ok(self) -> bool:
        return self._error is _UNSET

    @property
    def is_err(self) -> bool:
        return not self.is_ok

    @property
    def value(self) -> T:
        if self.is_err:
            raise ValueError("Called value on Result.err")
        return self._value  # type: ignore[return-value]

    @property
    def error(self) -> E:
        if self.is_ok:
            raise ValueError("Called error on Result.ok")
        return self._error  # type: ignore[return-value]
