"""Result type: success or failure as a value.

The validator chains rule groups with `flat_map` (first failure wins) and the
dispatcher hands back `Result[str, ToolError]` instead of raising.

    >>> Ok(3).flat_map(lambda x: Ok(x + 1) if x > 0 else Err("negative"))
    Ok(4)
    >>> Err("bad").flat_map(lambda x: Ok(x + 1))
    Err('bad')
"""

from __future__ import annotations

from typing import Callable, Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")


class Result(Generic[T, E]):
    """Either Ok(value) or Err(error). Build with `Ok`/`Err`, not directly."""

    __slots__ = ("_value", "_ok")

    def __init__(self, value: T | E, ok: bool) -> None:
        self._value = value
        self._ok = ok

    def is_ok(self) -> bool:
        return self._ok

    def is_err(self) -> bool:
        return not self._ok

    def unwrap(self) -> T:
        """The Ok value. Raises RuntimeError on Err."""
        if not self._ok:
            raise RuntimeError(f"unwrap() on Err: {self._value!r}")
        return self._value  # type: ignore[return-value]

    def unwrap_err(self) -> E:
        """The Err value. Raises RuntimeError on Ok."""
        if self._ok:
            raise RuntimeError(f"unwrap_err() on Ok: {self._value!r}")
        return self._value  # type: ignore[return-value]

    def flat_map(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Feed the Ok value to `f`; an Err passes through untouched."""
        return f(self._value) if self._ok else self  # type: ignore[arg-type, return-value]

    def match(self, *, ok: Callable[[T], U], err: Callable[[E], U]) -> U:
        return ok(self._value) if self._ok else err(self._value)  # type: ignore[arg-type]

    def inspect_err(self, f: Callable[[E], object]) -> Result[T, E]:
        """Call `f` on the Err value for its side effect; returns self."""
        if not self._ok:
            f(self._value)  # type: ignore[arg-type]
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Result):
            return NotImplemented
        return self._ok == other._ok and self._value == other._value

    def __repr__(self) -> str:
        return f"{'Ok' if self._ok else 'Err'}({self._value!r})"


def Ok(value: T) -> Result[T, E]:  # noqa: N802
    return Result(value, True)


def Err(error: E) -> Result[T, E]:  # noqa: N802
    return Result(error, False)
