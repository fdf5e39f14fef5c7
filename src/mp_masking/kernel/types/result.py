"""Result[T, E] – Ok and Err variants plus the ``attempt`` adapter.

The engine uses these for its skip-and-continue flows (conditions that blow
up, converters that cannot parse a literal, subtree copies that fail) so that
only configuration errors travel as exceptions.
"""

from __future__ import annotations

from typing import Any, Callable, Generic, NoReturn, TypeVar

T = TypeVar("T")
E = TypeVar("E", bound=BaseException)


class Ok(Generic[T]):
    """Successful result variant."""

    __slots__ = ("_value",)

    def __init__(self, value: T) -> None:
        self._value = value

    @property
    def value(self) -> T:
        return self._value

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self._value

    def unwrap_or(self, default: T) -> T:  # noqa: ARG002
        return self._value

    def map(self, func: Callable[[T], Any]) -> "Ok[Any]":
        return Ok(func(self._value))

    def __repr__(self) -> str:
        return f"Ok({self._value!r})"


class Err(Generic[E]):
    """Error result variant."""

    __slots__ = ("_error",)

    def __init__(self, error: E) -> None:
        self._error = error

    @property
    def error(self) -> E:
        return self._error

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        raise self._error

    def unwrap_or(self, default: T) -> T:
        return default

    def map(self, func: Callable[[Any], Any]) -> "Err[E]":  # noqa: ARG002
        return self

    def __repr__(self) -> str:
        return f"Err({self._error!r})"


type Result[T, E] = Ok[T] | Err[E]


def attempt(
    func: Callable[..., T],
    *args: Any,
    reraise: tuple[type[BaseException], ...] = (),
    **kwargs: Any,
) -> Result[T, Exception]:
    """Call *func* and capture its outcome as a :data:`Result`.

    Exceptions listed in *reraise* are not captured; they propagate as-is.
    """
    try:
        return Ok(func(*args, **kwargs))
    except reraise:
        raise
    except Exception as exc:  # noqa: BLE001
        return Err(exc)


__all__ = ["Err", "Ok", "Result", "attempt"]
