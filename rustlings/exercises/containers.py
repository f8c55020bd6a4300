"""Container exercises: lists, wrappers, cons lists, copy-on-write and lifetimes."""

from __future__ import annotations

from collections.abc import MutableSequence, Sequence
from dataclasses import dataclass
from typing import Generic, Iterator, TypeVar, Union, overload

T = TypeVar("T")


def array_and_vec() -> tuple[tuple[int, ...], list[int]]:
    """A fixed array and a list holding the same elements."""
    array = (10, 20, 30, 40)
    return array, list(array)


def vec_loop(values: list[int]) -> list[int]:
    """Double every element in place and return the same list."""
    values[:] = [value * 2 for value in values]
    return values


def vec_map(values: Sequence[int]) -> list[int]:
    """A new list with every element doubled."""
    return [value * 2 for value in values]


@dataclass
class Wrapper(Generic[T]):
    """Holds a value of any type."""

    value: T


@dataclass(frozen=True)
class Nil:
    """The end of a cons list."""


@dataclass(frozen=True)
class Cons:
    """A cons list cell: a value and the rest of the list."""

    value: int
    rest: Union["Cons", Nil]


def create_empty_list() -> Nil:
    return Nil()


def create_non_empty_list() -> Cons:
    return Cons(1, Nil())


class Cow(Sequence, Generic[T]):
    """A sequence that borrows its data until it first has to change it."""

    def __init__(self, data: Sequence[T], owned: bool) -> None:
        self._data = data
        self._owned = owned

    @classmethod
    def borrowed(cls, values: Sequence[T]) -> "Cow[T]":
        """Wrap the values without copying them."""
        return cls(values, owned=False)

    @classmethod
    def owned(cls, values: Sequence[T]) -> "Cow[T]":
        """Take the values as owned data."""
        return cls(list(values), owned=True)

    @property
    def is_owned(self) -> bool:
        return self._owned

    @property
    def is_borrowed(self) -> bool:
        return not self._owned

    def to_mut(self) -> MutableSequence[T]:
        """Return mutable data, copying borrowed data first."""
        if not self._owned:
            self._data = list(self._data)
            self._owned = True
        return self._data  # type: ignore[return-value]

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[T]: ...

    def __getitem__(self, index):
        return self._data[index]

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[T]:
        return iter(self._data)

    def __repr__(self) -> str:
        kind = "Owned" if self._owned else "Borrowed"
        return f"{kind}({list(self._data)!r})"


def abs_all(cow: Cow[int]) -> Cow[int]:
    """Make every element non-negative, copying borrowed data only if needed."""
    for index, value in enumerate(list(cow)):
        if value < 0:
            cow.to_mut()[index] = -value
    return cow


def longest(x: str, y: str) -> str:
    """The longer of two strings by UTF-8 length; the second on a tie."""
    return x if len(x.encode("utf-8")) > len(y.encode("utf-8")) else y