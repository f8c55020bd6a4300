"""Iterator exercises: capitalisation, division results, factorials and progress counts."""

from __future__ import annotations

import math
from enum import Enum
from typing import Iterable, Mapping

_U64_MAX = 2**64 - 1
_NUMBERS = (27, 297, 38502, 81)


def capitalize_first(text: str) -> str:
    """Upper-case the first character of the text."""
    if not text:
        return ""
    return text[0].upper() + text[1:]


def capitalize_words_vector(words: Iterable[str]) -> list[str]:
    """Capitalise every word."""
    return [capitalize_first(word) for word in words]


def capitalize_words_string(words: Iterable[str]) -> str:
    """Capitalise the non-blank words and join them with spaces."""
    return " ".join(capitalize_first(word) for word in words if word.strip())


class DivisionError(ArithmeticError):
    """A division could not give a whole result."""


class NotDivisibleError(DivisionError):
    """The dividend is not a multiple of the divisor."""

    def __init__(self, dividend: int, divisor: int) -> None:
        super().__init__(f"{dividend} is not divisible by {divisor}")
        self.dividend = dividend
        self.divisor = divisor

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NotDivisibleError):
            return NotImplemented
        return (self.dividend, self.divisor) == (other.dividend, other.divisor)

    def __hash__(self) -> int:
        return hash((self.dividend, self.divisor))


class DivideByZeroError(DivisionError):
    """The divisor is zero."""

    def __init__(self) -> None:
        super().__init__("division by zero")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DivideByZeroError):
            return NotImplemented
        return True

    def __hash__(self) -> int:
        return hash(DivideByZeroError)


def divide(a: int, b: int) -> int:
    """Divide a by b when a is a whole multiple of b."""
    if b == 0:
        raise DivideByZeroError()
    if a % b == 0:
        return a // b
    raise NotDivisibleError(a, b)


def result_with_list() -> list[int]:
    """Divide each number by 27; raise at the first division that fails."""
    return [divide(n, 27) for n in _NUMBERS]


def _try_divide(a: int, b: int) -> int | DivisionError:
    try:
        return divide(a, b)
    except DivisionError as exc:
        return exc


def list_of_results() -> list[int | DivisionError]:
    """Divide each number by 27, keeping each quotient or error."""
    return [_try_divide(n, 27) for n in _NUMBERS]


def factorial(num: int) -> int:
    """Factorial of a non-negative integer that fits in 64 unsigned bits."""
    if num < 0:
        raise ValueError("factorial of a negative number")
    result = math.prod(range(2, num + 1))
    if result > _U64_MAX:
        raise OverflowError("attempt to multiply with overflow")
    return result


class Progress(Enum):
    NONE = "none"
    SOME = "some"
    COMPLETE = "complete"


def count_iterator(progress_map: Mapping[str, Progress], value: Progress) -> int:
    """How many exercises in the map have the given progress."""
    return sum(1 for progress in progress_map.values() if progress == value)


def count_collection_iterator(
    collection: Iterable[Mapping[str, Progress]], value: Progress
) -> int:
    """How many exercises across all the maps have the given progress."""
    return sum(count_iterator(progress_map, value) for progress_map in collection)