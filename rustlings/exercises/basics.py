"""Basic exercises: functions, conditionals and optional values."""

from __future__ import annotations


def is_even(num: int) -> bool:
    """Whether the number is even."""
    return num % 2 == 0


def sale_price(price: int) -> int:
    """Ten off an even price, three off an odd one."""
    return price - 10 if is_even(price) else price - 3


def square(num: int) -> int:
    return num * num


def bigger(a: int, b: int) -> int:
    """The larger of two numbers."""
    return a if a > b else b


def foo_if_fizz(fizzish: str) -> str:
    """"foo" for "fizz", "bar" for "fuzz", "baz" for anything else."""
    if fizzish == "fizz":
        return "foo"
    if fizzish == "fuzz":
        return "bar"
    return "baz"


def maybe_icecream(time_of_day: int) -> int | None:
    """Ice creams left at the given hour; None for an hour past 23."""
    if time_of_day < 0:
        raise ValueError("time of day must not be negative")
    if time_of_day < 22:
        return 5
    if time_of_day < 24:
        return 0
    return None