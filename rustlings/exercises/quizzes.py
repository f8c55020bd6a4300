"""Quiz solutions: apple prices, a string transformer and report cards."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Generic, Iterable, TypeVar

T = TypeVar("T")


def calculate_price_of_apples(quantity: int) -> int:
    """Two per apple, or one per apple when buying more than 40."""
    return quantity if quantity > 40 else quantity * 2


class CommandKind(Enum):
    UPPERCASE = "uppercase"
    TRIM = "trim"
    APPEND = "append"


@dataclass(frozen=True)
class Command:
    """An operation to apply to a string."""

    kind: CommandKind
    times: int = 0

    def __post_init__(self) -> None:
        if self.times < 0:
            raise ValueError("times must not be negative")

    @classmethod
    def uppercase(cls) -> "Command":
        return cls(CommandKind.UPPERCASE)

    @classmethod
    def trim(cls) -> "Command":
        return cls(CommandKind.TRIM)

    @classmethod
    def append(cls, times: int) -> "Command":
        return cls(CommandKind.APPEND, times)


def transformer(items: Iterable[tuple[str, Command]]) -> list[str]:
    """Apply each command to its string."""
    output = []
    for text, command in items:
        match command.kind:
            case CommandKind.UPPERCASE:
                output.append(text.upper())
            case CommandKind.TRIM:
                output.append(text.strip())
            case CommandKind.APPEND:
                output.append(text + "bar" * command.times)
    return output


def _display(value: object) -> str:
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass
class ReportCard(Generic[T]):
    """A student's report card with a numeric or alphabetic grade."""

    grade: T
    student_name: str
    student_age: int

    def render(self) -> str:
        return (f"{self.student_name} ({self.student_age}) - "
                f"achieved a grade of {_display(self.grade)}")