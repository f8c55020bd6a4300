"""Error-handling exercises: name tags, token costs and positive integers."""

from __future__ import annotations

import re
from dataclasses import dataclass

_INTEGER = re.compile(r"[+-]?[0-9]+")
_I32 = 32
_I64 = 64


def _parse_int(text: str, bits: int) -> int:
    """Parse a signed integer of the given width, as strictly as a typed parse."""
    if not text:
        raise ValueError("cannot parse integer from empty string")
    if not _INTEGER.fullmatch(text):
        raise ValueError("invalid digit found in string")
    value = int(text)
    if value >= 2 ** (bits - 1):
        raise ValueError("number too large to fit in target type")
    if value < -(2 ** (bits - 1)):
        raise ValueError("number too small to fit in target type")
    return value


def generate_nametag_text(name: str) -> str:
    """Text for a name tag; an empty name is refused."""
    if not name:
        raise ValueError("`name` was empty; it must be nonempty.")
    return f"Hi! My name is {name}"


def total_cost(item_quantity: str) -> int:
    """Five tokens per item plus a processing fee of one token."""
    processing_fee = 1
    cost_per_item = 5
    quantity = _parse_int(item_quantity, _I32)
    cost = quantity * cost_per_item + processing_fee
    if not -(2 ** 31) <= cost < 2 ** 31:
        raise OverflowError("attempt to multiply with overflow")
    return cost


def purchase(tokens: int, item_quantity: str) -> str:
    """Describe the outcome of buying the requested quantity with the given tokens."""
    cost = total_cost(item_quantity)
    if cost > tokens:
        return "You can't afford that many!"
    return f"You now have {tokens - cost} tokens."


class CreationError(ValueError):
    """A value could not become a positive non-zero integer."""

    _DESCRIPTIONS = {"negative": "number is negative", "zero": "number is zero"}

    def __init__(self, reason: str) -> None:
        if reason not in self._DESCRIPTIONS:
            raise ValueError(f"unknown reason: {reason!r}")
        super().__init__(self._DESCRIPTIONS[reason])
        self.reason = reason

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CreationError):
            return NotImplemented
        return self.reason == other.reason

    def __hash__(self) -> int:
        return hash(self.reason)


@dataclass(frozen=True)
class PositiveNonzeroInteger:
    value: int

    @classmethod
    def new(cls, value: int) -> "PositiveNonzeroInteger":
        """Wrap the value; raise CreationError if it is negative or zero."""
        if value < 0:
            raise CreationError("negative")
        if value == 0:
            raise CreationError("zero")
        return cls(value)


class ParsePosNonzeroError(ValueError):
    """Text could not be parsed as a positive non-zero integer."""

    def __init__(self, cause: ValueError) -> None:
        super().__init__(str(cause))
        self.cause = cause


def parse_pos_nonzero(text: str) -> PositiveNonzeroInteger:
    """Parse text as a positive non-zero integer."""
    try:
        value = _parse_int(text, _I64)
    except ValueError as exc:
        raise ParsePosNonzeroError(exc) from exc
    try:
        return PositiveNonzeroInteger.new(value)
    except CreationError as exc:
        raise ParsePosNonzeroError(exc) from exc