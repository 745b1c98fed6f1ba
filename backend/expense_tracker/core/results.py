"""Handler Results - tagged outcome of every command and query handler.

Invariants:
    - A handler returns exactly one of Success(value) or Failure(message)
    - Expected business conditions (not-found) are Failures, never exceptions
    - Both variants are immutable

Design Decisions:
    - Two frozen dataclasses + a union alias instead of one class with a bool flag:
      `match` / isinstance on the tag is the only way to read a value
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")

EXPENSE_NOT_FOUND = "Expense not found."


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T = None


@dataclass(frozen=True)
class Failure:
    message: str


Result = Union[Success[T], Failure]


def is_success(result: "Result") -> bool:
    return isinstance(result, Success)
