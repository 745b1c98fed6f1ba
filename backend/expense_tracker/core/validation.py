"""Rule Combinators - declarative (field, predicate, message) rules aggregated into rule sets.

Invariants:
    - All functions are PURE: no IO, no side effects; "now" is passed in explicitly
    - RuleSet.validate evaluates EVERY rule (no short-circuit across or within fields)
    - Failures are returned in rule declaration order

Design Decisions:
    - Predicates receive (value, now) so time-relative rules stay deterministic under test
    - Predicates never raise for None: builders treat None as "absent" explicitly
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable

from expense_tracker.core.domain_types import as_utc, is_empty_id, years_before
from expense_tracker.core.errors import FieldFailure

Predicate = Callable[[Any, datetime], bool]


@dataclass(frozen=True)
class Rule:
    """A single field predicate with the message reported when it fails."""
    field: str
    predicate: Predicate
    message: str

    def check(self, request: object, now: datetime) -> FieldFailure | None:
        value = getattr(request, self.field, None)
        if self.predicate(value, now):
            return None
        return FieldFailure(self.field, self.message)


class RuleSet:
    """Ordered collection of rules for one request type."""

    def __init__(self, *rules: Rule):
        self.rules: tuple[Rule, ...] = rules

    def __add__(self, other: "RuleSet") -> "RuleSet":
        return RuleSet(*self.rules, *other.rules)

    def __len__(self) -> int:
        return len(self.rules)

    def validate(self, request: object, now: datetime) -> list[FieldFailure]:
        """Run every rule; return all failures (empty list = valid)."""
        failures = []
        for rule in self.rules:
            failure = rule.check(request, now)
            if failure is not None:
                failures.append(failure)
        return failures


# ─── Rule builders ───────────────────────────────────────────────

def greater_than(field: str, bound, message: str) -> Rule:
    # Decimal NaN raises on ordering comparisons
    def _check(v, _now):
        if v is None or (isinstance(v, Decimal) and v.is_nan()):
            return False
        return v > bound
    return Rule(field, _check, message)


def not_empty(field: str, message: str) -> Rule:
    """Non-None, and non-blank for strings."""
    def _check(v, _now):
        if isinstance(v, str):
            return bool(v.strip())
        return v is not None
    return Rule(field, _check, message)


def not_empty_id(field: str, message: str) -> Rule:
    return Rule(field, lambda v, _now: not is_empty_id(v), message)


def exact_length(field: str, length: int, message: str) -> Rule:
    # Absent values are left to not_empty
    return Rule(field, lambda v, _now: v is None or len(v) == length, message)


def max_length(field: str, limit: int, message: str) -> Rule:
    return Rule(field, lambda v, _now: v is None or len(v) <= limit, message)


def not_in_future(field: str, message: str) -> Rule:
    return Rule(
        field, lambda v, now: v is not None and as_utc(v) <= now, message,
    )


def within_years(field: str, years: int, message: str) -> Rule:
    """Value strictly after `now - years` (calendar years)."""
    return Rule(
        field,
        lambda v, now: v is not None and as_utc(v) > years_before(now, years),
        message,
    )


def satisfies(field: str, check: Callable[[Any], bool], message: str) -> Rule:
    """Wrap a plain value check; absent values are left to other rules."""
    return Rule(field, lambda v, _now: v is None or check(v), message)
