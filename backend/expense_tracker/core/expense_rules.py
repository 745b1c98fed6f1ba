"""Expense Rule Sets - the field rules each mutating request must satisfy.

Invariants:
    - CREATE: amount > 0 and fits the storage column; currency required, 3 chars;
      category required, <= 50 chars; description <= 250 chars;
      date not in the future and within the last 5 years
    - UPDATE: CREATE rules plus non-empty user_id and expense_id
    - DELETE: non-empty user_id and expense_id
    - Queries carry no rule set
"""

from expense_tracker.core.domain_types import (
    CATEGORY_MAX_LENGTH,
    CURRENCY_CODE_LENGTH,
    DESCRIPTION_MAX_LENGTH,
    MAX_EXPENSE_AGE_YEARS,
    amount_fits_storage,
)
from expense_tracker.core.validation import (
    RuleSet,
    exact_length,
    greater_than,
    max_length,
    not_empty,
    not_empty_id,
    not_in_future,
    satisfies,
    within_years,
)


AMOUNT_TOO_LARGE = "Amount is too large."


def _expense_field_rules(amount_message: str) -> RuleSet:
    return RuleSet(
        greater_than("amount", 0, amount_message),
        satisfies("amount", amount_fits_storage, AMOUNT_TOO_LARGE),
        not_empty("currency", "Currency is required."),
        exact_length(
            "currency", CURRENCY_CODE_LENGTH,
            "Currency must be a 3-letter code.",
        ),
        not_empty("category", "Category is required."),
        max_length(
            "category", CATEGORY_MAX_LENGTH,
            f"Category must be {CATEGORY_MAX_LENGTH} characters or fewer.",
        ),
        max_length(
            "description", DESCRIPTION_MAX_LENGTH,
            f"Description must be {DESCRIPTION_MAX_LENGTH} characters or fewer.",
        ),
        not_in_future("date", "Date cannot be in the future."),
        within_years(
            "date", MAX_EXPENSE_AGE_YEARS,
            f"Date must be within the last {MAX_EXPENSE_AGE_YEARS} years.",
        ),
    )


_OWNERSHIP_RULES = RuleSet(
    not_empty_id("user_id", "UserId is required."),
    not_empty_id("expense_id", "ExpenseId is required."),
)

CREATE_EXPENSE_RULES = _expense_field_rules("Amount must be greater than zero.")

# Route binding makes empty ids unreachable over HTTP; the checks still guard direct dispatch
UPDATE_EXPENSE_RULES = _OWNERSHIP_RULES + _expense_field_rules(
    "Amount must be a positive number.",
)

DELETE_EXPENSE_RULES = _OWNERSHIP_RULES
