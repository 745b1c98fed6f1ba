"""Expense Repository - owner scoping, staging without commit, detached reads.

Invariants:
    - get_by_owner returns only that owner's rows, detached from the session
    - get_by_id returns None for missing ids AND for another owner's expense
    - add() assigns an id when empty and stages (no commit)
    - delete() stages removal; the row disappears only after commit
"""

import uuid
from decimal import Decimal

import pytest

from expense_tracker.core.domain_types import EMPTY_ID
from expense_tracker.infrastructure.expense_repository import SqlAlchemyExpenseRepository
from expense_tracker.models.expense import Expense


async def test_get_by_owner_returns_only_that_owners_expenses(test_db, expense_factory):
    user_id, other_user_id = uuid.uuid4(), uuid.uuid4()
    e1 = expense_factory(user_id=user_id, amount=Decimal("10.00"), category="Food")
    e2 = expense_factory(user_id=user_id, amount=Decimal("20.00"), category="Transport")
    e3 = expense_factory(user_id=other_user_id, amount=Decimal("30.00"), category="Other")
    test_db.add_all([e1, e2, e3])
    await test_db.commit()
    test_db.expunge_all()

    repository = SqlAlchemyExpenseRepository(test_db)
    result = await repository.get_by_owner(user_id)

    assert len(result) == 2
    assert all(e.user_id == user_id for e in result)
    assert {e.id for e in result} == {e1.id, e2.id}
    # Detached: the session tracks none of the returned entities
    assert all(e not in test_db for e in result)


async def test_get_by_owner_empty_for_unknown_owner(test_db):
    repository = SqlAlchemyExpenseRepository(test_db)
    assert await repository.get_by_owner(uuid.uuid4()) == []


async def test_get_by_id_returns_expense_for_owner(test_db, expense_factory):
    user_id = uuid.uuid4()
    expense = expense_factory(
        user_id=user_id, amount=Decimal("99.99"), category="Bills",
        description="Hydro bill",
    )
    test_db.add(expense)
    await test_db.commit()
    test_db.expunge_all()

    repository = SqlAlchemyExpenseRepository(test_db)
    result = await repository.get_by_id(user_id, expense.id)

    assert result is not None
    assert result.id == expense.id
    assert result.user_id == user_id
    assert result.amount == Decimal("99.99")
    assert result.category == "Bills"
    assert result.description == "Hydro bill"


async def test_get_by_id_returns_none_when_missing(test_db):
    repository = SqlAlchemyExpenseRepository(test_db)
    assert await repository.get_by_id(uuid.uuid4(), uuid.uuid4()) is None


async def test_get_by_id_returns_none_for_other_owner(test_db, expense_factory):
    owner, intruder = uuid.uuid4(), uuid.uuid4()
    expense = expense_factory(user_id=owner)
    test_db.add(expense)
    await test_db.commit()

    repository = SqlAlchemyExpenseRepository(test_db)
    assert await repository.get_by_id(intruder, expense.id) is None


@pytest.mark.parametrize("empty_id", [None, EMPTY_ID])
async def test_add_assigns_id_and_stages_without_commit(test_db, expense_factory, empty_id):
    expense = expense_factory(id=empty_id, amount=Decimal("50.00"), category="Groceries")
    repository = SqlAlchemyExpenseRepository(test_db)

    returned_id = await repository.add(expense)

    assert returned_id is not None
    assert returned_id != EMPTY_ID
    assert expense.id == returned_id
    assert expense in test_db.new

    await test_db.commit()
    assert await test_db.get(Expense, returned_id) is not None


async def test_add_keeps_existing_id(test_db, expense_factory):
    fixed = uuid.uuid4()
    repository = SqlAlchemyExpenseRepository(test_db)
    assert await repository.add(expense_factory(id=fixed)) == fixed


async def test_add_rejects_none(test_db):
    repository = SqlAlchemyExpenseRepository(test_db)
    with pytest.raises(ValueError):
        await repository.add(None)


async def test_delete_stages_removal_until_commit(test_db, expense_factory):
    expense = expense_factory(category="Fun", description="Movie tickets")
    test_db.add(expense)
    await test_db.commit()

    repository = SqlAlchemyExpenseRepository(test_db)
    await repository.delete(expense)

    assert expense in test_db.deleted

    await test_db.commit()
    test_db.expunge_all()
    assert await test_db.get(Expense, expense.id) is None
