"""Unit of Work - audit stamping and single-commit semantics.

Invariants:
    - New entities: created_at == updated_at == clock() at commit
    - Modified entities: updated_at refreshed, created_at untouched
    - Staged changes are invisible to other sessions until save_changes()
"""

from datetime import datetime, timezone

from sqlalchemy import func, select

from expense_tracker.infrastructure.unit_of_work import SqlAlchemyUnitOfWork
from expense_tracker.models.expense import Expense

T1 = datetime(2026, 10, 1, 9, 0, tzinfo=timezone.utc)
T2 = datetime(2026, 10, 2, 9, 0, tzinfo=timezone.utc)


class _Clock:
    def __init__(self, *moments):
        self._moments = list(moments)

    def __call__(self) -> datetime:
        return self._moments.pop(0)


async def _count(session_factory) -> int:
    async with session_factory() as other:
        return (await other.execute(select(func.count(Expense.id)))).scalar_one()


async def test_new_entities_get_equal_created_and_updated(test_db, expense_factory):
    expense = expense_factory()
    test_db.add(expense)

    await SqlAlchemyUnitOfWork(test_db, _Clock(T1)).save_changes()

    assert expense.created_at == T1
    assert expense.updated_at == T1


async def test_modified_entities_refresh_updated_only(test_db, expense_factory):
    expense = expense_factory()
    test_db.add(expense)
    uow = SqlAlchemyUnitOfWork(test_db, _Clock(T1, T2))
    await uow.save_changes()

    expense.category = "Travel"
    await uow.save_changes()

    assert expense.created_at == T1
    assert expense.updated_at == T2
    assert expense.updated_at >= expense.created_at


async def test_changes_not_visible_before_save(
    test_db, test_session_factory, expense_factory,
):
    test_db.add(expense_factory())
    assert await _count(test_session_factory) == 0

    await SqlAlchemyUnitOfWork(test_db).save_changes()
    assert await _count(test_session_factory) == 1


async def test_save_commits_all_staged_changes_together(
    test_db, test_session_factory, expense_factory,
):
    keep = expense_factory()
    drop = expense_factory()
    test_db.add_all([keep, drop])
    await SqlAlchemyUnitOfWork(test_db).save_changes()

    await test_db.delete(drop)
    test_db.add(expense_factory())
    keep.amount = keep.amount + 1
    assert await _count(test_session_factory) == 2

    await SqlAlchemyUnitOfWork(test_db).save_changes()
    assert await _count(test_session_factory) == 2
