"""Expense Routes - owner-scoped CRUD over /api/v1/users/{user_id}/expenses.

Invariants:
    - Routes build request objects and delegate to RequestDispatch; no business logic here
    - Failure results map to 404 via ResourceNotFoundError; validation failures raise
      CommandValidationError inside dispatch and map to 400 in api/error_handlers.py
    - POST returns 201 + Location of the get-one route; PUT/DELETE return 204 with no body
    - PUT rejects a non-nil body id that differs from the route id (400)
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from expense_tracker.core.domain_types import ExpenseId, UserId, is_empty_id
from expense_tracker.core.errors import ResourceNotFoundError, RouteMismatchError
from expense_tracker.core.requests import (
    DeleteExpenseCommand, GetExpenseByIdQuery, GetExpensesByUserQuery,
)
from expense_tracker.core.results import Result, is_success
from expense_tracker.infrastructure.database import get_db
from expense_tracker.schemas.expense import ExpenseCreate, ExpenseResponse, ExpenseUpdate
from expense_tracker.services.request_dispatch import RequestDispatch

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/users/{user_id}/expenses", tags=["expenses"])


async def get_dispatch(db: AsyncSession = Depends(get_db)) -> RequestDispatch:
    return RequestDispatch(db)


def unwrap(result: Result):
    """Return the Success value or raise the 404 for a Failure."""
    if not is_success(result):
        raise ResourceNotFoundError(result.message)
    return result.value


@router.get("", response_model=list[ExpenseResponse])
async def list_expenses(
    user_id: UUID, dispatch: RequestDispatch = Depends(get_dispatch),
):
    """All expenses owned by user_id."""
    return unwrap(await dispatch.send(GetExpensesByUserQuery(UserId(user_id))))


@router.get(
    "/{expense_id}", response_model=ExpenseResponse, name="get_expense",
)
async def get_expense(
    user_id: UUID, expense_id: UUID,
    dispatch: RequestDispatch = Depends(get_dispatch),
):
    """One expense, if owned by user_id."""
    return unwrap(await dispatch.send(
        GetExpenseByIdQuery(UserId(user_id), ExpenseId(expense_id)),
    ))


@router.post(
    "", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED,
)
async def create_expense(
    user_id: UUID, body: ExpenseCreate, request: Request, response: Response,
    dispatch: RequestDispatch = Depends(get_dispatch),
):
    """Create an expense; Location points at the new resource."""
    expense = unwrap(await dispatch.send(body.to_command(user_id)))
    response.headers["Location"] = str(request.url_for(
        "get_expense", user_id=str(user_id), expense_id=str(expense.id),
    ))
    return expense


@router.put("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_expense(
    user_id: UUID, expense_id: UUID, body: ExpenseUpdate,
    dispatch: RequestDispatch = Depends(get_dispatch),
):
    """Replace the mutable fields of an owned expense."""
    if not is_empty_id(body.id) and body.id != expense_id:
        raise RouteMismatchError(str(expense_id), str(body.id))
    unwrap(await dispatch.send(body.to_command(user_id, expense_id)))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_expense(
    user_id: UUID, expense_id: UUID,
    dispatch: RequestDispatch = Depends(get_dispatch),
):
    """Physically delete an owned expense."""
    unwrap(await dispatch.send(
        DeleteExpenseCommand(UserId(user_id), ExpenseId(expense_id)),
    ))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
