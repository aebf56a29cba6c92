"""em_token REST API — caller's balance, custody approval and journal."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.em_common.database import get_db_session
from src.em_common.response import ApiResponse, success_response
from src.em_gateway.auth.dependencies import get_current_user
from src.em_gateway.user.db_models import UserModel
from src.em_token.application.schemas import (
    ApproveRequest,
    ApproveResponse,
    BalanceResponse,
    LedgerEntryOut,
    LedgerListResponse,
)
from src.em_token.application.service import TokenService

router = APIRouter(prefix="/token", tags=["token"])

_service = TokenService()


@router.get("/balance")
async def get_balance(
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    balance, allowance = await _service.get_balance(db, current_user.address)
    data = BalanceResponse.build(current_user.address, balance, allowance)
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.post("/approve")
async def approve(
    body: ApproveRequest,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    amount = await _service.approve_custody(db, current_user.address, body.amount)
    data = ApproveResponse(
        owner=current_user.address, spender=_service.custody, amount=amount
    )
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/entries")
async def list_entries(
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
    limit: int = Query(20, ge=1, le=100),
    cursor: int | None = Query(None, ge=1),
) -> ApiResponse:
    rows = await _service.list_entries(db, current_user.address, cursor, limit + 1)
    has_more = len(rows) > limit
    items = rows[:limit]
    data = LedgerListResponse(
        items=[LedgerEntryOut.from_domain(e) for e in items],
        next_cursor=items[-1].id if has_more else None,
        has_more=has_more,
    )
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
