"""em_reputation REST endpoints.

POST /products/{product_id}/report  — report a canceled purchase (caller is the buyer)
POST /sellers/{address}/rate        — add one rating point
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.em_common.database import get_db_session
from src.em_common.response import ApiResponse, success_response
from src.em_gateway.auth.dependencies import get_current_user
from src.em_gateway.user.db_models import UserModel
from src.em_reputation.application.schemas import RatingResponse, ReportResponse
from src.em_reputation.application.service import ReputationService

router = APIRouter(tags=["reputation"])

_service = ReputationService()


@router.post("/products/{product_id}/report")
async def report_cancellation(
    product_id: int,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    outcome = await _service.report_cancellation(db, product_id, current_user.address)
    resp = success_response(ReportResponse.from_outcome(outcome).model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.post("/sellers/{address}/rate")
async def rate_seller(
    address: str,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    address = address.lower()
    rating = await _service.rate(db, current_user.address, address)
    resp = success_response(RatingResponse(seller=address, rating=rating).model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
