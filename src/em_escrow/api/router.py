"""em_escrow REST endpoints. The caller is always the buyer.

POST /products/{product_id}/purchase        — pay into escrow
POST /products/{product_id}/confirm         — release payment to the seller
POST /products/{product_id}/cancel          — refund minus penalty
GET  /products/{product_id}/purchase        — caller's purchase record
GET  /products/{product_id}/seller-contact  — seller contact while paid
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.em_common.database import get_db_session
from src.em_common.errors import PurchaseNotFoundError
from src.em_common.response import ApiResponse, success_response
from src.em_escrow.application.schemas import PurchaseResponse, SellerContactResponse
from src.em_escrow.application.service import EscrowService
from src.em_gateway.auth.dependencies import get_current_user
from src.em_gateway.user.db_models import UserModel

router = APIRouter(prefix="/products", tags=["escrow"])

_service = EscrowService()


def _purchase_response(request: Request, data: PurchaseResponse) -> ApiResponse:
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.post("/{product_id}/purchase")
async def purchase(
    product_id: int,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.purchase(db, product_id, current_user.address)
    return _purchase_response(request, PurchaseResponse.from_domain(result))


@router.post("/{product_id}/confirm")
async def confirm(
    product_id: int,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.confirm(db, product_id, current_user.address)
    return _purchase_response(request, PurchaseResponse.from_domain(result))


@router.post("/{product_id}/cancel")
async def cancel(
    product_id: int,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.cancel(db, product_id, current_user.address)
    return _purchase_response(request, PurchaseResponse.from_domain(result))


@router.get("/{product_id}/purchase")
async def get_purchase(
    product_id: int,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.get_purchase(db, product_id, current_user.address)
    if result is None:
        raise PurchaseNotFoundError(product_id, current_user.address)
    return _purchase_response(request, PurchaseResponse.from_domain(result))


@router.get("/{product_id}/seller-contact")
async def get_seller_contact(
    product_id: int,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    contact = await _service.get_seller_contact(db, product_id, current_user.address)
    resp = success_response(SellerContactResponse.from_domain(contact).model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
