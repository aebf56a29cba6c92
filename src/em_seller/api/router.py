"""em_seller REST endpoints.

POST /sellers                            — register the caller as a seller
GET  /sellers/{address}                  — seller record
GET  /sellers/{address}/block            — block status
GET  /sellers/{address}/block/detail     — block reason (error if not blocked)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.em_common.database import get_db_session
from src.em_common.errors import SellerNotFoundError
from src.em_common.response import ApiResponse, success_response
from src.em_gateway.auth.dependencies import get_current_user
from src.em_gateway.user.db_models import UserModel
from src.em_seller.application.schemas import (
    BlockedSellerResponse,
    BlockStatusResponse,
    RegisterSellerRequest,
    SellerResponse,
)
from src.em_seller.application.service import SellerRegistryService

router = APIRouter(prefix="/sellers", tags=["sellers"])

_service = SellerRegistryService()


@router.post("", status_code=201)
async def register_seller(
    body: RegisterSellerRequest,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    seller = await _service.register(
        db, current_user.address, body.name, body.profile_uri, body.location, body.phone
    )
    resp = success_response(SellerResponse.from_domain(seller).model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/{address}")
async def get_seller(
    address: str,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    seller = await _service.get_seller(db, address.lower())
    if seller is None:
        raise SellerNotFoundError(address)
    resp = success_response(SellerResponse.from_domain(seller).model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/{address}/block")
async def get_block_status(
    address: str,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    address = address.lower()
    data = BlockStatusResponse(address=address, is_blocked=await _service.is_blocked(db, address))
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/{address}/block/detail")
async def get_block_detail(
    address: str,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    blocked = await _service.get_blocked_detail(db, address.lower())
    resp = success_response(BlockedSellerResponse.from_domain(blocked).model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
