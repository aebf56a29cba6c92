"""em_catalog REST endpoints.

POST /products               — create a listing (caller is the seller)
GET  /products               — list with id cursor pagination
GET  /products/{product_id}  — product detail
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.em_catalog.application.schemas import (
    CreateProductRequest,
    ProductListResponse,
    ProductResponse,
)
from src.em_catalog.application.service import ProductCatalogService
from src.em_common.database import get_db_session
from src.em_common.errors import ProductNotFoundError
from src.em_common.response import ApiResponse, success_response
from src.em_gateway.auth.dependencies import get_current_user
from src.em_gateway.user.db_models import UserModel

router = APIRouter(prefix="/products", tags=["products"])

_service = ProductCatalogService()


@router.post("", status_code=201)
async def create_product(
    body: CreateProductRequest,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    product = await _service.create_product(
        db,
        current_user.address,
        body.name,
        body.image_url,
        body.price,
        body.description,
        body.inventory,
    )
    resp = success_response(ProductResponse.from_domain(product).model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("")
async def list_products(
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    limit: int = Query(20, ge=1, le=100),
    cursor: int | None = Query(None, ge=0),
) -> ApiResponse:
    # Fetch one extra row to detect has_more
    rows = await _service.list_products(db, cursor, limit + 1)
    has_more = len(rows) > limit
    items = rows[:limit]
    data = ProductListResponse(
        items=[ProductResponse.from_domain(p) for p in items],
        total=await _service.count_products(db),
        next_cursor=items[-1].id if has_more else None,
        has_more=has_more,
    )
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/{product_id}")
async def get_product(
    product_id: int,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    product = await _service.get_product(db, product_id)
    if product is None:
        raise ProductNotFoundError(product_id)
    resp = success_response(ProductResponse.from_domain(product).model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
