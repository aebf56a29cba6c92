"""Admin REST API. Every endpoint requires the owner's capability."""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, field_validator
from sqlalchemy.ext.asyncio import AsyncSession

from src.em_access.access_control import AdminCapability
from src.em_admin.application.service import AdminService
from src.em_common.database import get_db_session
from src.em_common.response import ApiResponse, success_response
from src.em_gateway.auth.dependencies import require_owner

router = APIRouter(prefix="/admin", tags=["admin"])
_service = AdminService()


class BlockRequest(BaseModel):
    reason: str = Field(..., min_length=1, max_length=500)


class WithdrawRequest(BaseModel):
    destination: str = Field(..., max_length=64)

    @field_validator("destination")
    @classmethod
    def normalize(cls, v: str) -> str:
        return v.lower()


class MintRequest(BaseModel):
    holder: str = Field(..., pattern=r"^0x[0-9a-fA-F]{40}$")
    amount: int = Field(..., gt=0)

    @field_validator("holder")
    @classmethod
    def normalize(cls, v: str) -> str:
        return v.lower()


@router.post("/sellers/{address}/block")
async def block_seller(
    address: str,
    body: BlockRequest,
    capability: Annotated[AdminCapability, Depends(require_owner)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    return success_response(
        await _service.block_seller(db, capability, address.lower(), body.reason)
    )


@router.delete("/sellers/{address}/block")
async def unblock_seller(
    address: str,
    capability: Annotated[AdminCapability, Depends(require_owner)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    return success_response(await _service.unblock_seller(db, capability, address.lower()))


@router.get("/fees")
async def get_fees(
    capability: Annotated[AdminCapability, Depends(require_owner)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    return success_response(await _service.get_fees(db, capability))


@router.post("/fees/withdraw")
async def withdraw_fees(
    body: WithdrawRequest,
    capability: Annotated[AdminCapability, Depends(require_owner)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    return success_response(await _service.withdraw_fees(db, capability, body.destination))


@router.post("/token/mint")
async def mint(
    body: MintRequest,
    capability: Annotated[AdminCapability, Depends(require_owner)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    return success_response(await _service.mint(db, capability, body.holder, body.amount))


@router.get("/invariants")
async def verify_invariants(
    capability: Annotated[AdminCapability, Depends(require_owner)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    return success_response(await _service.verify_invariants(db, capability))
