"""GET /events — read the notification outbox in id order.

Consumers poll with after_id set to the last id they processed.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from src.em_common.database import get_db_session
from src.em_common.enums import EventType
from src.em_common.response import ApiResponse, success_response
from src.em_events.infrastructure.outbox import list_events
from src.em_gateway.auth.dependencies import get_current_user
from src.em_gateway.user.db_models import UserModel

router = APIRouter(prefix="/events", tags=["events"])


class EventOut(BaseModel):
    id: int
    event_type: str
    subject: str
    payload: dict


@router.get("")
async def get_events(
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    after_id: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    event_type: EventType | None = Query(None),
    subject: str | None = Query(None),
) -> ApiResponse:
    events = await list_events(
        db,
        after_id=after_id,
        limit=limit,
        event_type=event_type.value if event_type else None,
        subject=subject,
    )
    data = [
        EventOut(id=e.id, event_type=e.event_type, subject=e.subject, payload=e.payload).model_dump()
        for e in events
    ]
    resp = success_response(data)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
