"""DB helpers for the escrow_events outbox.

write_event is called by services within their transaction; the row is only
visible once that transaction commits.
"""
import json

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.em_events.domain.events import DomainEvent, StoredEvent

_INSERT_EVENT_SQL = text("""
    INSERT INTO escrow_events (event_type, subject, payload)
    VALUES (:event_type, :subject, :payload)
""")

_LIST_EVENTS_SQL = text("""
    SELECT id, event_type, subject, payload
    FROM escrow_events
    WHERE id > :after_id
      AND (CAST(:event_type AS TEXT) IS NULL OR event_type = CAST(:event_type AS TEXT))
      AND (CAST(:subject AS TEXT) IS NULL OR subject = CAST(:subject AS TEXT))
    ORDER BY id ASC
    LIMIT :limit
""")


async def write_event(event: DomainEvent, db: AsyncSession) -> None:
    """Insert one row into escrow_events within the caller's transaction."""
    await db.execute(
        _INSERT_EVENT_SQL,
        {
            "event_type": event.event_type.value,
            "subject": event.subject,
            "payload": json.dumps(event.payload),
        },
    )


async def list_events(
    db: AsyncSession,
    after_id: int = 0,
    limit: int = 100,
    event_type: str | None = None,
    subject: str | None = None,
) -> list[StoredEvent]:
    rows = (
        await db.execute(
            _LIST_EVENTS_SQL,
            {
                "after_id": after_id,
                "event_type": event_type,
                "subject": subject,
                "limit": limit,
            },
        )
    ).fetchall()
    return [
        StoredEvent(
            id=row.id,
            event_type=row.event_type,
            subject=row.subject,
            payload=json.loads(row.payload),
        )
        for row in rows
    ]
