"""004: create escrow_events outbox

Revision ID: 004
Revises: 003
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE escrow_events (
            id          BIGSERIAL   PRIMARY KEY,
            event_type  VARCHAR(40) NOT NULL,
            subject     VARCHAR(64) NOT NULL,
            payload     TEXT        NOT NULL,
            created_at  TIMESTAMPTZ NOT NULL DEFAULT NOW()
        );
    """)
    op.execute("CREATE INDEX idx_escrow_events_subject ON escrow_events (subject, id);")
    op.execute("CREATE INDEX idx_escrow_events_type ON escrow_events (event_type, id);")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS escrow_events CASCADE;")
