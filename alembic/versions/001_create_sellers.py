"""001: create seller registry tables

Revision ID: 001
Revises: 
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE sellers (
            address              VARCHAR(64) PRIMARY KEY,
            name                 TEXT        NOT NULL,
            profile_uri          TEXT        NOT NULL,
            confirmed_purchases  INTEGER     NOT NULL DEFAULT 0,
            canceled_purchases   INTEGER     NOT NULL DEFAULT 0,
            reported_purchases   INTEGER     NOT NULL DEFAULT 0,
            rating               INTEGER     NOT NULL DEFAULT 0,
            created_at           TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_sellers_confirmed_gte_0      CHECK (confirmed_purchases >= 0),
            CONSTRAINT ck_sellers_canceled_gte_0       CHECK (canceled_purchases >= 0),
            CONSTRAINT ck_sellers_reported_gte_0       CHECK (reported_purchases >= 0),
            CONSTRAINT ck_sellers_rating_lte_confirmed CHECK (rating <= confirmed_purchases)
        );
    """)
    op.execute("""
        CREATE TABLE seller_contacts (
            address   VARCHAR(64) PRIMARY KEY REFERENCES sellers(address),
            location  TEXT        NOT NULL,
            phone     VARCHAR(64) NOT NULL
        );
    """)
    op.execute("""
        CREATE TABLE blocked_sellers (
            address     VARCHAR(64) PRIMARY KEY REFERENCES sellers(address),
            reason      TEXT        NOT NULL,
            blocked_at  TIMESTAMPTZ NOT NULL DEFAULT NOW()
        );
    """)
    op.execute("COMMENT ON TABLE blocked_sellers IS 'row exists exactly while the seller is blocked';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS blocked_sellers CASCADE;")
    op.execute("DROP TABLE IF EXISTS seller_contacts CASCADE;")
    op.execute("DROP TABLE IF EXISTS sellers CASCADE;")
