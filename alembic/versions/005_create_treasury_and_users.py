"""005: create fee_treasury and users tables

Revision ID: 005
Revises: 004
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "005"
down_revision: Union[str, None] = "004"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE fee_treasury (
            id               INTEGER     PRIMARY KEY,
            accrued          BIGINT      NOT NULL DEFAULT 0,
            total_accrued    BIGINT      NOT NULL DEFAULT 0,
            total_withdrawn  BIGINT      NOT NULL DEFAULT 0,
            updated_at       TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_fee_treasury_singleton       CHECK (id = 1),
            CONSTRAINT ck_fee_treasury_accrued_gte_0   CHECK (accrued >= 0)
        );
    """)
    op.execute("""
        CREATE TABLE users (
            id             VARCHAR(36)  PRIMARY KEY,
            username       VARCHAR(64)  NOT NULL,
            address        VARCHAR(64)  NOT NULL,
            password_hash  VARCHAR(255) NOT NULL,
            is_active      BOOLEAN      NOT NULL DEFAULT TRUE,
            created_at     TIMESTAMPTZ  NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_users_username UNIQUE (username),
            CONSTRAINT uq_users_address  UNIQUE (address)
        );
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS users CASCADE;")
    op.execute("DROP TABLE IF EXISTS fee_treasury CASCADE;")
