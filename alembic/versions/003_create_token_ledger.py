"""003: create token ledger tables

Revision ID: 003
Revises: 002
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE token_balances (
            holder   VARCHAR(64) PRIMARY KEY,
            balance  BIGINT      NOT NULL DEFAULT 0,
            CONSTRAINT ck_token_balances_gte_0 CHECK (balance >= 0)
        );
    """)
    op.execute("""
        CREATE TABLE token_allowances (
            owner    VARCHAR(64) NOT NULL,
            spender  VARCHAR(64) NOT NULL,
            amount   BIGINT      NOT NULL DEFAULT 0,
            PRIMARY KEY (owner, spender),
            CONSTRAINT ck_token_allowances_gte_0 CHECK (amount >= 0)
        );
    """)
    op.execute("""
        CREATE TABLE token_ledger_entries (
            id             BIGSERIAL   PRIMARY KEY,
            holder         VARCHAR(64) NOT NULL,
            entry_type     VARCHAR(20) NOT NULL,
            amount         BIGINT      NOT NULL,
            balance_after  BIGINT      NOT NULL,
            counterparty   VARCHAR(64),
            created_at     TIMESTAMPTZ NOT NULL DEFAULT NOW()
        );
    """)
    op.execute("CREATE INDEX idx_token_ledger_entries_holder ON token_ledger_entries (holder, id DESC);")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS token_ledger_entries CASCADE;")
    op.execute("DROP TABLE IF EXISTS token_allowances CASCADE;")
    op.execute("DROP TABLE IF EXISTS token_balances CASCADE;")
