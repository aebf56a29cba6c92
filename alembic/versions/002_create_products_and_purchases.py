"""002: create products and purchases tables

Revision ID: 002
Revises: 001
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE products (
            id                 BIGINT      PRIMARY KEY,
            name               TEXT        NOT NULL,
            image_url          TEXT        NOT NULL,
            price              BIGINT      NOT NULL,
            seller             VARCHAR(64) NOT NULL REFERENCES sellers(address),
            seller_name        TEXT        NOT NULL,
            description        TEXT        NOT NULL DEFAULT '',
            inventory          INTEGER     NOT NULL,
            total_sold         INTEGER     NOT NULL DEFAULT 0,
            initial_inventory  INTEGER     NOT NULL,
            created_at         TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_products_price_gt_0         CHECK (price > 0),
            CONSTRAINT ck_products_inventory_gte_0    CHECK (inventory >= 0),
            CONSTRAINT ck_products_total_sold_gte_0   CHECK (total_sold >= 0)
        );
    """)
    op.execute("CREATE INDEX idx_products_seller ON products (seller);")
    op.execute("COMMENT ON TABLE products IS 'amounts in smallest token units (6 decimals)';")

    op.execute("""
        CREATE TABLE purchases (
            product_id  BIGINT      NOT NULL REFERENCES products(id),
            buyer       VARCHAR(64) NOT NULL,
            is_paid     BOOLEAN     NOT NULL DEFAULT FALSE,
            is_sold     BOOLEAN     NOT NULL DEFAULT FALSE,
            canceled    BOOLEAN     NOT NULL DEFAULT FALSE,
            reported    BOOLEAN     NOT NULL DEFAULT FALSE,
            created_at  TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at  TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            PRIMARY KEY (product_id, buyer),
            CONSTRAINT ck_purchases_sold_implies_paid CHECK (NOT is_sold OR is_paid)
        );
    """)
    op.execute("""
        CREATE INDEX idx_purchases_escrowed
            ON purchases (product_id) WHERE is_paid AND NOT is_sold;
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS purchases CASCADE;")
    op.execute("DROP TABLE IF EXISTS products CASCADE;")
