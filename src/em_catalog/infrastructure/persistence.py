"""ProductRepository — concrete implementation of ProductRepositoryProtocol.

Product ids are allocated by the caller as count + 1 while holding the
catalog lock; the primary key is the final guard against duplicates.
Inventory moves are conditional UPDATE ... RETURNING statements.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.em_catalog.domain.models import Product
from src.em_common.errors import InternalError

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_PRODUCT_COLUMNS = """
    id, name, image_url, price, seller, seller_name, description,
    inventory, total_sold, initial_inventory
"""

_COUNT_SQL = text("SELECT COUNT(*) FROM products")

_INSERT_SQL = text("""
    INSERT INTO products
        (id, name, image_url, price, seller, seller_name, description,
         inventory, total_sold, initial_inventory)
    VALUES
        (:id, :name, :image_url, :price, :seller, :seller_name, :description,
         :inventory, 0, :inventory)
""")

_GET_SQL = text(f"SELECT {_PRODUCT_COLUMNS} FROM products WHERE id = :id")

_LIST_SQL = text(f"""
    SELECT {_PRODUCT_COLUMNS}
    FROM products
    WHERE CAST(:cursor_id AS BIGINT) IS NULL OR id > CAST(:cursor_id AS BIGINT)
    ORDER BY id ASC
    LIMIT :limit
""")

_TAKE_UNIT_SQL = text(f"""
    UPDATE products
    SET inventory = inventory - 1
    WHERE id = :id AND inventory > 0
    RETURNING {_PRODUCT_COLUMNS}
""")

_RESTORE_UNIT_SQL = text(f"""
    UPDATE products
    SET inventory = inventory + 1
    WHERE id = :id
    RETURNING {_PRODUCT_COLUMNS}
""")

_RECORD_SALE_SQL = text(f"""
    UPDATE products
    SET total_sold = total_sold + 1
    WHERE id = :id
    RETURNING {_PRODUCT_COLUMNS}
""")


def _row_to_product(row: object) -> Product:
    return Product(
        id=row.id,  # type: ignore[attr-defined]
        name=row.name,  # type: ignore[attr-defined]
        image_url=row.image_url,  # type: ignore[attr-defined]
        price=row.price,  # type: ignore[attr-defined]
        seller=row.seller,  # type: ignore[attr-defined]
        seller_name=row.seller_name,  # type: ignore[attr-defined]
        description=row.description,  # type: ignore[attr-defined]
        inventory=row.inventory,  # type: ignore[attr-defined]
        total_sold=row.total_sold,  # type: ignore[attr-defined]
        initial_inventory=row.initial_inventory,  # type: ignore[attr-defined]
    )


class ProductRepository:
    async def count_products(self, db: AsyncSession) -> int:
        return int((await db.execute(_COUNT_SQL)).scalar_one())

    async def insert_product(self, db: AsyncSession, product: Product) -> None:
        await db.execute(
            _INSERT_SQL,
            {
                "id": product.id,
                "name": product.name,
                "image_url": product.image_url,
                "price": product.price,
                "seller": product.seller,
                "seller_name": product.seller_name,
                "description": product.description,
                "inventory": product.inventory,
            },
        )

    async def get_product(self, db: AsyncSession, product_id: int) -> Product | None:
        row = (await db.execute(_GET_SQL, {"id": product_id})).fetchone()
        return _row_to_product(row) if row else None

    async def list_products(
        self, db: AsyncSession, cursor_id: int | None, limit: int
    ) -> list[Product]:
        rows = (
            await db.execute(_LIST_SQL, {"cursor_id": cursor_id, "limit": limit})
        ).fetchall()
        return [_row_to_product(row) for row in rows]

    async def take_one_unit(self, db: AsyncSession, product_id: int) -> Product | None:
        """Decrement inventory; None when the product is out of stock."""
        row = (await db.execute(_TAKE_UNIT_SQL, {"id": product_id})).fetchone()
        return _row_to_product(row) if row else None

    async def restore_one_unit(self, db: AsyncSession, product_id: int) -> Product:
        row = (await db.execute(_RESTORE_UNIT_SQL, {"id": product_id})).fetchone()
        if row is None:
            raise InternalError(f"Product row missing for {product_id}")
        return _row_to_product(row)

    async def record_sale(self, db: AsyncSession, product_id: int) -> Product:
        row = (await db.execute(_RECORD_SALE_SQL, {"id": product_id})).fetchone()
        if row is None:
            raise InternalError(f"Product row missing for {product_id}")
        return _row_to_product(row)
