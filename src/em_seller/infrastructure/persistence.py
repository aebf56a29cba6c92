"""SellerRepository — concrete implementation of SellerRepositoryProtocol.

Counter updates are single UPDATE ... RETURNING statements so concurrent
escrow outcomes for the same seller never lose an increment.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.em_common.enums import SellerCounter
from src.em_common.errors import InternalError
from src.em_seller.domain.models import BlockedSeller, Seller, SellerContact

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_SELLER_COLUMNS = """
    address, name, profile_uri,
    confirmed_purchases, canceled_purchases, reported_purchases, rating
"""

_GET_SELLER_SQL = text(f"SELECT {_SELLER_COLUMNS} FROM sellers WHERE address = :address")

_INSERT_SELLER_SQL = text("""
    INSERT INTO sellers (address, name, profile_uri)
    VALUES (:address, :name, :profile_uri)
""")

_INSERT_CONTACT_SQL = text("""
    INSERT INTO seller_contacts (address, location, phone)
    VALUES (:address, :location, :phone)
""")

_GET_CONTACT_SQL = text(
    "SELECT address, location, phone FROM seller_contacts WHERE address = :address"
)

_GET_BLOCKED_SQL = text(
    "SELECT address, reason FROM blocked_sellers WHERE address = :address"
)

_INSERT_BLOCKED_SQL = text(
    "INSERT INTO blocked_sellers (address, reason) VALUES (:address, :reason)"
)

_DELETE_BLOCKED_SQL = text(
    "DELETE FROM blocked_sellers WHERE address = :address RETURNING address"
)

_INCREMENT_SQL = {
    counter: text(f"""
        UPDATE sellers
        SET {column} = {column} + 1
        WHERE address = :address
        RETURNING {_SELLER_COLUMNS}
    """)
    for counter, column in (
        (SellerCounter.CONFIRMED, "confirmed_purchases"),
        (SellerCounter.CANCELED, "canceled_purchases"),
        (SellerCounter.REPORTED, "reported_purchases"),
    )
}

# One rating slot per confirmed purchase, shared by all raters
_INCREMENT_RATING_SQL = text("""
    UPDATE sellers
    SET rating = rating + 1
    WHERE address = :address AND rating < confirmed_purchases
    RETURNING rating
""")


def _row_to_seller(row: object) -> Seller:
    return Seller(
        address=row.address,  # type: ignore[attr-defined]
        name=row.name,  # type: ignore[attr-defined]
        profile_uri=row.profile_uri,  # type: ignore[attr-defined]
        confirmed_purchases=row.confirmed_purchases,  # type: ignore[attr-defined]
        canceled_purchases=row.canceled_purchases,  # type: ignore[attr-defined]
        reported_purchases=row.reported_purchases,  # type: ignore[attr-defined]
        rating=row.rating,  # type: ignore[attr-defined]
    )


class SellerRepository:
    async def get_seller(self, db: AsyncSession, address: str) -> Seller | None:
        row = (await db.execute(_GET_SELLER_SQL, {"address": address})).fetchone()
        return _row_to_seller(row) if row else None

    async def insert_seller(
        self, db: AsyncSession, seller: Seller, contact: SellerContact
    ) -> None:
        await db.execute(
            _INSERT_SELLER_SQL,
            {"address": seller.address, "name": seller.name, "profile_uri": seller.profile_uri},
        )
        await db.execute(
            _INSERT_CONTACT_SQL,
            {"address": contact.address, "location": contact.location, "phone": contact.phone},
        )

    async def get_contact(self, db: AsyncSession, address: str) -> SellerContact | None:
        row = (await db.execute(_GET_CONTACT_SQL, {"address": address})).fetchone()
        if row is None:
            return None
        return SellerContact(address=row.address, location=row.location, phone=row.phone)

    async def get_blocked(self, db: AsyncSession, address: str) -> BlockedSeller | None:
        row = (await db.execute(_GET_BLOCKED_SQL, {"address": address})).fetchone()
        if row is None:
            return None
        return BlockedSeller(address=row.address, reason=row.reason)

    async def insert_blocked(self, db: AsyncSession, address: str, reason: str) -> None:
        await db.execute(_INSERT_BLOCKED_SQL, {"address": address, "reason": reason})

    async def delete_blocked(self, db: AsyncSession, address: str) -> bool:
        row = (await db.execute(_DELETE_BLOCKED_SQL, {"address": address})).fetchone()
        return row is not None

    async def increment_counter(
        self, db: AsyncSession, address: str, counter: SellerCounter
    ) -> Seller:
        row = (await db.execute(_INCREMENT_SQL[counter], {"address": address})).fetchone()
        if row is None:
            raise InternalError(f"Seller row missing for {address}")
        return _row_to_seller(row)

    async def increment_rating(self, db: AsyncSession, address: str) -> int | None:
        """Return the new rating, or None when no rating slot is left."""
        row = (await db.execute(_INCREMENT_RATING_SQL, {"address": address})).fetchone()
        return row.rating if row else None
