"""Pydantic schemas for em_catalog API requests/responses.

Cursor for product lists is the last product id of the page (ids are
sequential), passed back verbatim as an integer.
"""

from pydantic import BaseModel, Field

from src.em_catalog.domain.models import Product
from src.em_common.units import units_to_display


class CreateProductRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    image_url: str = Field(..., min_length=1, max_length=2048)
    price: int = Field(..., gt=0, description="Price in smallest token units")
    description: str = Field("", max_length=4000)
    inventory: int = Field(..., gt=0)


class ProductResponse(BaseModel):
    id: int
    name: str
    image_url: str
    price: int
    price_display: str
    seller: str
    seller_name: str
    description: str
    inventory: int
    total_sold: int

    @classmethod
    def from_domain(cls, p: Product) -> "ProductResponse":
        return cls(
            id=p.id,
            name=p.name,
            image_url=p.image_url,
            price=p.price,
            price_display=units_to_display(p.price),
            seller=p.seller,
            seller_name=p.seller_name,
            description=p.description,
            inventory=p.inventory,
            total_sold=p.total_sold,
        )


class ProductListResponse(BaseModel):
    items: list[ProductResponse]
    total: int
    next_cursor: int | None
    has_more: bool
