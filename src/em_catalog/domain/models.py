"""Domain models for em_catalog — pure dataclasses, no business logic."""

from dataclasses import dataclass


@dataclass
class Product:
    id: int                  # sequential from 1, immutable
    name: str
    image_url: str
    price: int               # smallest token units, > 0
    seller: str
    seller_name: str         # seller display name at listing time
    description: str
    inventory: int
    total_sold: int = 0
    initial_inventory: int = 0
