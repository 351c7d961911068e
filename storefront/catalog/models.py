"""
Application-facing catalog and cart shapes.

Built only by the data-access facade; callers treat them as read-only.
"""

from pydantic import BaseModel, Field


class ProductSize(BaseModel):
    """A purchasable size variant of a product."""

    label: str
    price: float
    id: str | None = None


class Product(BaseModel):
    """Catalog product."""

    id: str
    name: str
    handle: str | None = None
    category: str  # 'skincare' | 'haircare' | 'coming-soon' | store tag
    price: float | None = None  # None while a price is still to be announced
    weight: str | None = None
    volume: str | None = None
    badge: str = "New"
    description: str = ""
    ingredients: list[str] = Field(default_factory=list)
    usage: str = ""
    storage: str = ""
    packaging: str = ""
    skin_type: str = "All Skin Types"
    image: str = ""
    sizes: list[ProductSize] = Field(default_factory=list)

    @property
    def slug(self) -> str:
        """Name-derived slug, e.g. ``nichema-hair-elixir``."""
        return self.name.lower().replace(" ", "-")

    @property
    def default_variant_id(self) -> str | None:
        return self.sizes[0].id if self.sizes else None


class CartLine(BaseModel):
    """One line of the remote cart with a snapshot of its merchandise."""

    id: str
    quantity: int
    variant_id: str
    variant_title: str
    product_id: str | None = None
    product_title: str
    handle: str | None = None
    image: str = ""
    price: float | None = None
    currency: str | None = None

    @property
    def line_total(self) -> float | None:
        if self.price is None:
            return None
        return self.price * self.quantity


class Cart(BaseModel):
    """Authoritative cart state as last returned by the store."""

    id: str
    checkout_url: str | None = None
    lines: list[CartLine] = Field(default_factory=list)

    @property
    def total_quantity(self) -> int:
        return sum(line.quantity for line in self.lines)

    @property
    def subtotal(self) -> float:
        return sum(line.line_total or 0.0 for line in self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines
