"""Product model for catalog entries."""

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog.core.database import Base
from catalog.models.base import TimestampMixin

if TYPE_CHECKING:
    from catalog.models.category import Category


class Product(Base, TimestampMixin):
    """Product model representing a catalog entry.

    ``image`` holds the absolute URL of the primary picture and ``images`` the
    ordered gallery URLs; the two are written independently.
    """

    __tablename__ = "products"

    product_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    name: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )
    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    rich_description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    image: Mapped[str] = mapped_column(
        String(1024),
        nullable=False,
        default="",
    )
    images: Mapped[list[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
    )
    brand: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )
    price: Mapped[float | None] = mapped_column(
        Float,
        nullable=True,
    )
    category_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("categories.category_id"),
        nullable=False,
    )
    count_in_stock: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )
    rating: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        default=0,
    )
    num_reviews: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )
    is_featured: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )

    # Relationships (always loaded so responses carry the full category)
    category: Mapped["Category"] = relationship(
        "Category", back_populates="products", lazy="selectin"
    )

    __table_args__ = (
        CheckConstraint("count_in_stock >= 0", name="chk_product_stock_non_negative"),
        Index("idx_products_category", "category_id"),
        Index("idx_products_featured", "is_featured"),
    )
