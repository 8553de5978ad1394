"""Category model referenced by products."""

import uuid
from typing import TYPE_CHECKING, List

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog.core.database import Base

if TYPE_CHECKING:
    from catalog.models.product import Product


class Category(Base):
    """Category a product belongs to."""

    __tablename__ = "categories"

    category_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    icon: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )
    color: Mapped[str | None] = mapped_column(
        String(50),
        nullable=True,
    )

    # Relationships
    products: Mapped[List["Product"]] = relationship(
        "Product", back_populates="category"
    )
