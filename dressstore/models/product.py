"""
DressStore Backend: Product SQLAlchemy Model
==============================================

What:  ORM model representing the `products` table.
Why:   Declares the stored shape of a Product: which fields are required,
       their types and defaults. The database enforces it at write time.
Who:   Used by ProductService for CRUD and by the seed routine.

Column rules:
    - id: UUID assigned on insert, never changed afterwards
    - name: required (NOT NULL); non-empty is checked by the input schema
    - description: optional
    - price: required number
    - quantity: defaults to 1 when omitted
    - category: optional free-text label, no foreign key to `categories`
    - created_at: insertion timestamp, defines list order
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Float, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from dressstore.database import Base


class Product(Base):
    """A product in the store catalogue."""

    __tablename__ = "products"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True, default=None)

    price: Mapped[float] = mapped_column(Float, nullable=False)

    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True, default=None)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Exact-match name filter on GET /product?name=
    __table_args__ = (
        Index("idx_products_name", "name"),
    )

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, name='{self.name}', price={self.price})>"
