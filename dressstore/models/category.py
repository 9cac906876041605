"""
DressStore Backend: Category SQLAlchemy Model
===============================================

Table of category labels. Products refer to categories by name only
(`Product.category`); there is no relationship or referential check.
"""

import uuid
from typing import Optional

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from dressstore.database import Base


class Category(Base):
    __tablename__ = "categories"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name='{self.name}')>"
