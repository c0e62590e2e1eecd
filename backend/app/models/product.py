from sqlalchemy import Boolean, Column, DateTime, Integer, Numeric, String, Text

from app.db import Base


class Product(Base):
    __tablename__ = "products"

    # column names follow the existing `products` table (imageUrl, isActive, ...)
    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    name = Column(String(255), nullable=False)
    sku = Column(String(255), unique=True, index=True, nullable=False)
    brand = Column(String(255), nullable=False)
    price = Column(Numeric(10, 2), nullable=True)
    description = Column(Text, nullable=True)
    image_url = Column("imageUrl", String(255), nullable=True)
    category = Column(String(255), nullable=True)
    is_active = Column("isActive", Boolean, default=True, nullable=False)
    created_at = Column("createdAt", DateTime, nullable=False)
    updated_at = Column("updatedAt", DateTime, nullable=False)

    def __repr__(self):
        return f"<Product id={self.id} sku={self.sku} name={self.name}>"
