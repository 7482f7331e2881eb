from sqlalchemy import Column, Float, Integer, String, Text

from shop_catalog.db.database import Base


class Product(Base):
    __tablename__ = "products"
    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(String, index=True, nullable=False)  # gid из API, повторный импорт даёт дубли
    title = Column(String, nullable=False)
    vendor = Column(String, nullable=False, default="")
    description = Column(Text, nullable=True)
    image = Column(String, nullable=True)  # src первой картинки
    price = Column(Float, nullable=False, default=0.0)

    def __repr__(self) -> str:
        return f"<Product id={self.id} product_id={self.product_id!r} title={self.title!r}>"
