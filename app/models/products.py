from sqlalchemy import Column, Integer, Text

from app.database import Base


class Products(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(Text, unique=True, nullable=False)
    unit = Column(Text, nullable=True)
    category = Column(Text, nullable=True)
    brand = Column(Text, nullable=True)
    stock = Column(Integer, nullable=False)
    status = Column(Text, nullable=True)
    image = Column(Text, nullable=True)
