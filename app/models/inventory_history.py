from sqlalchemy import Column, ForeignKey, Integer, Text

from app.database import Base


class InventoryHistory(Base):
    """
    One recorded stock change of a product.
    change_date is stored as text exactly as written, it is not a timestamp column.
    """
    __tablename__ = "inventory_history"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    product_id = Column(Integer, ForeignKey("products.id"), index=True)
    old_quantity = Column(Integer)
    new_quantity = Column(Integer)
    change_date = Column(Text)
    user_info = Column(Text)
