# package marker for app.models

# Import all models to ensure they are registered on the metadata
from app.models.products import Products
from app.models.inventory_history import InventoryHistory

__all__ = [
    "Products",
    "InventoryHistory"
]
