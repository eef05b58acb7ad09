from pydantic import BaseModel
from typing import List, Optional


class InventoryHistoryResponse(BaseModel):
    """Schema for a recorded stock change"""
    id: int
    product_id: Optional[int] = None
    old_quantity: Optional[int] = None
    new_quantity: Optional[int] = None
    change_date: Optional[str] = None
    user_info: Optional[str] = None

    class Config:
        from_attributes = True


class InventoryHistoryListResponse(BaseModel):
    history: List[InventoryHistoryResponse]
