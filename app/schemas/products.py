from pydantic import BaseModel, Field
from typing import Any, List, Optional


class ProductBase(BaseModel):
    name: str = Field(
        ...,
        description="Product name, unique across all products",
        examples=["Widget", "Gadget"]
    )
    unit: Optional[str] = Field(None, description="Unit of measure", examples=["ea", "kg"])
    category: Optional[str] = Field(None, examples=["Hardware"])
    brand: Optional[str] = Field(None, examples=["Acme"])
    stock: int = Field(..., description="Quantity currently in stock", examples=[10, 5])
    status: Optional[str] = Field(None, examples=["active"])


class ProductCreate(ProductBase):
    image: Optional[str] = Field(None, description="Image reference (URL or path)")

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Widget",
                "unit": "ea",
                "category": "Hardware",
                "brand": "Acme",
                "stock": 10,
                "status": "active",
                "image": None
            }
        }


class ProductImportItem(ProductCreate):
    """A single record of an import payload. Unknown keys such as an exported id are ignored."""
    pass


class ProductUpdate(BaseModel):
    """
    Full replacement of the editable fields.
    Every key must be sent, optional columns may be null.
    """
    name: str = Field(...)
    unit: Optional[str] = Field(...)
    category: Optional[str] = Field(...)
    brand: Optional[str] = Field(...)
    stock: int = Field(...)
    status: Optional[str] = Field(...)
    user_info: Optional[str] = Field(
        None,
        description="Who made the change, recorded in the inventory history"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Widget",
                "unit": "ea",
                "category": "Hardware",
                "brand": "Acme",
                "stock": 25,
                "status": "active",
                "user_info": "warehouse@acme.test"
            }
        }


class ProductResponse(ProductCreate):
    id: int

    class Config:
        from_attributes = True


class ProductCreatedResponse(BaseModel):
    message: str
    productId: int


class ProductUpdatedResponse(BaseModel):
    message: str
    updatedId: int
    changes: int


class ProductImportRequest(BaseModel):
    # Records are validated one at a time while importing
    products: List[Any]


class ProductImportResponse(BaseModel):
    message: str
    inserted: int
    skipped: int


class ProductExportResponse(BaseModel):
    products: List[ProductResponse]


class ProductsDeletedResponse(BaseModel):
    message: str
    changes: int
